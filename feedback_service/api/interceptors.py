"""
Request interceptors composed around individual routes.

An interceptor is `async (request, call_next) -> Response`. It either
returns/raises without calling `call_next` (short-circuit) or delegates.
Routes pick their chain through `intercepted_route(...)`, listed outermost
first, so `intercepted_route(gate, cache)` authorizes before touching the
cache.
"""

import json
from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi.routing import APIRoute

from feedback_service.core.errors import CacheError, ServiceError
from feedback_service.core.logging import get_logger

Handler = Callable[[Request], Awaitable[Response]]
Interceptor = Callable[[Request, Handler], Awaitable[Response]]

CACHE_HEADER = "X-Cache"
# not replayed from the cache, the hit response sets its own
_UNCACHED_HEADERS = {"content-length", "content-type", CACHE_HEADER.lower()}

gate_log = get_logger("gate")
cache_log = get_logger("cache")


def compose(handler: Handler, interceptors) -> Handler:
    for interceptor in reversed(interceptors):
        handler = _bind(interceptor, handler)
    return handler


def _bind(interceptor: Interceptor, call_next: Handler) -> Handler:
    async def handler(request: Request) -> Response:
        return await interceptor(request, call_next)
    return handler


class InterceptedRoute(APIRoute):
    interceptors: tuple = ()

    def get_route_handler(self) -> Handler:
        return compose(super().get_route_handler(), self.interceptors)


def intercepted_route(*interceptors: Interceptor) -> type[APIRoute]:
    return type("InterceptedRoute", (InterceptedRoute,), {"interceptors": interceptors})


async def gate(request: Request, call_next: Handler) -> Response:
    authorizer = request.app.state.authorizer
    try:
        claims = authorizer.authorize(request.headers.get("Authorization"), request.method)
    except ServiceError as e:
        gate_log.warning(f"Rejected {request.method} {request.url.path}: {e}")
        raise
    request.state.claims = claims
    return await call_next(request)


def cache_key(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def pack(response: Response) -> bytes:
    headers = {
        k: v for k, v in response.headers.items() if k.lower() not in _UNCACHED_HEADERS
    }
    return json.dumps({"body": response.body.decode("utf-8"), "headers": headers}).encode("utf-8")


def unpack(value: bytes) -> Response:
    entry = json.loads(value)
    response = Response(content=entry["body"], media_type="application/json")
    for name, header_value in entry.get("headers", {}).items():
        response.headers[name] = header_value
    response.headers[CACHE_HEADER] = "Cached"
    return response


async def cache(request: Request, call_next: Handler) -> Response:
    if request.method != "GET":
        return await call_next(request)

    store = request.app.state.cache
    key = cache_key(request)
    try:
        cached = await store.get(key)
    except CacheError as e:
        raise CacheError(f"caching problem: {e}") from e

    if cached is not None:
        cache_log.info(f"Cache hit key={key}")
        return unpack(cached)

    try:
        response = await call_next(request)
    except ServiceError as e:
        e.headers[CACHE_HEADER] = "None"
        raise
    response.headers[CACHE_HEADER] = "None"

    if response.status_code == 200:
        try:
            await store.set(key, pack(response))
        except CacheError as e:
            # the client already has a good response
            cache_log.error(f"Cache set failed key={key}: {e}")
    return response
