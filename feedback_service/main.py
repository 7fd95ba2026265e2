import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from feedback_service.api.routes import gated, gated_cached, public
from feedback_service.auth.tokens import Authorizer, TokenIssuer
from feedback_service.core.config import Settings, settings as default_settings
from feedback_service.core.errors import ServiceError
from feedback_service.core.logging import get_logger
from feedback_service.services.feedback import FeedbackService
from feedback_service.services.pagination import Paginator

log = get_logger("app")


def build_storage(cfg: Settings):
    backend = cfg.STORAGE_BACKEND.lower().strip()
    if backend == "sql":
        from feedback_service.db.session import make_engine
        from feedback_service.storage.sql import SqlFeedbackStorage

        return SqlFeedbackStorage(make_engine(cfg.DATABASE_URL))
    if backend == "memory":
        from feedback_service.storage.memory import MemoryFeedbackStorage

        return MemoryFeedbackStorage()
    raise ValueError(f"Unsupported STORAGE_BACKEND={cfg.STORAGE_BACKEND}. Use sql or memory.")


def build_cache(cfg: Settings):
    backend = cfg.CACHE_BACKEND.lower().strip()
    if backend == "redis":
        from feedback_service.cache.redis_cache import RedisCache

        return RedisCache.from_url(cfg.REDIS_URL, cfg.CACHE_TTL_SECONDS)
    if backend == "memory":
        from feedback_service.cache.memory import MemoryCache

        return MemoryCache(cfg.CACHE_TTL_SECONDS)
    raise ValueError(f"Unsupported CACHE_BACKEND={cfg.CACHE_BACKEND}. Use redis or memory.")


def build_broker(cfg: Settings):
    backend = cfg.BROKER_BACKEND.lower().strip()
    if backend == "sns":
        from feedback_service.broker.sns import SNSBroker

        return SNSBroker(cfg.SNS_TOPIC_ARN, cfg.SNS_REGION)
    if backend == "memory":
        from feedback_service.broker.memory import MemoryBroker

        return MemoryBroker()
    raise ValueError(f"Unsupported BROKER_BACKEND={cfg.BROKER_BACKEND}. Use sns or memory.")


async def service_error_handler(request: Request, exc: ServiceError):
    log.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc}")
    return JSONResponse(
        status_code=exc.status_code, content={"error": str(exc)}, headers=exc.headers or None
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    log.error(f"{request.method} {request.url.path} -> 400: {problems}")
    return JSONResponse(status_code=400, content={"error": f"invalid request: {problems}"})


async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception(f"{request.method} {request.url.path} -> 500")
    return JSONResponse(status_code=500, content={"error": "internal server error"})


def create_app(cfg: Settings | None = None, storage=None, cache=None, broker=None) -> FastAPI:
    """
    Wires capabilities, services and the route table into a FastAPI app.
    Backends not passed in are chosen from settings.
    """
    cfg = cfg or default_settings

    app = FastAPI(title="Feedback Service API", version="0.1.0")

    app.state.storage = storage if storage is not None else build_storage(cfg)
    app.state.cache = cache if cache is not None else build_cache(cfg)
    app.state.broker = broker if broker is not None else build_broker(cfg)

    app.state.token_issuer = TokenIssuer(
        cfg.SECRET, cfg.TOKEN_DEFAULT_MINUTES, cfg.TOKEN_MAX_MINUTES
    )
    app.state.authorizer = Authorizer(cfg.SECRET)
    app.state.feedback_service = FeedbackService(app.state.storage, app.state.broker)
    app.state.paginator = Paginator(app.state.storage, cfg.PAGE_DEFAULT_LIMIT, cfg.PAGE_MAX_LIMIT)

    app.include_router(public)
    app.include_router(gated)
    app.include_router(gated_cached)

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        took_ms = (time.perf_counter() - started) * 1000
        log.info(f"{request.method} {request.url.path} {response.status_code} {took_ms:.1f}ms")
        return response

    @app.on_event("startup")
    async def on_startup():
        init = getattr(app.state.storage, "init", None)
        if init is not None:
            await init()
        for route in app.routes:
            if isinstance(route, APIRoute):
                for method in sorted(route.methods):
                    log.info(f"{method:<5} -> {route.path}")

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.broker.close()
        await app.state.cache.close()
        await app.state.storage.close()
        log.info("Application stopped")

    return app


app = create_app()
