from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import PlainTextResponse

from feedback_service.api.interceptors import cache, gate, intercepted_route
from feedback_service.api.types import CreatedResponse, ErrorResponse
from feedback_service.auth.tokens import TokenIssuer
from feedback_service.core.errors import InvalidParameter
from feedback_service.core.logging import get_logger
from feedback_service.services.feedback import FeedbackService
from feedback_service.services.pagination import (
    Paginator,
    next_page_url,
    parse_cursor,
    parse_limit,
)
from feedback_service.services.schemas import Feedback, FeedbackInput


"""
FastAPI routes of the feedback service.
What it provides:
- Liveness probe and token endpoint (open)
- Feedback create/list endpoints (gated)
- Single feedback and paginated listing (gated, then cached)

And, the main purpose:
The route table: which interceptors wrap which operation.
"""

log = get_logger("handlers")

CURSOR_HEADER = "URL-cursor-next"

GATED_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid parameter or authorization header"},
    401: {"model": ErrorResponse, "description": "Token rejected"},
    500: {"model": ErrorResponse, "description": "Backend failure"},
}

public = APIRouter()
gated = APIRouter(route_class=intercepted_route(gate), responses=GATED_ERRORS)
gated_cached = APIRouter(route_class=intercepted_route(gate, cache), responses=GATED_ERRORS)


def get_feedback_service(request: Request) -> FeedbackService:
    return request.app.state.feedback_service


def get_paginator(request: Request) -> Paginator:
    return request.app.state.paginator


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


@public.get("/status", response_class=PlainTextResponse)
async def api_status():
    log.info("Hit status endpoint")
    return "Ok"


@public.get(
    "/token", response_class=PlainTextResponse, responses={400: {"model": ErrorResponse}}
)
async def api_token(
    minutes: str | None = None,
    role: str | None = None,
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    ttl = issuer.parse_minutes(minutes)
    role = issuer.parse_role(role)
    token = issuer.issue(ttl, role)
    log.info(f"Issued token role={role} minutes={ttl}")
    return f"Bearer {token}"


@gated.post("/feedback", status_code=201, response_model=CreatedResponse)
async def api_create_feedback(
    data: FeedbackInput, service: FeedbackService = Depends(get_feedback_service)
):
    feedback_id = await service.create(data)
    return {"id": feedback_id}


@gated.get("/feedbacks", response_model=list[Feedback])
async def api_get_all_feedback(service: FeedbackService = Depends(get_feedback_service)):
    return await service.get_all()


@gated_cached.get("/feedback/")
async def api_get_feedback_missing_id():
    raise InvalidParameter("id parameter is missing")


@gated_cached.get(
    "/feedback/{feedback_id}", response_model=Feedback, responses={404: {"model": ErrorResponse}}
)
async def api_get_feedback(
    feedback_id: str, service: FeedbackService = Depends(get_feedback_service)
):
    return await service.get_by_id(feedback_id)


@gated_cached.get("/p-feedbacks", response_model=list[Feedback])
async def api_get_page(
    request: Request,
    response: Response,
    limit: str | None = None,
    next_id: str | None = Query(None, alias="next"),
    paginator: Paginator = Depends(get_paginator),
):
    page_limit = parse_limit(limit, paginator.default_limit, paginator.max_limit)
    cursor = parse_cursor(next_id)

    page = await paginator.get_page(page_limit, cursor)
    if page.empty:
        raise InvalidParameter(f"next '{next_id or ''}': no values after 'next'")

    response.headers[CURSOR_HEADER] = next_page_url(request.url.path, page_limit, page.next_cursor)
    return page.items
