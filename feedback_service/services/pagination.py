"""
Forward-only cursor pagination over the feedback collection.

Records are ordered by (created_at, id). A cursor is the id of the last
record of the previous page; the next page starts strictly after it.
"""

import uuid
from dataclasses import dataclass, field

from feedback_service.core.errors import InvalidParameter
from feedback_service.core.ids import parse_id
from feedback_service.core.logging import get_logger
from feedback_service.services.schemas import Feedback
from feedback_service.storage.base import FeedbackStorage

log = get_logger("pagination")

LIMIT_PARAM = "limit"
NEXT_PARAM = "next"


@dataclass
class Page:
    items: list[Feedback] = field(default_factory=list)
    next_cursor: uuid.UUID | None = None

    @property
    def empty(self) -> bool:
        return not self.items


def parse_limit(raw: str | None, default: int = 10, maximum: int = 1000) -> int:
    if raw is None or raw == "":
        return default
    try:
        limit = int(raw)
    except ValueError:
        raise InvalidParameter(f"error while check limit: wrong limit param '{raw}': invalid limit parameter")
    if limit <= 0:
        raise InvalidParameter(f"error while check limit: wrong limit param '{limit} <= 0': invalid limit parameter")
    if limit > maximum:
        raise InvalidParameter(f"error while check limit: wrong limit param '{limit} > {maximum}': invalid limit parameter")
    return limit


def parse_cursor(raw: str | None) -> uuid.UUID | None:
    if raw is None or raw == "":
        return None
    try:
        return parse_id(raw, what="next ID")
    except InvalidParameter:
        raise InvalidParameter(f"error while check next: wrong format of next ID '{raw}': invalid next parameter")


def next_page_url(path: str, limit: int, cursor: uuid.UUID | None) -> str:
    return f"{path}?{LIMIT_PARAM}={limit}&{NEXT_PARAM}={cursor or ''}"


class Paginator:
    def __init__(self, storage: FeedbackStorage, default_limit: int = 10, max_limit: int = 1000):
        self.storage = storage
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def get_page(self, limit: int | None = None, cursor: uuid.UUID | None = None) -> Page:
        if limit is None:
            limit = self.default_limit
        if limit <= 0 or limit > self.max_limit:
            raise InvalidParameter(f"wrong limit param '{limit}' (1..{self.max_limit}): invalid limit parameter")

        items, next_cursor = await self.storage.get_page(limit, cursor)
        log.info(f"Page limit={limit} after={cursor} count={len(items)}")
        return Page(items=items, next_cursor=next_cursor)
