import uuid
from datetime import datetime
from typing import Protocol

from feedback_service.services.schemas import Feedback, FeedbackInput


class FeedbackStorage(Protocol):
    """Durable ordered table of feedback keyed by id with a created-at index."""

    async def create(self, data: FeedbackInput) -> Feedback: ...

    async def get_by_id(self, feedback_id: uuid.UUID) -> Feedback | None: ...

    async def get_all(self) -> list[Feedback]: ...

    async def get_page(
        self, limit: int, cursor: uuid.UUID | None = None
    ) -> tuple[list[Feedback], uuid.UUID | None]: ...

    async def close(self) -> None: ...


def utcnow() -> datetime:
    return datetime.utcnow()
