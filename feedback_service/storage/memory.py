"""In-process feedback storage, used for development and tests."""

import threading
import uuid
from datetime import datetime
from typing import Callable

from feedback_service.core.ids import new_feedback_id
from feedback_service.core.logging import get_logger
from feedback_service.services.schemas import Feedback, FeedbackInput
from feedback_service.storage.base import utcnow

log = get_logger("storage.memory")


def _order(fb: Feedback):
    return (fb.created_at, fb.id)


class MemoryFeedbackStorage:
    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock
        self.items: dict[uuid.UUID, Feedback] = {}
        self.lock = threading.Lock()

    async def create(self, data: FeedbackInput) -> Feedback:
        now = self.clock()
        fb = Feedback(
            id=new_feedback_id(),
            customer_name=data.customer_name,
            email=data.email,
            feedback_text=data.feedback_text,
            source=data.source,
            created_at=now,
            updated_at=now,
        )
        with self.lock:
            self.items[fb.id] = fb
        log.info(f"Saved feedback id={fb.id}")
        return fb

    async def get_by_id(self, feedback_id: uuid.UUID) -> Feedback | None:
        with self.lock:
            return self.items.get(feedback_id)

    async def get_all(self) -> list[Feedback]:
        with self.lock:
            return sorted(self.items.values(), key=_order)

    async def get_page(
        self, limit: int, cursor: uuid.UUID | None = None
    ) -> tuple[list[Feedback], uuid.UUID | None]:
        with self.lock:
            ordered = sorted(self.items.values(), key=_order)
            if cursor is not None:
                anchor = self.items.get(cursor)
                if anchor is None:
                    return [], None
                ordered = [fb for fb in ordered if _order(fb) > _order(anchor)]

        page = ordered[:limit]
        return page, (page[-1].id if page else None)

    async def close(self) -> None:
        return None
