"""
SQL backed feedback storage.
What it does:
- Opens one session per operation
- Assigns id and timestamps at creation
- Translates SQLAlchemy failures into StorageError

And, the main purpose:
Durable storage capability on top of SQLAlchemy async.
"""


import uuid
from typing import Callable
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from feedback_service.core.errors import StorageError
from feedback_service.core.ids import new_feedback_id
from feedback_service.core.logging import get_logger
from feedback_service.db.models import FeedbackRecord
from feedback_service.db.repo import add_feedback, get_feedback, list_feedback, page_feedback
from feedback_service.db.session import init_db, make_sessionmaker
from feedback_service.services.schemas import Feedback, FeedbackInput
from feedback_service.storage.base import utcnow

log = get_logger("storage.sql")


class SqlFeedbackStorage:
    def __init__(self, engine: AsyncEngine, clock: Callable[[], datetime] = utcnow):
        self.engine = engine
        self.sessions = make_sessionmaker(engine)
        self.clock = clock

    async def init(self) -> None:
        await init_db(self.engine)
        log.info("Feedback table ready")

    async def create(self, data: FeedbackInput) -> Feedback:
        now = self.clock()
        record = FeedbackRecord(
            id=new_feedback_id(),
            customer_name=data.customer_name,
            email=data.email,
            feedback_text=data.feedback_text,
            source=data.source,
            created_at=now,
            updated_at=now,
        )
        try:
            async with self.sessions() as db:
                record = await add_feedback(db, record)
        except SQLAlchemyError as e:
            log.error(f"Failed to create feedback in DB: {e}")
            raise StorageError(f"failed to create feedback in DB: {e}") from e

        log.info(f"Feedback created id={record.id}")
        return Feedback.model_validate(record)

    async def get_by_id(self, feedback_id: uuid.UUID) -> Feedback | None:
        try:
            async with self.sessions() as db:
                record = await get_feedback(db, feedback_id)
        except SQLAlchemyError as e:
            log.error(f"Failed to get feedback {feedback_id} from DB: {e}")
            raise StorageError(f"failed to get feedback from DB: {e}") from e

        return Feedback.model_validate(record) if record else None

    async def get_all(self) -> list[Feedback]:
        try:
            async with self.sessions() as db:
                records = await list_feedback(db)
        except SQLAlchemyError as e:
            log.error(f"Failed to list feedbacks from DB: {e}")
            raise StorageError(f"failed to get feedbacks from DB: {e}") from e

        log.info(f"Got all feedbacks count={len(records)}")
        return [Feedback.model_validate(r) for r in records]

    async def get_page(
        self, limit: int, cursor: uuid.UUID | None = None
    ) -> tuple[list[Feedback], uuid.UUID | None]:
        try:
            async with self.sessions() as db:
                records = await page_feedback(db, limit, cursor)
        except SQLAlchemyError as e:
            log.error(f"Failed to get feedback page from DB: {e}")
            raise StorageError(f"failed to get feedback page from DB: {e}") from e

        items = [Feedback.model_validate(r) for r in records]
        next_cursor = items[-1].id if items else None
        log.info(f"Got page of feedbacks limit={limit} count={len(items)} cursor={next_cursor}")
        return items, next_cursor

    async def close(self) -> None:
        await self.engine.dispose()
