# feedback_service/db/repo.py

import uuid

from sqlalchemy import select, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_service.db.models import FeedbackRecord


_ORDER = (FeedbackRecord.created_at, FeedbackRecord.id)


async def add_feedback(db: AsyncSession, fb: FeedbackRecord) -> FeedbackRecord:
    db.add(fb)
    await db.commit()
    await db.refresh(fb)
    return fb


async def get_feedback(db: AsyncSession, feedback_id: uuid.UUID) -> FeedbackRecord | None:
    res = await db.execute(select(FeedbackRecord).where(FeedbackRecord.id == feedback_id))
    return res.scalar_one_or_none()


async def list_feedback(db: AsyncSession) -> list[FeedbackRecord]:
    res = await db.execute(select(FeedbackRecord).order_by(*_ORDER))
    return list(res.scalars().all())


async def page_feedback(
    db: AsyncSession, limit: int, after: uuid.UUID | None = None
) -> list[FeedbackRecord]:
    """
    Returns up to `limit` records ordered by (created_at, id), starting
    strictly after the record `after`.

    An unknown `after` yields an empty list rather than restarting
    from the beginning.
    """
    stmt = select(FeedbackRecord)
    if after is not None:
        anchor = await get_feedback(db, after)
        if anchor is None:
            return []
        stmt = stmt.where(
            or_(
                FeedbackRecord.created_at > anchor.created_at,
                and_(
                    FeedbackRecord.created_at == anchor.created_at,
                    FeedbackRecord.id > anchor.id,
                ),
            )
        )
    res = await db.execute(stmt.order_by(*_ORDER).limit(limit))
    return list(res.scalars().all())
