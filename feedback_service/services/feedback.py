"""
Feedback orchestration and it does:
- Validates submitted feedback before any side effect
- Persists through the storage capability
- Publishes a copy to the broker
- Serves single records and the full ordered collection

And, the main purpose:
Keep create/read rules in one place, independent of HTTP.
"""


from feedback_service.broker.base import Broker
from feedback_service.core.errors import NotFound
from feedback_service.core.ids import parse_id
from feedback_service.core.logging import get_logger
from feedback_service.services.schemas import Feedback, FeedbackInput
from feedback_service.services.validator import validate
from feedback_service.storage.base import FeedbackStorage

log = get_logger("service")


class FeedbackService:
    def __init__(self, storage: FeedbackStorage, broker: Broker):
        self.storage = storage
        self.broker = broker

    async def create(self, data: FeedbackInput) -> str:
        validate(data)

        feedback = await self.storage.create(data)
        # stored-but-not-published is accepted; a PublishError leaves the record in place
        await self.broker.publish(feedback.message())

        log.info(f"Successfully created feedback id={feedback.id}")
        return str(feedback.id)

    async def get_by_id(self, feedback_id: str) -> Feedback:
        fid = parse_id(feedback_id)
        feedback = await self.storage.get_by_id(fid)
        if feedback is None:
            raise NotFound(f"feedback not found for ID '{fid}'")
        return feedback

    async def get_all(self) -> list[Feedback]:
        feedbacks = await self.storage.get_all()
        log.info(f"Returning all feedbacks count={len(feedbacks)}")
        return feedbacks
