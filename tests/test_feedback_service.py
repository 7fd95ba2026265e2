"""Unit tests for the feedback orchestrator."""

import uuid

import pytest

from feedback_service.core.errors import (
    InvalidParameter,
    NotFound,
    PublishError,
    StorageError,
    ValidationError,
)
from feedback_service.services.feedback import FeedbackService
from feedback_service.services.schemas import FeedbackInput


class FailingBroker:
    def __init__(self):
        self.calls = 0

    async def publish(self, message):
        self.calls += 1
        raise PublishError("broker sending feedback error: unreachable")

    async def close(self):
        return None


class FailingStorage:
    async def create(self, data):
        raise StorageError("failed to create feedback in DB: disk full")

    async def get_all(self):
        raise StorageError("failed to get feedbacks from DB: disk full")


@pytest.fixture
def service(storage, broker):
    return FeedbackService(storage, broker)


@pytest.fixture
def feedback_input():
    return FeedbackInput(
        customer_name="Jane Doe",
        email="jane@example.com",
        feedback_text="Great service",
        source="https://shop.example.com/orders/42",
    )


@pytest.mark.asyncio
async def test_create_then_get_returns_same_fields(service, feedback_input):
    feedback_id = await service.create(feedback_input)

    assert str(uuid.UUID(feedback_id)) == feedback_id
    fb = await service.get_by_id(feedback_id)
    assert fb.customer_name == feedback_input.customer_name
    assert fb.email == feedback_input.email
    assert fb.feedback_text == feedback_input.feedback_text
    assert fb.source == feedback_input.source
    assert fb.created_at is not None
    assert fb.updated_at == fb.created_at


@pytest.mark.asyncio
async def test_create_publishes_without_timestamps(service, broker, feedback_input):
    feedback_id = await service.create(feedback_input)

    assert broker.messages == [
        {
            "id": feedback_id,
            "customerName": "Jane Doe",
            "email": "jane@example.com",
            "feedbackText": "Great service",
            "source": "https://shop.example.com/orders/42",
        }
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field,value", [("email", "not-an-email"), ("source", "not a url")]
)
async def test_invalid_input_has_no_side_effects(service, storage, broker, feedback_input, field, value):
    bad = feedback_input.model_copy(update={field: value})

    with pytest.raises(ValidationError):
        await service.create(bad)

    assert await storage.get_all() == []
    assert broker.messages == []


@pytest.mark.asyncio
async def test_publish_failure_keeps_stored_record(storage, feedback_input):
    failing = FailingBroker()
    service = FeedbackService(storage, failing)

    with pytest.raises(PublishError):
        await service.create(feedback_input)

    assert failing.calls == 1
    stored = await storage.get_all()
    assert len(stored) == 1
    assert stored[0].email == feedback_input.email


@pytest.mark.asyncio
async def test_storage_failure_skips_publish(broker, feedback_input):
    service = FeedbackService(FailingStorage(), broker)

    with pytest.raises(StorageError):
        await service.create(feedback_input)
    assert broker.messages == []

    with pytest.raises(StorageError):
        await service.get_all()


@pytest.mark.asyncio
async def test_get_by_id_malformed(service):
    with pytest.raises(InvalidParameter):
        await service.get_by_id("not-a-uuid")


@pytest.mark.asyncio
async def test_get_by_id_unknown(service):
    with pytest.raises(NotFound):
        await service.get_by_id(str(uuid.uuid4()))


@pytest.mark.asyncio
async def test_get_all_in_creation_order(service, feedback_input):
    ids = [await service.create(feedback_input) for _ in range(4)]

    assert [str(fb.id) for fb in await service.get_all()] == ids
