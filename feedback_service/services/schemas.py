"""
Feedback schemas shared by storage, services and the HTTP layer.
Field names are snake_case in Python and camelCase on the wire.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Camel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FeedbackInput(_Camel):
    customer_name: str
    email: str
    feedback_text: str
    source: str


class Feedback(_Camel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True, frozen=True
    )

    id: uuid.UUID
    customer_name: str
    email: str
    feedback_text: str
    source: str
    created_at: datetime
    updated_at: datetime

    def message(self) -> dict:
        """Copy published to the broker; timestamps are left out."""
        return {
            "id": str(self.id),
            "customerName": self.customer_name,
            "email": self.email,
            "feedbackText": self.feedback_text,
            "source": self.source,
        }
