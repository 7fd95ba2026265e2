import uuid

from feedback_service.core.errors import InvalidParameter


def new_feedback_id() -> uuid.UUID:
    return uuid.uuid4()


def parse_id(raw: str, what: str = "ID") -> uuid.UUID:
    try:
        return uuid.UUID(raw)
    except (ValueError, TypeError, AttributeError):
        raise InvalidParameter(f"can't parse the {what} '{raw}'")

"""
ID utilities & it provides:
- Fresh feedback identifiers (UUID4)
- Parsing of client supplied identifiers and cursors

The main purpose:
Consistent identifier handling across system.
"""
