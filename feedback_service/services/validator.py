from pydantic import AnyUrl, EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from feedback_service.core.errors import ValidationError
from feedback_service.services.schemas import FeedbackInput

_email = TypeAdapter(EmailStr)
_url = TypeAdapter(AnyUrl)


def validate(feedback: FeedbackInput) -> None:
    """Raises ValidationError unless email and source are well formed."""
    try:
        _email.validate_python(feedback.email)
    except PydanticValidationError:
        raise ValidationError(f"invalid email address '{feedback.email}'")

    try:
        url = _url.validate_python(feedback.source)
    except PydanticValidationError:
        raise ValidationError(f"invalid source URL '{feedback.source}'")
    # absolute: scheme + host
    if not url.host:
        raise ValidationError(f"invalid source URL '{feedback.source}'")
