from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from learnhub.errors import ValidationError

_email_adapter = TypeAdapter(EmailStr)


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - Not empty
    - No whitespace characters

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if not password:
        raise ValidationError("Password must not be empty")

    if any(char.isspace() for char in password):
        raise ValidationError("Password cannot contain whitespace characters")


def validate_email(email: str) -> str:
    """Return the normalized email address.

    Raises:
        ValidationError: If the address is malformed
    """
    try:
        return _email_adapter.validate_python(email)
    except PydanticValidationError as e:
        raise ValidationError(f"'{email}' is not a valid email address") from e


def validate_name(name: str) -> str:
    """Return the stripped display name, rejecting blank values."""
    name = name.strip()
    if not name:
        raise ValidationError("Name must not be empty")
    return name
