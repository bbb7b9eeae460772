from typing import Any

from learnhub.core.modules.user.validators import validate_email, validate_name

EDITABLE_FIELDS = ("first_name", "last_name", "email", "bio")


def normalize_profile_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Validate profile values, dropping keys that are not editable or are None.

    Raises:
        ValidationError: If a name is blank or the email is malformed
    """
    result: dict[str, Any] = {}
    for key in EDITABLE_FIELDS:
        value = fields.get(key)
        if value is None:
            continue
        if key in ("first_name", "last_name"):
            value = validate_name(value)
        elif key == "email":
            value = validate_email(value)
        result[key] = value
    return result
