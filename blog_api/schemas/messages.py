"""
Client-facing wording for request validation errors

Constraint failures reported by pydantic are looked up by (field, error type).
Field validators raise `invalid_field` errors that already carry the final text.
"""
from typing import Dict, Sequence, Tuple

from pydantic_core import PydanticCustomError

INVALID_FIELD = "invalid_field"

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6
NAME_MAX_LENGTH = 50
TITLE_MAX_LENGTH = 255

USERNAME_LENGTH = f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
PASSWORD_STRENGTH = "Password must contain at least one uppercase letter, one lowercase letter, and one number"
STATUS_ERROR = "Status must be one of: draft, published, archived"
TAGS_BLANK = "Tags cannot be empty"

FIELD_MESSAGES: Dict[Tuple[str, str], str] = {
    ("username", "missing"): "Username is required",
    ("username", "string_too_short"): USERNAME_LENGTH,
    ("username", "string_too_long"): USERNAME_LENGTH,
    ("username", "string_pattern_mismatch"): "Username can only contain letters, numbers, and underscores",
    ("email", "missing"): "Email is required",
    ("email", "value_error"): "Please provide a valid email address",
    ("password", "missing"): "Password is required",
    ("password", "string_too_short"): f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
    ("firstName", "string_too_long"): f"First name cannot exceed {NAME_MAX_LENGTH} characters",
    ("lastName", "string_too_long"): f"Last name cannot exceed {NAME_MAX_LENGTH} characters",
    ("title", "missing"): "Title is required",
    ("title", "string_too_long"): f"Title cannot exceed {TITLE_MAX_LENGTH} characters",
    ("content", "missing"): "Content is required",
    ("status", "enum"): STATUS_ERROR,
}


def invalid_field(message: str) -> PydanticCustomError:
    """Error for a field validator; the message reaches the client unchanged"""
    return PydanticCustomError(INVALID_FIELD, message)


def describe_error(loc: Sequence, error_type: str, msg: str) -> str:
    """
    One client-facing line for a pydantic error

    `loc` is relative to the body or query string, e.g. ("username",) or ("tags", 0).
    """
    if error_type == INVALID_FIELD:
        return msg
    if len(loc) == 1:
        message = FIELD_MESSAGES.get((str(loc[0]), error_type))
        if message:
            return message
    location = ".".join(str(part) for part in loc)
    return f"{location}: {msg}" if location else msg
