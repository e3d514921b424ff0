from pydantic_core import PydanticCustomError
from rolodex.core.constants import EMAIL_PATTERN, PASSWORD_MIN_LENGTH, USERNAME_MIN_LENGTH


def validate_email_shape(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError("invalid_email", "Invalid Email")
    return value


def validate_username(value: str) -> str:
    if len(value) < USERNAME_MIN_LENGTH:
        raise PydanticCustomError(
            "username_too_short",
            "Username must be at least {min_length} characters",
            {"min_length": USERNAME_MIN_LENGTH},
        )
    return value


def validate_password(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise PydanticCustomError(
            "password_too_short",
            "Password must be at least {min_length} characters",
            {"min_length": PASSWORD_MIN_LENGTH},
        )
    return value


def validate_name(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("name_required", "Name is required")
    return value
