from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rolodex.core.exceptions import errors

ModelType = TypeVar("ModelType", bound=BaseModel)


def format_validation_errors(error: PydanticValidationError, location: str | None = None) -> list[dict[str, Any]]:
    """Flatten pydantic errors into ``{field, message, location}`` entries."""

    return [
        {
            "field": ".".join(str(part) for part in item["loc"]) or None,
            "message": item["msg"],
            "location": location,
        }
        for item in error.errors()
    ]


def validate_payload(model: type[ModelType], payload: dict[str, Any], location: str | None = None) -> ModelType:
    """
    Validate ``payload`` against ``model``.

    Raises:
        ValidationError: listing every violated rule
    """

    try:
        return model.model_validate(payload)
    except PydanticValidationError as error:
        raise errors.ValidationError(errors=format_validation_errors(error, location)) from error
