from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError
from rolodex.core.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_FIELD,
    MAX_PAGE_SIZE,
    PROFILE_SORT_FIELDS,
)
from rolodex.domain.schemas.base import CamelModel
from rolodex.domain.schemas.validators import validate_email_shape, validate_name


class ProfileCreateRequest(BaseModel):
    """
    Represents a request to create a profile.

    Attributes:
        name (str): Non-empty display name.
        email (str): A syntactically valid email address.
        phone (str | None): Optional phone number.
    """

    name: Annotated[str, AfterValidator(validate_name)] = Field(default="", validate_default=True)
    email: Annotated[str, AfterValidator(validate_email_shape)] = Field(default="", validate_default=True)
    phone: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    """
    Represents a partial profile update.

    Only the fields present in the payload are replaced, and each present
    field is held to the same rules as on creation. Unknown fields are ignored.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: Optional[str]) -> str:
        if value is None:
            raise PydanticCustomError("name_required", "Name is required")
        return validate_name(value)

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: Optional[str]) -> str:
        if value is None:
            raise PydanticCustomError("invalid_email", "Invalid Email")
        return validate_email_shape(value)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ProfileResponse(CamelModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProfileListQuery(BaseModel):
    """
    Paging and ordering options of the profile listing.

    Attributes:
        page (int): 1-based page number.
        limit (int): Page size, at most 100. ``0`` means the default size.
        sort_by (str): Public field name to order by (``sortBy``). Unknown names order by the default field.
        sort_order (str): ``desc`` for descending, anything else is ascending (``sortOrder``).
    """

    model_config = ConfigDict(populate_by_name=True)

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE
    sort_by: str = Field(default=DEFAULT_SORT_FIELD, alias="sortBy")
    sort_order: str = Field(default="asc", alias="sortOrder")

    @field_validator("page", mode="wrap")
    @classmethod
    def _validate_page(cls, value: Any, handler) -> int:
        try:
            page = handler(value)
        except ValidationError:
            page = None

        if page is None or page < 1:
            raise PydanticCustomError("invalid_page", "Page must be a positive integer")

        return page

    @field_validator("limit", mode="wrap")
    @classmethod
    def _validate_limit(cls, value: Any, handler) -> int:
        try:
            limit = handler(value)
        except ValidationError:
            limit = None

        if limit is None or not 0 <= limit <= MAX_PAGE_SIZE:
            raise PydanticCustomError(
                "invalid_limit",
                "Limit must be a positive integer <= {max_page_size}",
                {"max_page_size": MAX_PAGE_SIZE},
            )

        return limit or DEFAULT_PAGE_SIZE

    @field_validator("sort_by")
    @classmethod
    def _validate_sort_by(cls, value: str) -> str:
        return value if value in PROFILE_SORT_FIELDS else DEFAULT_SORT_FIELD

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def sort_field(self) -> str:
        return PROFILE_SORT_FIELDS[self.sort_by]

    @property
    def descending(self) -> bool:
        return self.sort_order == "desc"
