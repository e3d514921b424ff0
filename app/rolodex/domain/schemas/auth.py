from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field
from rolodex.domain.schemas.base import CamelModel
from rolodex.domain.schemas.validators import validate_email_shape, validate_password, validate_username


class AuthRegisterRequest(BaseModel):
    """
    Represents a request to register a new account.

    Missing fields are treated as empty strings so that they are reported
    with the same messages as too-short values.

    Attributes:
        username (str): At least 5 characters, unique.
        email (str): A syntactically valid email address, unique.
        password (str): At least 8 characters.
    """

    username: Annotated[str, AfterValidator(validate_username)] = Field(default="", validate_default=True)
    email: Annotated[str, AfterValidator(validate_email_shape)] = Field(default="", validate_default=True)
    password: Annotated[str, AfterValidator(validate_password)] = Field(default="", validate_default=True)


class AuthLoginRequest(BaseModel):
    """
    Represents a request to exchange credentials for an access token.
    """

    username: str = ""
    password: str = ""


class AuthRegisterResponse(CamelModel):
    message: str = "User registered successfully"
    user_id: str = Field(..., description="Identifier of the new account")


class AuthLoginResponse(CamelModel):
    access_token: str = Field(..., description="Signed bearer token valid for one hour")


class TokenIdentity(CamelModel):
    """
    The identity carried by a verified access token.

    Attributes:
        user_id (str): Account identifier (``userId`` claim).
        username (str): Account username (``username`` claim).
    """

    user_id: str
    username: str


class AuthSessionState(TokenIdentity):
    """The authenticated caller attached to a request."""
