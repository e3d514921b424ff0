from datetime import UTC, datetime, timedelta

import jwt
from jwt import ExpiredSignatureError, InvalidSignatureError, PyJWTError
from pydantic import ValidationError
from rolodex.core.exceptions import errors
from rolodex.core.logging import get_logger
from rolodex.domain.schemas import TokenIdentity

logger = get_logger(__name__)


class TokenService:
    """
    Issues and verifies the stateless bearer tokens handed out at login.

    Tokens are JWTs carrying ``userId`` and ``username`` next to the standard
    ``iat`` and ``exp`` claims. Nothing is persisted, so there is no revocation.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", max_age: int = 3600):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.max_age = max_age

    def issue(self, *, user_id: str, username: str) -> str:
        """
        Sign a token for the given account.

        Args:
            user_id (str): The account identifier
            username (str): The account username

        Returns:
            str: The encoded JWT
        """
        now = datetime.now(UTC)
        payload = {
            "userId": user_id,
            "username": username,
            "iat": now,
            "exp": now + timedelta(seconds=self.max_age),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenIdentity:
        """
        Decode and validate a token.

        Raises:
            InvalidTokenError: With the failure reason in its ``error`` member
        """
        try:
            claims = jwt.decode(
                token,
                key=self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except ExpiredSignatureError as e:
            raise errors.InvalidTokenError(error="jwt expired") from e
        except InvalidSignatureError as e:
            raise errors.InvalidTokenError(error="invalid signature") from e
        except PyJWTError as e:
            raise errors.InvalidTokenError(error=str(e)) from e

        try:
            return TokenIdentity(user_id=claims["userId"], username=claims["username"])
        except (KeyError, ValidationError) as e:
            logger.debug(f"{__name__}.verify:: Token payload is missing identity claims")
            raise errors.InvalidTokenError(error="invalid token payload") from e
