from rolodex.core.exceptions import errors
from rolodex.core.logging import get_logger
from rolodex.domain.models import UserAccount
from rolodex.domain.repositories import AccountRepository
from rolodex.domain.schemas import AuthLoginResponse, AuthRegisterRequest, AuthRegisterResponse
from rolodex.domain.services.security_service import SecurityService
from rolodex.domain.services.token_service import TokenService

logger = get_logger(__name__)

DUPLICATE_MESSAGES = {
    "username": "Username already exists",
    "email": "Email already exists",
}


class AuthService:
    def __init__(
        self,
        *,
        accounts: AccountRepository,
        security_service: SecurityService,
        token_service: TokenService,
    ):
        self.accounts = accounts
        self.security_service = security_service
        self.token_service = token_service

    async def register(self, payload: AuthRegisterRequest) -> AuthRegisterResponse:
        """
        Register a new account.

        Args:
            payload (AuthRegisterRequest): Validated username, email and password

        Returns:
            AuthRegisterResponse: The confirmation message and the new account id

        Raises:
            DuplicateUserError: If the username or the email is already registered
            DatabaseError: If the store fails
        """
        if await self.accounts.get_by_username(payload.username) is not None:
            raise errors.DuplicateUserError(detail=DUPLICATE_MESSAGES["username"])

        if await self.accounts.get_by_email(payload.email) is not None:
            raise errors.DuplicateUserError(detail=DUPLICATE_MESSAGES["email"])

        password_hash = await self.security_service.hash_password(payload.password)

        try:
            account = await self.accounts.create(
                UserAccount(username=payload.username, email=payload.email, password_hash=password_hash)
            )
        except errors.DuplicateRecordError as dre:
            # lost a race against a concurrent registration
            raise errors.DuplicateUserError(detail=DUPLICATE_MESSAGES.get(dre.field)) from dre

        logger.info(
            f"{__name__}.register:: Account registered",
            extra={"event_type": "account_registered", "account_id": account.id},
        )

        return AuthRegisterResponse(user_id=account.id)

    async def login(self, *, username: str, password: str) -> AuthLoginResponse:
        """
        Exchange credentials for a signed access token.

        Raises:
            InvalidCredentialsError: For an unknown username (400)
            IncorrectPasswordError: For a wrong password (401)
            DatabaseError: If the store fails
        """
        account = await self.accounts.get_by_username(username)
        if account is None:
            logger.info(
                f"{__name__}.login:: Login attempt for unknown username",
                extra={"event_type": "login_failed", "reason": "unknown_username"},
            )
            raise errors.InvalidCredentialsError()

        is_valid = await self.security_service.verify_password(
            plain_password=password,
            hashed_password=account.password_hash,
        )
        if not is_valid:
            logger.info(
                f"{__name__}.login:: Login attempt with wrong password",
                extra={"event_type": "login_failed", "reason": "wrong_password", "account_id": account.id},
            )
            raise errors.IncorrectPasswordError()

        access_token = self.token_service.issue(user_id=account.id, username=account.username)

        logger.info(
            f"{__name__}.login:: Account logged in",
            extra={"event_type": "login_succeeded", "account_id": account.id},
        )

        return AuthLoginResponse(access_token=access_token)
