from passlib.context import CryptContext
from passlib.exc import UnknownHashError
from rolodex.core.logging import get_logger
from starlette.concurrency import run_in_threadpool

logger = get_logger(__name__)


class SecurityService:
    """
    Service for hashing and verifying passwords with bcrypt.

    bcrypt is deliberately slow, so both operations run in the threadpool and
    never block the event loop.
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    async def hash_password(self, password: str) -> str:
        return await run_in_threadpool(self.pwd_context.hash, password)

    async def verify_password(self, *, plain_password: str, hashed_password: str) -> bool:
        try:
            return await run_in_threadpool(self.pwd_context.verify, plain_password, hashed_password)
        except (UnknownHashError, ValueError):
            logger.debug(
                f"{__name__}.verify_password:: Unable to verify password due to hashing error",
                exc_info=True,
            )
            return False
