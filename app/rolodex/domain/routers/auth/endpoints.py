from typing import Annotated

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi_problem.error import StatusProblem
from rolodex.core.dependencies import auth_rate_limit, get_auth_service
from rolodex.core.exceptions import errors
from rolodex.core.helpers.request import get_request_info
from rolodex.core.logging import get_logger
from rolodex.domain.schemas import AuthLoginRequest, AuthLoginResponse, AuthRegisterRequest, AuthRegisterResponse
from rolodex.domain.services import AuthService

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/register",
    dependencies=[auth_rate_limit],
    response_model=AuthRegisterResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="register",
)
async def register(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    body: Annotated[AuthRegisterRequest, Body(..., description="Registration request body")],
) -> AuthRegisterResponse:
    """
    Register a new account with a unique username and email.
    """
    try:
        return await auth_service.register(body)
    except errors.DatabaseError as de:
        raise errors.InternalServerError(detail="Registration failed", error=de.detail) from de
    except StatusProblem:
        raise
    except Exception as e:
        logger.exception(
            f"rolodex.domain.routers.auth.endpoints.register:: Error registering account: {e}",
            extra={"event_type": "registration_failed", **get_request_info(request, ["ip_address", "request_id"])},
        )
        raise errors.InternalServerError(detail="Registration failed", error=str(e)) from e


@router.post(
    "/login",
    dependencies=[auth_rate_limit],
    response_model=AuthLoginResponse,
    status_code=status.HTTP_200_OK,
    operation_id="login",
)
async def login(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    body: Annotated[AuthLoginRequest, Body(..., description="Login request body")],
) -> AuthLoginResponse:
    """
    Exchange a username and password for a bearer token valid for one hour.
    """
    try:
        return await auth_service.login(username=body.username, password=body.password)
    except errors.DatabaseError as de:
        raise errors.InternalServerError(detail="Login failed", error=de.detail) from de
    except StatusProblem:
        raise
    except Exception as e:
        logger.exception(
            f"rolodex.domain.routers.auth.endpoints.login:: Error logging in: {e}",
            extra={"event_type": "login_error", **get_request_info(request, ["ip_address", "request_id"])},
        )
        raise errors.InternalServerError(detail="Login failed", error=str(e)) from e
