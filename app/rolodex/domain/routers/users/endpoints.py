from typing import Annotated

from fastapi import APIRouter, Body, Depends, Path, Query, Request, Response, status
from fastapi_problem.error import StatusProblem
from rolodex.core.constants import USERS_CACHE_NAMESPACE
from rolodex.core.dependencies import get_profile_service, requires_authenticated_account
from rolodex.core.exceptions import errors
from rolodex.core.helpers.validation import validate_payload
from rolodex.core.logging import get_logger
from rolodex.domain.schemas import ProfileCreateRequest, ProfileListQuery, ProfileResponse, ProfileUpdateRequest
from rolodex.domain.services import ProfileService
from rolodex.libs.cache import cache_invalidate, cached_response

logger = get_logger(__name__)

router = APIRouter(dependencies=[Depends(requires_authenticated_account)])


def get_profile_list_query(
    page: Annotated[str | None, Query(description="1-based page number")] = None,
    limit: Annotated[str | None, Query(description="Page size, at most 100")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy", description="Field to sort by")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder", description="`desc` for descending")] = None,
) -> ProfileListQuery:
    """
    Collect the listing options and validate them with the listing rules.

    Values are taken as raw strings so every violation is reported with its
    own message rather than FastAPI's generic parsing error.
    """
    raw = {"page": page, "limit": limit, "sortBy": sort_by, "sortOrder": sort_order}
    return validate_payload(
        ProfileListQuery,
        {key: value for key, value in raw.items() if value is not None},
        location="query",
    )


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="create_user",
)
@cache_invalidate(USERS_CACHE_NAMESPACE)
async def create_user(
    request: Request,  # noqa: ARG001
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
    body: Annotated[ProfileCreateRequest, Body(..., description="Profile to create")],
) -> ProfileResponse:
    """
    Create a profile record.
    """
    try:
        profile = await profile_service.create_profile(body)
        return ProfileResponse.model_validate(profile)
    except errors.DatabaseError as de:
        raise errors.InternalServerError(detail="Failed to create user", error=de.detail) from de
    except StatusProblem:
        raise
    except Exception as e:
        logger.exception(f"rolodex.domain.routers.users.endpoints.create_user:: Error creating profile: {e}")
        raise errors.InternalServerError(detail="Failed to create user", error=str(e)) from e


@router.get(
    "",
    response_model=list[ProfileResponse],
    status_code=status.HTTP_200_OK,
    operation_id="list_users",
)
@cached_response(USERS_CACHE_NAMESPACE)
async def list_users(
    request: Request,  # noqa: ARG001
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
    query: Annotated[ProfileListQuery, Depends(get_profile_list_query)],
) -> list[ProfileResponse]:
    """
    List profiles one page at a time.

    Responses are cached for a few seconds per distinct query string, the
    ``X-Cache`` header tells whether a response came from the cache.
    """
    try:
        profiles = await profile_service.list_profiles(query)
        return [ProfileResponse.model_validate(profile) for profile in profiles]
    except errors.DatabaseError as de:
        raise errors.InternalServerError(detail="Failed to retrieve users", error=de.detail) from de
    except StatusProblem:
        raise
    except Exception as e:
        logger.exception(f"rolodex.domain.routers.users.endpoints.list_users:: Error listing profiles: {e}")
        raise errors.InternalServerError(detail="Failed to retrieve users", error=str(e)) from e


@router.get(
    "/{user_id}",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    operation_id="get_user",
)
async def get_user(
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
    user_id: Annotated[str, Path(..., description="Profile identifier")],
) -> ProfileResponse:
    try:
        profile = await profile_service.get_profile(user_id)
        return ProfileResponse.model_validate(profile)
    except errors.DatabaseError as de:
        raise errors.InternalServerError(detail="Failed to retrieve user", error=de.detail) from de
    except StatusProblem:
        raise
    except Exception as e:
        logger.exception(f"rolodex.domain.routers.users.endpoints.get_user:: Error fetching profile: {e}")
        raise errors.InternalServerError(detail="Failed to retrieve user", error=str(e)) from e


@router.put(
    "/{user_id}",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    operation_id="update_user",
)
@cache_invalidate(USERS_CACHE_NAMESPACE)
async def update_user(
    request: Request,  # noqa: ARG001
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
    user_id: Annotated[str, Path(..., description="Profile identifier")],
    body: Annotated[ProfileUpdateRequest, Body(..., description="Fields to replace")],
) -> ProfileResponse:
    """
    Replace the provided fields of a profile. Omitted fields keep their value.
    """
    try:
        profile = await profile_service.update_profile(user_id, body)
        return ProfileResponse.model_validate(profile)
    except errors.DatabaseError as de:
        raise errors.InternalServerError(detail="Failed to update user", error=de.detail) from de
    except StatusProblem:
        raise
    except Exception as e:
        logger.exception(f"rolodex.domain.routers.users.endpoints.update_user:: Error updating profile: {e}")
        raise errors.InternalServerError(detail="Failed to update user", error=str(e)) from e


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    operation_id="delete_user",
)
@cache_invalidate(USERS_CACHE_NAMESPACE)
async def delete_user(
    request: Request,  # noqa: ARG001
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
    user_id: Annotated[str, Path(..., description="Profile identifier")],
) -> Response:
    try:
        await profile_service.delete_profile(user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except errors.DatabaseError as de:
        raise errors.InternalServerError(detail="Failed to delete user", error=de.detail) from de
    except StatusProblem:
        raise
    except Exception as e:
        logger.exception(f"rolodex.domain.routers.users.endpoints.delete_user:: Error deleting profile: {e}")
        raise errors.InternalServerError(detail="Failed to delete user", error=str(e)) from e
