from rolodex.core.exceptions import errors
from rolodex.core.logging import get_logger
from rolodex.domain.models import UserProfile
from rolodex.domain.repositories import ProfileRepository
from rolodex.domain.schemas import ProfileCreateRequest, ProfileListQuery, ProfileUpdateRequest

logger = get_logger(__name__)


class ProfileService:
    """CRUD over profile records. Store failures surface as ``DatabaseError``."""

    def __init__(self, *, profiles: ProfileRepository):
        self.profiles = profiles

    async def create_profile(self, payload: ProfileCreateRequest) -> UserProfile:
        profile = await self.profiles.create(UserProfile(name=payload.name, email=payload.email, phone=payload.phone))

        logger.info(
            f"{__name__}.create_profile:: Profile created",
            extra={"event_type": "profile_created", "profile_id": profile.id},
        )
        return profile

    async def list_profiles(self, query: ProfileListQuery) -> list[UserProfile]:
        return await self.profiles.list(
            offset=query.offset,
            limit=query.limit,
            sort_field=query.sort_field,
            descending=query.descending,
        )

    async def get_profile(self, profile_id: str) -> UserProfile:
        """
        Raises:
            ProfileNotFoundError: If no profile has the given id
        """
        profile = await self.profiles.get_by_id(profile_id)
        if profile is None:
            raise errors.ProfileNotFoundError()
        return profile

    async def update_profile(self, profile_id: str, payload: ProfileUpdateRequest) -> UserProfile:
        """
        Replace the fields present in ``payload``.

        Raises:
            ProfileNotFoundError: If no profile has the given id
        """
        profile = await self.profiles.update(profile_id, payload.changes())
        if profile is None:
            raise errors.ProfileNotFoundError()

        logger.info(
            f"{__name__}.update_profile:: Profile updated",
            extra={"event_type": "profile_updated", "profile_id": profile_id},
        )
        return profile

    async def delete_profile(self, profile_id: str) -> None:
        if not await self.profiles.delete(profile_id):
            raise errors.ProfileNotFoundError()

        logger.info(
            f"{__name__}.delete_profile:: Profile deleted",
            extra={"event_type": "profile_deleted", "profile_id": profile_id},
        )
