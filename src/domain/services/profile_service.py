"""Profile service layer with business logic."""

from typing import Callable, List
from uuid import UUID

import structlog

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
)
from domain.entities.profile import (
    Education,
    Experience,
    Profile,
    ProfileUpdate,
    ProfileWithOwner,
)
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.identifiers import coerce_id
from domain.services.nested_collection import CollectionMutator, NestedCollection

logger = structlog.get_logger()


def _owner_only(profile: Profile, _entry: object, actor: UUID) -> bool:
    return profile.user_id == actor


EXPERIENCE: NestedCollection[Profile, Experience] = NestedCollection(
    attribute="experience",
    not_found=ExperienceNotFoundError,
    matches=lambda entry, _actor, entry_id: entry.id == entry_id,
    may_remove=_owner_only,
)

EDUCATION: NestedCollection[Profile, Education] = NestedCollection(
    attribute="education",
    not_found=EducationNotFoundError,
    matches=lambda entry, _actor, entry_id: entry.id == entry_id,
    may_remove=_owner_only,
)


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        max_write_attempts: int = 3,
    ) -> None:
        self._uow_factory = uow_factory
        self._mutator = CollectionMutator(max_write_attempts)

    async def get_mine(self, user_id: UUID) -> ProfileWithOwner:
        """Get the authenticated actor's own profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return ProfileWithOwner(profile=profile, owner=await uow.accounts.get(user_id))

    async def get_by_user(self, user_id: UUID | str) -> ProfileWithOwner:
        """Get a profile by its owner's account ID."""
        owner_id = coerce_id(user_id, ProfileNotFoundError)
        return await self.get_mine(owner_id)

    async def get_all(self) -> List[ProfileWithOwner]:
        """Get every profile together with its owner."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.list_all()
            owners = await uow.accounts.get_many([p.user_id for p in profiles])
            return [
                ProfileWithOwner(profile=profile, owner=owners.get(profile.user_id))
                for profile in profiles
            ]

    async def upsert(self, user_id: UUID, update: ProfileUpdate) -> ProfileWithOwner:
        """Create the actor's profile, or overwrite the fields supplied.

        Fields left empty in ``update`` keep their stored value.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if profile:
                profile.apply_update(update)
                saved = await uow.profiles.update(profile)
                logger.info("profile_updated", user_id=str(user_id))
            else:
                profile = Profile(user_id=user_id)
                profile.apply_update(update)
                saved = await uow.profiles.create(profile)
                logger.info("profile_created", user_id=str(user_id))

            await uow.commit()
            return ProfileWithOwner(profile=saved, owner=await uow.accounts.get(user_id))

    async def delete(self, user_id: UUID) -> None:
        """Delete the actor's profile. The account and its posts are kept."""
        async with self._uow_factory() as uow:
            deleted = await uow.profiles.delete_by_user(user_id)
            if not deleted:
                raise ProfileNotFoundError(str(user_id))
            await uow.commit()

        logger.info("profile_deleted", user_id=str(user_id))

    async def add_experience(self, user_id: UUID, experience: Experience) -> ProfileWithOwner:
        """Prepend an experience entry to the actor's profile."""
        return await self._mutate(
            user_id,
            EXPERIENCE,
            lambda p: EXPERIENCE.insert(p, user_id, experience),
        )

    async def remove_experience(
        self, user_id: UUID, experience_id: UUID | str
    ) -> ProfileWithOwner:
        """Remove an experience entry from the actor's profile."""
        return await self._mutate(
            user_id,
            EXPERIENCE,
            lambda p: EXPERIENCE.remove(
                p, user_id, coerce_id(experience_id, ExperienceNotFoundError)
            ),
        )

    async def add_education(self, user_id: UUID, education: Education) -> ProfileWithOwner:
        """Prepend an education entry to the actor's profile."""
        return await self._mutate(
            user_id,
            EDUCATION,
            lambda p: EDUCATION.insert(p, user_id, education),
        )

    async def remove_education(
        self, user_id: UUID, education_id: UUID | str
    ) -> ProfileWithOwner:
        """Remove an education entry from the actor's profile."""
        return await self._mutate(
            user_id,
            EDUCATION,
            lambda p: EDUCATION.remove(
                p, user_id, coerce_id(education_id, EducationNotFoundError)
            ),
        )

    async def _mutate(
        self,
        user_id: UUID,
        collection: NestedCollection[Profile, object],  # type: ignore[type-var]
        operation: Callable[[Profile], object],
    ) -> ProfileWithOwner:
        async with self._uow_factory() as uow:
            profile = await self._mutator.apply(
                uow,
                uow.profiles,
                load=lambda: uow.profiles.get_by_user(user_id),
                missing=lambda: ProfileNotFoundError(str(user_id)),
                collection=collection,
                operation=operation,
            )
            return ProfileWithOwner(profile=profile, owner=await uow.accounts.get(user_id))
