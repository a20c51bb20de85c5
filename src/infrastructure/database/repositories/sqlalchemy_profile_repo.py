"""SQLAlchemy implementation of Profile repository."""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateEntryError
from domain.entities.profile import PROFILE_TEXT_FIELDS, Profile
from infrastructure.database.documents import (
    PROFILE_COLLECTION_ENCODERS,
    education_from_document,
    education_to_document,
    experience_from_document,
    experience_to_document,
    social_from_document,
    social_to_document,
)
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by an account."""
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def list_all(self) -> list[Profile]:
        """Get every profile."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise DuplicateEntryError(
                "Profile already exists for this account",
                {"user_id": str(profile.user_id)},
            ) from e
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update the scalar fields of an existing profile."""
        model = await self._get_model(profile.user_id)

        if not model:
            raise ValueError(f"Profile for {profile.user_id} not found")

        for name in PROFILE_TEXT_FIELDS:
            setattr(model, name, getattr(profile, name))
        model.skills = list(profile.skills)
        model.social = social_to_document(profile.social)
        model.updated_at = profile.updated_at
        # Incremented in SQL so a collection write committed since the read
        # still counts
        model.version = ProfileModel.version + 1

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by an account."""
        model = await self._get_model(user_id)

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def replace_collection(
        self,
        id: UUID,
        attribute: str,
        entries: Sequence[Any],
        expected_version: int,
    ) -> bool:
        """Compare-and-swap write of the experience or education array."""
        encode = PROFILE_COLLECTION_ENCODERS[attribute]
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.id == id, ProfileModel.version == expected_version)
            .values(
                {
                    attribute: [encode(entry) for entry in entries],
                    "version": ProfileModel.version + 1,
                }
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount == 1)

    async def _get_model(self, user_id: UUID) -> ProfileModel | None:
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            status=model.status,
            githubusername=model.githubusername,
            skills=list(model.skills or []),
            social=social_from_document(model.social),
            experience=[experience_from_document(doc) for doc in model.experience or []],
            education=[education_from_document(doc) for doc in model.education or []],
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            company=entity.company,
            website=entity.website,
            location=entity.location,
            bio=entity.bio,
            status=entity.status,
            githubusername=entity.githubusername,
            skills=list(entity.skills),
            social=social_to_document(entity.social),
            experience=[experience_to_document(e) for e in entity.experience],
            education=[education_to_document(e) for e in entity.education],
            version=entity.version,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
