"""Profile API routes."""

from fastapi import APIRouter, Depends

from api.dependencies.auth import CurrentIdentity
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import ERROR_RESPONSES, DataResponse, ErrorResponse, MessageResponse
from api.v1.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileResponse,
    ProfileUpsert,
)
from domain.entities.profile import Education, Experience
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Profile or entry not found"}}


@router.get(
    "/me",
    response_model=DataResponse[ProfileResponse],
    summary="Get my profile",
    responses={**ERROR_RESPONSES, **NOT_FOUND},
)
async def get_my_profile(
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> DataResponse[ProfileResponse]:
    """Get the caller's own profile."""
    view = await service.get_mine(identity.id)
    return DataResponse(data=ProfileResponse.from_view(view))


@router.post(
    "",
    response_model=DataResponse[ProfileResponse],
    summary="Create or update my profile",
    responses={**ERROR_RESPONSES, 409: {"model": ErrorResponse}},
)
async def upsert_profile(
    body: ProfileUpsert,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> DataResponse[ProfileResponse]:
    """Create the caller's profile, or overwrite the fields supplied."""
    view = await service.upsert(identity.id, body.to_update())
    return DataResponse(data=ProfileResponse.from_view(view))


@router.get(
    "",
    response_model=DataResponse[list[ProfileResponse]],
    summary="List all profiles",
)
async def list_profiles(
    service: ProfileService = Depends(get_profile_service),
) -> DataResponse[list[ProfileResponse]]:
    """Get every profile with its owner's name and avatar."""
    views = await service.get_all()
    return DataResponse(data=[ProfileResponse.from_view(view) for view in views])


@router.get(
    "/user/{user_id}",
    response_model=DataResponse[ProfileResponse],
    summary="Get a profile by user ID",
    responses=NOT_FOUND,
)
async def get_profile_by_user(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> DataResponse[ProfileResponse]:
    """Get the profile owned by an account."""
    view = await service.get_by_user(user_id)
    return DataResponse(data=ProfileResponse.from_view(view))


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete my profile",
    responses={**ERROR_RESPONSES, **NOT_FOUND},
)
async def delete_profile(
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's profile. The account and its posts remain."""
    await service.delete(identity.id)
    return MessageResponse(message="Profile removed")


@router.put(
    "/experience",
    response_model=DataResponse[ProfileResponse],
    summary="Add an experience entry",
    responses={**ERROR_RESPONSES, **NOT_FOUND},
)
async def add_experience(
    body: ExperienceCreate,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> DataResponse[ProfileResponse]:
    """Add an experience entry to the caller's profile."""
    view = await service.add_experience(identity.id, Experience(**body.model_dump()))
    return DataResponse(data=ProfileResponse.from_view(view))


@router.delete(
    "/experience/{experience_id}",
    response_model=DataResponse[ProfileResponse],
    summary="Remove an experience entry",
    responses={**ERROR_RESPONSES, **NOT_FOUND},
)
async def remove_experience(
    experience_id: str,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> DataResponse[ProfileResponse]:
    """Remove an experience entry from the caller's profile."""
    view = await service.remove_experience(identity.id, experience_id)
    return DataResponse(data=ProfileResponse.from_view(view))


@router.put(
    "/education",
    response_model=DataResponse[ProfileResponse],
    summary="Add an education entry",
    responses={**ERROR_RESPONSES, **NOT_FOUND},
)
async def add_education(
    body: EducationCreate,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> DataResponse[ProfileResponse]:
    """Add an education entry to the caller's profile."""
    view = await service.add_education(identity.id, Education(**body.model_dump()))
    return DataResponse(data=ProfileResponse.from_view(view))


@router.delete(
    "/education/{education_id}",
    response_model=DataResponse[ProfileResponse],
    summary="Remove an education entry",
    responses={**ERROR_RESPONSES, **NOT_FOUND},
)
async def remove_education(
    education_id: str,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> DataResponse[ProfileResponse]:
    """Remove an education entry from the caller's profile."""
    view = await service.remove_education(identity.id, education_id)
    return DataResponse(data=ProfileResponse.from_view(view))
