"""Account registration routes."""

from fastapi import APIRouter, Depends, status

from api.v1.dependencies import get_account_service
from api.v1.schemas.account import AccountRegister, TokenResponse
from api.v1.schemas.common import ErrorResponse
from domain.services.account_service import AccountService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register an account",
    responses={
        201: {"description": "Account created, token issued"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def register(
    body: AccountRegister,
    service: AccountService = Depends(get_account_service),
) -> TokenResponse:
    """Create an account and return a token for it."""
    result = await service.register(
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return TokenResponse(token=result.token)
