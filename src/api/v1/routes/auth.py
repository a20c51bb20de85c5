"""Token issuance and current-identity routes."""

from fastapi import APIRouter, Depends

from api.dependencies.auth import CurrentIdentity
from api.v1.dependencies import get_account_service
from api.v1.schemas.account import AccountResponse, Credentials, TokenResponse
from api.v1.schemas.common import ERROR_RESPONSES, DataResponse, ErrorResponse
from domain.services.account_service import AccountService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=DataResponse[AccountResponse],
    summary="Get the authenticated account",
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
async def get_current_account(
    identity: CurrentIdentity,
    service: AccountService = Depends(get_account_service),
) -> DataResponse[AccountResponse]:
    """Return the account the token belongs to (without credentials)."""
    account = await service.get_current(identity.id)
    return DataResponse(data=AccountResponse.model_validate(account))


@router.post(
    "",
    response_model=TokenResponse,
    summary="Exchange credentials for a token",
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
async def issue_token(
    body: Credentials,
    service: AccountService = Depends(get_account_service),
) -> TokenResponse:
    """Verify email and password and issue a token."""
    result = await service.authenticate(body.email, body.password)
    return TokenResponse(token=result.token)
