"""API routes for API key management (verified session required)."""

from fastapi import APIRouter, Depends, status

from yuvi_paste.auth.dependencies import require_verified_account
from yuvi_paste.models.account import Account
from yuvi_paste.schemas.api_key import (
    ApiKeyListResponse,
    ApiKeyResponse,
    IssuedApiKeyResponse,
)
from yuvi_paste.services.api_key_service import ApiKeyService

router = APIRouter(prefix="/keys", tags=["API Keys"])


@router.get("", response_model=ApiKeyListResponse)
async def list_keys(
    account: Account = Depends(require_verified_account),
) -> ApiKeyListResponse:
    """List all keys of the account, active and revoked."""
    service = ApiKeyService()
    keys = await service.list_keys(account.account_id)
    return ApiKeyListResponse(
        keys=[ApiKeyResponse.from_model(k) for k in keys],
        active_count=sum(1 for k in keys if k.status == "active"),
    )


@router.post(
    "",
    response_model=IssuedApiKeyResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {
            "description": "Active key quota reached or account not verified",
            "content": {
                "application/json": {
                    "example": {
                        "status": "error",
                        "error_code": "KEY_QUOTA_EXCEEDED",
                        "message": "Maximum of 2 active API keys allowed",
                        "details": {"resource": "api_keys", "limit": 2},
                    }
                }
            },
        },
    },
)
async def issue_key(
    account: Account = Depends(require_verified_account),
) -> IssuedApiKeyResponse:
    """
    Issue a new API key.

    The plaintext key is in the response and is never retrievable again.

    Raises:
        KeyQuotaExceededError: If two keys are already active (403)
    """
    service = ApiKeyService()
    issued = await service.issue_key(account.account_id)
    return IssuedApiKeyResponse.from_issued(issued)


@router.delete("/{key_id}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_key(
    key_id: str,
    account: Account = Depends(require_verified_account),
) -> None:
    """
    Revoke a key.

    Idempotent: revoking a revoked or unknown key also returns 204.
    """
    service = ApiKeyService()
    await service.revoke_key(account.account_id, key_id)
    return None
