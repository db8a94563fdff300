"""Dashboard overview routes."""

from fastapi import APIRouter, Depends

from yuvi_paste.auth.dependencies import require_verified_account
from yuvi_paste.models.account import Account
from yuvi_paste.schemas.account import UsageSummary
from yuvi_paste.services.identity_service import IdentityService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/usage", response_model=UsageSummary)
async def get_usage(
    account: Account = Depends(require_verified_account),
) -> UsageSummary:
    """Paste and API key usage against the account quotas."""
    service = IdentityService()
    return await service.get_usage(account.account_id)
