"""API routes for paste ingestion and public paste views."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from yuvi_paste.auth.dependencies import require_api_key, require_verified_account
from yuvi_paste.config import settings
from yuvi_paste.exceptions import PasteNotFoundError
from yuvi_paste.middleware.rate_limit import rate_limiter
from yuvi_paste.models.account import Account
from yuvi_paste.models.api_key import ApiKey
from yuvi_paste.schemas.paste import (
    CreatePasteRequest,
    PasteListResponse,
    PasteResponse,
    PasteSummary,
)
from yuvi_paste.services.ingestion_gateway import IngestionGateway
from yuvi_paste.services.paste_service import PasteService

router = APIRouter(tags=["Pastes"])

RAW_NOT_FOUND = "Not Found"


@router.post(
    "/api/paste",
    response_model=PasteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {
            "description": "Missing, invalid or revoked API key",
            "content": {
                "application/json": {
                    "example": {
                        "status": "error",
                        "error_code": "INVALID_API_KEY",
                        "message": "Invalid or inactive API key",
                        "details": {},
                    }
                }
            },
        },
        403: {
            "description": "Paste quota reached",
            "content": {
                "application/json": {
                    "example": {
                        "status": "error",
                        "error_code": "PASTE_QUOTA_EXCEEDED",
                        "message": "Paste limit reached (max 10)",
                        "details": {"resource": "pastes", "limit": 10},
                    }
                }
            },
        },
        429: {"description": "Rate limit exceeded"},
    },
)
async def create_paste(
    body: CreatePasteRequest,
    api_key: ApiKey = Depends(require_api_key),
) -> PasteResponse:
    """
    Create a paste with an API key.

    Raises:
        UnauthorizedError: If no API key header is present (401)
        InvalidKeyError: If the key is unknown or revoked (401)
        RateLimitError: If the key's rate limit is exceeded (429)
        PasteQuotaExceededError: If the owner already has 10 pastes (403)
    """
    rate_limiter.check_rate_limit(api_key.key_id, api_key.rate_limit)

    gateway = IngestionGateway()
    paste = await gateway.publish(api_key, body.title, body.content, body.type)
    return PasteResponse.from_model(paste)


@router.get("/pastes", response_model=PasteListResponse)
async def list_pastes(
    account: Account = Depends(require_verified_account),
) -> PasteListResponse:
    """List the session account's pastes, newest first."""
    service = PasteService()
    pastes = await service.list_pastes(account.account_id)
    return PasteListResponse(
        pastes=[PasteSummary.from_model(p) for p in pastes],
        total=len(pastes),
        quota=settings.max_pastes_per_account,
    )


@router.get(
    "/paste/{paste_id}",
    response_model=PasteResponse,
    responses={404: {"description": "Paste not found"}},
)
async def get_paste(paste_id: str) -> PasteResponse:
    """
    Fetch a paste by identifier. No authentication: pastes are shared by link.

    Raises:
        PasteNotFoundError: If the paste does not exist (404)
    """
    service = PasteService()
    paste = await service.get_paste(paste_id)
    if paste is None:
        raise PasteNotFoundError(
            message=f"Paste {paste_id} not found",
            paste_id=paste_id,
        )
    return PasteResponse.from_model(paste)


@router.get("/raw/{paste_id}", response_class=PlainTextResponse)
async def get_raw(paste_id: str) -> PlainTextResponse:
    """Return only the paste content as text, or the literal 'Not Found'."""
    service = PasteService()
    content = await service.get_raw_content(paste_id)
    if content is None:
        return PlainTextResponse(RAW_NOT_FOUND, status_code=status.HTTP_404_NOT_FOUND)
    return PlainTextResponse(content)
