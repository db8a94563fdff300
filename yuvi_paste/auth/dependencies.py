"""FastAPI dependencies for API key and session authentication."""

from fastapi import Depends, Header, Request

from yuvi_paste.exceptions import AccountNotVerifiedError, NoSessionError, UnauthorizedError
from yuvi_paste.models.account import Account, Session
from yuvi_paste.models.api_key import ApiKey
from yuvi_paste.services.api_key_service import ApiKeyService
from yuvi_paste.services.identity_service import IdentityService


async def get_api_key_from_header(
    authorization: str | None = Header(None),
    x_api_key: str | None = Header(None, alias="X-API-Key"),
) -> str:
    """
    Extract API key from the Authorization or X-API-Key header.

    Args:
        authorization: Authorization header value ("Bearer <key>")
        x_api_key: X-API-Key header value

    Returns:
        API key extracted from the request

    Raises:
        UnauthorizedError: If no header is present or it is malformed
    """
    if authorization:
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise UnauthorizedError(
                message="Invalid Authorization header format",
                details={"hint": "Use format 'Authorization: Bearer <api_key>'"},
            )
        return parts[1]

    if x_api_key and x_api_key.strip():
        return x_api_key.strip()

    raise UnauthorizedError(
        message="Missing Authorization header",
        details={"hint": "Include 'Authorization: Bearer <api_key>' or 'X-API-Key'"},
    )


async def require_api_key(
    request: Request,
    api_key: str = Depends(get_api_key_from_header),
) -> ApiKey:
    """
    Validate API key and return the active ApiKey model.

    The key id is recorded on ``request.state`` for request logging.

    Raises:
        UnauthorizedError: If the header is missing or malformed
        InvalidKeyError: If the key is unknown or revoked
    """
    service = ApiKeyService()
    found_key = await service.authenticate(api_key)
    request.state.api_key_id = found_key.key_id
    return found_key


async def get_session_token(
    x_session_token: str | None = Header(None, alias="X-Session-Token"),
) -> str | None:
    """Read the session token header, if any."""
    if x_session_token and x_session_token.strip():
        return x_session_token.strip()
    return None


async def require_session(
    session_token: str | None = Depends(get_session_token),
) -> Session:
    """
    Resolve the session token to a live Session.

    Raises:
        NoSessionError: If the token is missing, unknown or expired
    """
    service = IdentityService()
    return await service.resolve_session(session_token)


async def require_verified_account(
    session: Session = Depends(require_session),
) -> Account:
    """
    Resolve the session to a verified Account for dashboard routes.

    Raises:
        NoSessionError: If the session's account no longer exists
        AccountNotVerifiedError: If the account has not completed OTP
    """
    service = IdentityService()
    account = await service.accounts.get_by_id(session.account_id)
    if account is None:
        raise NoSessionError(message="Session account no longer exists")
    if not account.is_verified:
        raise AccountNotVerifiedError()
    return account
