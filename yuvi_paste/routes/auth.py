"""API routes for registration, login, verification and sessions."""

from fastapi import APIRouter, Depends, status

from yuvi_paste.auth.dependencies import get_session_token
from yuvi_paste.models.account import Session
from yuvi_paste.schemas.account import (
    AccountResponse,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    SessionResponse,
    VerifyOtpRequest,
)
from yuvi_paste.services.identity_service import IdentityService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Email domain not allowed or validation error"},
        409: {"description": "Email already registered"},
    },
)
async def register(body: RegisterRequest) -> AuthResponse:
    """
    Register a new account.

    The account starts unverified; use the returned session token with
    /auth/verify-otp to complete verification.

    Raises:
        InvalidDomainError: If the email domain is not allowed (400)
        AccountExistsError: If the email is already registered (409)
    """
    service = IdentityService()
    account, session = await service.register(body.email, body.password)
    return AuthResponse.from_models(account, session)


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    responses={
        401: {"description": "Invalid credentials"},
        404: {"description": "Account not found"},
    },
)
async def login(body: LoginRequest) -> AuthResponse:
    """
    Log in and open a new session.

    Raises:
        AccountNotFoundError: If no account has this email (404)
        InvalidCredentialsError: If the password is wrong (401)
    """
    service = IdentityService()
    account, session = await service.authenticate(body.email, body.password)
    return AuthResponse.from_models(account, session)


@router.post(
    "/verify-otp",
    response_model=AccountResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Invalid code"},
        401: {"description": "No active session"},
    },
)
async def verify_otp(
    body: VerifyOtpRequest,
    session_token: str | None = Depends(get_session_token),
) -> AccountResponse:
    """
    Verify the session's account with a six-digit code.

    The code is validated before the session, so a malformed code yields
    400 even without a session.
    """
    service = IdentityService()
    session: Session | None = None
    if session_token:
        session = await service.sessions.get_by_id(session_token)
    account = await service.verify_otp(session, body.code)
    return AccountResponse.from_model(account)


@router.get("/session", response_model=SessionResponse)
async def current_session(
    session_token: str | None = Depends(get_session_token),
) -> SessionResponse:
    """Return the account behind the session token, or null."""
    service = IdentityService()
    account = await service.current_session(session_token)
    return SessionResponse(
        account=AccountResponse.from_model(account) if account else None
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    session_token: str | None = Depends(get_session_token),
) -> None:
    """End the session. Idempotent."""
    service = IdentityService()
    await service.end_session(session_token)
    return None
