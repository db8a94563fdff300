"""Pydantic schemas for identity API requests and responses."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from yuvi_paste.auth.passwords import MAX_PASSWORD_BYTES
from yuvi_paste.models.account import Account, Session


class RegisterRequest(BaseModel):
    """
    Request schema for registration.

    Attributes:
        email: Email address in an allowed domain
        password: Password (bcrypt accepts at most 72 bytes)
    """

    email: str = Field(..., min_length=3, max_length=254, description="Email address")
    password: str = Field(..., min_length=1, description="Account password")

    @field_validator("password")
    @classmethod
    def validate_password_size(cls, v: str) -> str:
        """
        Reject passwords longer than bcrypt's 72-byte input limit.

        Raises:
            ValueError: If the password exceeds 72 bytes
        """
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError("Password must be at most 72 bytes")
        return v

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {
            "example": {"email": "dev@gmail.com", "password": "correct horse"}
        }


class LoginRequest(BaseModel):
    """Request schema for login."""

    email: str = Field(..., min_length=1, description="Email address")
    password: str = Field(..., description="Account password")


class VerifyOtpRequest(BaseModel):
    """Request schema for OTP verification."""

    code: str = Field(..., description="Six-digit verification code")

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {"example": {"code": "654321"}}


class AccountResponse(BaseModel):
    """
    Public view of an account (no password hash or counters).

    Attributes:
        account_id: Unique account identifier
        email: Account email
        is_verified: Verification status
        created_at: ISO 8601 creation timestamp
    """

    account_id: str = Field(..., description="Account identifier")
    email: str = Field(..., description="Account email")
    is_verified: bool = Field(..., description="Verification status")
    created_at: str = Field(..., description="ISO 8601 creation timestamp")

    @classmethod
    def from_model(cls, account: Account) -> "AccountResponse":
        """Build the public view of an Account."""
        return cls(
            account_id=account.account_id,
            email=account.email,
            is_verified=account.is_verified,
            created_at=account.created_at,
        )


class AuthResponse(BaseModel):
    """Response for register and login: the account plus a session token."""

    account: AccountResponse = Field(..., description="Authenticated account")
    session_token: str = Field(..., description="Token for X-Session-Token")
    expires_at: str = Field(..., description="ISO 8601 session expiry")

    @classmethod
    def from_models(cls, account: Account, session: Session) -> "AuthResponse":
        """Combine an Account and its new Session."""
        return cls(
            account=AccountResponse.from_model(account),
            session_token=session.session_id,
            expires_at=session.expires_at,
        )


class SessionResponse(BaseModel):
    """Response for the current-session lookup."""

    account: Optional[AccountResponse] = Field(
        None, description="Account behind the session (null if none)"
    )


class UsageSummary(BaseModel):
    """
    Quota usage for the dashboard overview.

    Attributes:
        pastes_used: Pastes stored
        paste_quota: Maximum pastes per account
        active_keys: Keys currently active
        key_quota: Maximum active keys per account
    """

    pastes_used: int = Field(..., description="Pastes stored")
    paste_quota: int = Field(..., description="Maximum pastes")
    active_keys: int = Field(..., description="Active API keys")
    key_quota: int = Field(..., description="Maximum active API keys")
