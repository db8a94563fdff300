"""Account and Session models for DynamoDB."""

from typing import Optional

from pydantic import BaseModel, Field


class Account(BaseModel):
    """
    Registered user identity.

    Attributes:
        account_id: Unique identifier (``user_<hex>``)
        email: Normalised (lower-case) email address
        password_hash: Bcrypt hash of the password (never returned by the API)
        is_verified: Whether the email OTP step has completed
        created_at: ISO 8601 timestamp of registration
        verified_at: ISO 8601 timestamp of first verification
        active_key_count: Number of API keys currently active
        paste_count: Number of pastes stored for this account
    """

    account_id: str = Field(..., description="Unique account identifier")
    email: str = Field(..., description="Account email address")
    password_hash: str = Field(..., description="Bcrypt hash of the password")
    is_verified: bool = Field(default=False, description="Verification status")
    created_at: str = Field(..., description="ISO 8601 creation timestamp")
    verified_at: Optional[str] = Field(
        None, description="ISO 8601 verification timestamp"
    )
    active_key_count: int = Field(default=0, ge=0, description="Active API keys")
    paste_count: int = Field(default=0, ge=0, description="Stored pastes")

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {
            "example": {
                "account_id": "user_3f9c2a7e5b0d4e1f8a6c9b2d7e4f1a3c",
                "email": "dev@gmail.com",
                "password_hash": "$2b$12$...",
                "is_verified": True,
                "created_at": "2025-11-11T12:00:00.000000Z",
                "verified_at": "2025-11-11T12:01:00.000000Z",
                "active_key_count": 1,
                "paste_count": 3,
            }
        }


class Session(BaseModel):
    """
    Explicit login session handed to every session-scoped operation.

    Attributes:
        session_id: Opaque random token presented by the client
        account_id: Authenticated account
        created_at: ISO 8601 creation timestamp
        expires_at: ISO 8601 expiry timestamp
        ttl: Unix timestamp used by DynamoDB TTL
    """

    session_id: str = Field(..., description="Opaque session token")
    account_id: str = Field(..., description="Owning account identifier")
    created_at: str = Field(..., description="ISO 8601 creation timestamp")
    expires_at: str = Field(..., description="ISO 8601 expiry timestamp")
    ttl: int = Field(..., description="Unix timestamp for TTL")
