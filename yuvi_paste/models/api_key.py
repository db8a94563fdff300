"""API Key model for DynamoDB."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

KeyStatus = Literal["active", "revoked"]


class ApiKey(BaseModel):
    """
    API Key model for paste ingestion.

    Only the SHA-256 hash of the secret is stored; the secret itself is
    shown once at issuance.

    Attributes:
        key_id: Unique identifier (``key_<hex>``)
        account_id: Owning account
        token_hash: SHA-256 hex digest of the secret token
        key_preview: Masked preview safe to display
        status: Key status (active, revoked)
        rate_limit: Requests per minute limit
        created_at: ISO 8601 timestamp of key creation
        revoked_at: ISO 8601 timestamp of revocation
    """

    key_id: str = Field(..., description="Unique key identifier")
    account_id: str = Field(..., description="Owning account identifier")
    token_hash: str = Field(..., description="SHA-256 hash of API key")
    key_preview: str = Field(..., description="Masked key preview")
    status: KeyStatus = Field(..., description="Key status: active, revoked")
    rate_limit: int = Field(default=100, description="Requests per minute")
    created_at: str = Field(..., description="ISO 8601 creation timestamp")
    revoked_at: Optional[str] = Field(
        None, description="ISO 8601 revocation timestamp"
    )

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {
            "example": {
                "key_id": "key_6d0f1e2a9b8c4d7e8f1a2b3c4d5e6f70",
                "account_id": "user_3f9c2a7e5b0d4e1f8a6c9b2d7e4f1a3c",
                "token_hash": "9f86d081884c7d659a2feaa0c55ad015...",
                "key_preview": "YUVI_a1B2••••••••••••",
                "status": "active",
                "rate_limit": 100,
                "created_at": "2025-11-11T12:00:00.000000Z",
                "revoked_at": None,
            }
        }


class IssuedApiKey(BaseModel):
    """
    Result of key issuance.

    ``secret`` is the only copy of the plaintext key; it is never stored.
    """

    api_key: ApiKey
    secret: str
