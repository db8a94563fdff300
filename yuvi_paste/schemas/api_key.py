"""Pydantic schemas for API key management responses."""

from typing import List, Optional

from pydantic import BaseModel, Field

from yuvi_paste.models.api_key import ApiKey, IssuedApiKey, KeyStatus


class ApiKeyResponse(BaseModel):
    """Listing view of a key; never contains the secret."""

    key_id: str = Field(..., description="Key identifier")
    key_preview: str = Field(..., description="Masked key preview")
    status: KeyStatus = Field(..., description="active or revoked")
    created_at: str = Field(..., description="ISO 8601 creation timestamp")
    revoked_at: Optional[str] = Field(None, description="ISO 8601 revocation timestamp")

    @classmethod
    def from_model(cls, api_key: ApiKey) -> "ApiKeyResponse":
        """Build the listing view of an ApiKey."""
        return cls(
            key_id=api_key.key_id,
            key_preview=api_key.key_preview,
            status=api_key.status,
            created_at=api_key.created_at,
            revoked_at=api_key.revoked_at,
        )


class ApiKeyListResponse(BaseModel):
    """All keys of the session's account in issuance order."""

    keys: List[ApiKeyResponse] = Field(..., description="Active and revoked keys")
    active_count: int = Field(..., description="Number of active keys")


class IssuedApiKeyResponse(ApiKeyResponse):
    """
    Issuance response carrying the plaintext key.

    The ``api_key`` value is shown exactly once.
    """

    api_key: str = Field(..., description="Plaintext API key (save this!)")
    warning: str = Field(
        default="This key will only be shown once. Copy it now.",
        description="Reveal-once notice",
    )

    @classmethod
    def from_issued(cls, issued: IssuedApiKey) -> "IssuedApiKeyResponse":
        """Build the response from an issuance result."""
        base = ApiKeyResponse.from_model(issued.api_key)
        return cls(**base.model_dump(), api_key=issued.secret)

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {
            "example": {
                "key_id": "key_6d0f1e2a9b8c4d7e8f1a2b3c4d5e6f70",
                "key_preview": "YUVI_a1B2••••••••••••",
                "status": "active",
                "created_at": "2025-11-11T12:00:00.000000Z",
                "revoked_at": None,
                "api_key": "YUVI_a1B2c3D4e5F6g7H8i9J0k1L2m3N4o5P6q7R8s9T0u1V",
                "warning": "This key will only be shown once. Copy it now.",
            }
        }
