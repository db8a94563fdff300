"""Pydantic schemas for paste API requests and responses."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from yuvi_paste.config import settings
from yuvi_paste.models.paste import Paste, PasteType


class CreatePasteRequest(BaseModel):
    """
    Request schema for creating a paste.

    Attributes:
        title: Optional title (defaults to "Untitled")
        content: Text content (max 256KB as UTF-8)
        type: One of json, text, code, markdown
    """

    title: Optional[str] = Field(None, description="Paste title")
    content: str = Field(..., description="Paste content")
    type: PasteType = Field(..., description="json, text, code or markdown")

    @field_validator("title")
    @classmethod
    def validate_title_length(cls, v: Optional[str]) -> Optional[str]:
        """Reject titles over the configured maximum length."""
        if v is not None and len(v) > settings.max_title_length:
            raise ValueError(
                f"Title must be at most {settings.max_title_length} characters"
            )
        return v

    @field_validator("content")
    @classmethod
    def validate_content_size(cls, v: str) -> str:
        """
        Validate content size in bytes, not characters.

        Raises:
            ValueError: If content exceeds the configured maximum
        """
        size = len(v.encode("utf-8"))
        max_size = settings.max_paste_size_bytes
        if size > max_size:
            raise ValueError(
                f"Content size ({size} bytes) exceeds maximum of {max_size} bytes"
            )
        return v

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {
            "example": {"title": "my-log", "content": "hello", "type": "text"}
        }


class PasteResponse(BaseModel):
    """Full paste: metadata plus content."""

    id: str = Field(..., description="Short paste identifier")
    title: str = Field(..., description="Paste title")
    content: str = Field(..., description="Paste content")
    type: PasteType = Field(..., description="Content type tag")
    size: int = Field(..., description="Content size in bytes")
    created_at: str = Field(..., description="ISO 8601 creation timestamp")
    owner_id: str = Field(..., description="Owning account identifier")

    @classmethod
    def from_model(cls, paste: Paste) -> "PasteResponse":
        """Build the API view of a Paste."""
        return cls(
            id=paste.paste_id,
            title=paste.title,
            content=paste.content,
            type=paste.paste_type,
            size=paste.size,
            created_at=paste.created_at,
            owner_id=paste.account_id,
        )


class PasteSummary(BaseModel):
    """Paste listing entry without content."""

    id: str = Field(..., description="Short paste identifier")
    title: str = Field(..., description="Paste title")
    type: PasteType = Field(..., description="Content type tag")
    size: int = Field(..., description="Content size in bytes")
    created_at: str = Field(..., description="ISO 8601 creation timestamp")

    @classmethod
    def from_model(cls, paste: Paste) -> "PasteSummary":
        """Build the listing view of a Paste."""
        return cls(
            id=paste.paste_id,
            title=paste.title,
            type=paste.paste_type,
            size=paste.size,
            created_at=paste.created_at,
        )


class PasteListResponse(BaseModel):
    """The session account's pastes, newest first."""

    pastes: List[PasteSummary] = Field(..., description="Pastes, newest first")
    total: int = Field(..., description="Number of pastes stored")
    quota: int = Field(..., description="Maximum pastes per account")
