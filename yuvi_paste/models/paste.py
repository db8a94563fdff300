"""Paste model for DynamoDB."""

from typing import Literal

from pydantic import BaseModel, Field

PasteType = Literal["json", "text", "code", "markdown"]


class Paste(BaseModel):
    """
    Immutable, user-owned content object.

    Attributes:
        paste_id: Short public identifier
        account_id: Owning account
        title: Paste title
        content: Text content
        paste_type: Content-type tag (json, text, code, markdown)
        size: Content length in UTF-8 bytes
        created_at: ISO 8601 creation timestamp
        seq: Per-account insertion sequence (1-based)
    """

    paste_id: str = Field(..., description="Short public identifier")
    account_id: str = Field(..., description="Owning account identifier")
    title: str = Field(..., description="Paste title")
    content: str = Field(..., description="Paste content")
    paste_type: PasteType = Field(..., description="Content type tag")
    size: int = Field(..., ge=0, description="Content size in bytes")
    created_at: str = Field(..., description="ISO 8601 creation timestamp")
    seq: int = Field(..., ge=1, description="Per-account insertion sequence")

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {
            "example": {
                "paste_id": "A9FK2Q",
                "account_id": "user_3f9c2a7e5b0d4e1f8a6c9b2d7e4f1a3c",
                "title": "welcome_config.json",
                "content": "{\"app\": \"YUVI PASTE\"}",
                "paste_type": "json",
                "size": 21,
                "created_at": "2025-11-11T12:00:00.000000Z",
                "seq": 1,
            }
        }
