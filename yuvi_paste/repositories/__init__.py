"""Repository layer for DynamoDB operations."""

from yuvi_paste.repositories.account_repository import AccountRepository
from yuvi_paste.repositories.api_key_repository import ApiKeyRepository
from yuvi_paste.repositories.paste_repository import PasteRepository
from yuvi_paste.repositories.session_repository import SessionRepository

__all__ = [
    "AccountRepository",
    "ApiKeyRepository",
    "PasteRepository",
    "SessionRepository",
]
