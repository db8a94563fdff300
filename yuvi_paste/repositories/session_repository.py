"""Session repository for DynamoDB operations."""

from typing import Optional

from yuvi_paste.config import settings
from yuvi_paste.models.account import Session
from yuvi_paste.repositories.base import BaseRepository


class SessionRepository(BaseRepository):
    """Repository for login sessions, keyed by the opaque session token."""

    def __init__(self) -> None:
        """Initialize SessionRepository with sessions table."""
        super().__init__(settings.dynamodb_table_sessions)

    async def create(self, session: Session) -> Session:
        """Store a new session."""
        await self.put_item(
            session.model_dump(),
            condition_expression="attribute_not_exists(session_id)",
        )
        return session

    async def get_by_id(self, session_id: str) -> Optional[Session]:
        """
        Get session by token.

        Expiry is not checked here; DynamoDB TTL deletion is lazy, so
        callers must compare ``expires_at`` themselves.

        Args:
            session_id: Session token

        Returns:
            Session if stored, None otherwise
        """
        item = await self.get_item({"session_id": session_id})
        if item:
            return Session(**item)
        return None

    async def delete(self, session_id: str) -> None:
        """Delete a session; deleting a missing session is a no-op."""
        await self.delete_item({"session_id": session_id})
