"""Paste read service."""

from yuvi_paste.models.paste import Paste
from yuvi_paste.repositories.paste_repository import PasteRepository


class PasteService:
    """Read access to stored pastes."""

    def __init__(self, repository: PasteRepository | None = None) -> None:
        """
        Initialize PasteService.

        Args:
            repository: PasteRepository instance (creates new if None)
        """
        self.repository = repository or PasteRepository()

    async def list_pastes(self, account_id: str) -> list[Paste]:
        """
        List an account's pastes, newest first.

        Pastes created in the same instant keep their insertion order.
        """
        pastes = await self.repository.list_by_account(account_id)
        pastes.sort(key=lambda p: p.seq)
        pastes.sort(key=lambda p: p.created_at, reverse=True)
        return pastes

    async def get_paste(self, paste_id: str) -> Paste | None:
        """Look up a paste by identifier; a miss is None, not an error."""
        return await self.repository.get_by_id(paste_id)

    async def get_raw_content(self, paste_id: str) -> str | None:
        """Return only the content of a paste, or None when absent."""
        paste = await self.repository.get_by_id(paste_id)
        return paste.content if paste else None
