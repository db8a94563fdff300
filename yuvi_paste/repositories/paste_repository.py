"""Paste repository for DynamoDB operations."""

from typing import List, Optional

from yuvi_paste.config import settings
from yuvi_paste.models.paste import Paste
from yuvi_paste.repositories.base import BaseRepository


class PasteRepository(BaseRepository):
    """
    Repository for Paste operations in DynamoDB.

    Pastes are keyed by their short ``paste_id`` and indexed by owner
    (``AccountIndex``, range ``created_at``).
    """

    ACCOUNT_INDEX = "AccountIndex"

    def __init__(self) -> None:
        """Initialize PasteRepository with pastes table."""
        super().__init__(settings.dynamodb_table_pastes)
        self.accounts_table_name = settings.dynamodb_table_accounts

    async def get_by_id(self, paste_id: str) -> Optional[Paste]:
        """
        Get paste by ID.

        Args:
            paste_id: Short paste identifier

        Returns:
            Paste if found, None otherwise
        """
        item = await self.get_item({"paste_id": paste_id})
        if item:
            return Paste(**item)
        return None

    async def list_by_account(self, account_id: str) -> List[Paste]:
        """
        List every paste owned by an account.

        Args:
            account_id: Owning account

        Returns:
            Pastes in index order (oldest first)
        """
        items = await self.query_all(
            index_name=self.ACCOUNT_INDEX,
            key_condition="account_id = :account_id",
            expression_values={":account_id": account_id},
        )
        return [Paste(**item) for item in items]

    async def create_within_quota(self, paste: Paste, limit: int) -> Paste:
        """
        Store a new paste if the owner is still under the paste quota.

        Conditional increment of ``paste_count`` (``paste_count < :limit``)
        combined with a uniqueness condition on ``paste_id``, in one
        transaction.

        Args:
            paste: Paste model to store
            limit: Maximum number of pastes per account

        Returns:
            The created Paste

        Raises:
            ConditionalWriteError: Item 0 failed when the account is at the
                quota or gone, item 1 when the paste id is already taken
        """
        await self.transact_write(
            [
                {
                    "Update": {
                        "TableName": self.accounts_table_name,
                        "Key": {"account_id": paste.account_id},
                        "UpdateExpression": "SET paste_count = paste_count + :one",
                        "ConditionExpression": "paste_count < :limit",
                        "ExpressionAttributeValues": {":one": 1, ":limit": limit},
                    }
                },
                {
                    "Put": {
                        "TableName": self.table_name,
                        "Item": paste.model_dump(),
                        "ConditionExpression": "attribute_not_exists(paste_id)",
                    }
                },
            ]
        )
        return paste
