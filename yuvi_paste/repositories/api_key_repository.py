"""API Key repository for DynamoDB operations."""

from typing import List, Optional

from yuvi_paste.config import settings
from yuvi_paste.models.api_key import ApiKey
from yuvi_paste.repositories.base import BaseRepository, ConditionalWriteError


class ApiKeyRepository(BaseRepository):
    """
    Repository for API Key operations in DynamoDB.

    Keys are indexed by owner (``AccountIndex``, range ``created_at``) and by
    secret digest (``TokenHashIndex``). Issuance and revocation update the
    owner's ``active_key_count`` in the same transaction.
    """

    ACCOUNT_INDEX = "AccountIndex"
    TOKEN_HASH_INDEX = "TokenHashIndex"

    def __init__(self) -> None:
        """Initialize ApiKeyRepository with api_keys table."""
        super().__init__(settings.dynamodb_table_api_keys)
        self.accounts_table_name = settings.dynamodb_table_accounts

    async def get_by_id(self, key_id: str) -> Optional[ApiKey]:
        """
        Get API key by ID.

        Args:
            key_id: API key partition key

        Returns:
            ApiKey if found, None otherwise
        """
        item = await self.get_item({"key_id": key_id})
        if item:
            return ApiKey(**item)
        return None

    async def get_by_token_hash(self, token_hash: str) -> Optional[ApiKey]:
        """
        Get API key by secret digest through the token hash index.

        Args:
            token_hash: SHA-256 hex digest of the secret

        Returns:
            ApiKey if found, None otherwise
        """
        items = await self.query_all(
            index_name=self.TOKEN_HASH_INDEX,
            key_condition="token_hash = :token_hash",
            expression_values={":token_hash": token_hash},
        )
        if items:
            return ApiKey(**items[0])
        return None

    async def list_by_account(self, account_id: str) -> List[ApiKey]:
        """
        List every key owned by an account in issuance order.

        Args:
            account_id: Owning account

        Returns:
            Active and revoked keys, oldest first
        """
        items = await self.query_all(
            index_name=self.ACCOUNT_INDEX,
            key_condition="account_id = :account_id",
            expression_values={":account_id": account_id},
        )
        return [ApiKey(**item) for item in items]

    async def create_within_quota(self, api_key: ApiKey, limit: int) -> ApiKey:
        """
        Store a new key if the owner is still under the active-key cap.

        Conditional increment of ``active_key_count``
        (``active_key_count < :limit``) in the same transaction as the put.

        Args:
            api_key: ApiKey model to store
            limit: Maximum number of active keys per account

        Returns:
            The created ApiKey

        Raises:
            ConditionalWriteError: Item 0 failed when the account is at the
                cap or gone, item 1 when the key id already exists
        """
        await self.transact_write(
            [
                {
                    "Update": {
                        "TableName": self.accounts_table_name,
                        "Key": {"account_id": api_key.account_id},
                        "UpdateExpression": "SET active_key_count = active_key_count + :one",
                        "ConditionExpression": "active_key_count < :limit",
                        "ExpressionAttributeValues": {":one": 1, ":limit": limit},
                    }
                },
                {
                    "Put": {
                        "TableName": self.table_name,
                        "Item": api_key.model_dump(exclude_none=True),
                        "ConditionExpression": "attribute_not_exists(key_id)",
                    }
                },
            ]
        )
        return api_key

    async def revoke(self, key_id: str, account_id: str, revoked_at: str) -> bool:
        """
        Revoke an active key owned by ``account_id``.

        Args:
            key_id: Key to revoke
            account_id: Account that must own the key
            revoked_at: ISO 8601 timestamp

        Returns:
            True if the key moved from active to revoked, False if it was
            already revoked, missing, or owned by another account

        Raises:
            ConditionalWriteError: If the key was active but the owner's
                counter was already zero
            ServiceUnavailableError: If the transaction kept conflicting
        """
        try:
            await self.transact_write(
                [
                    {
                        "Update": {
                            "TableName": self.table_name,
                            "Key": {"key_id": key_id},
                            "UpdateExpression": "SET #status = :revoked, revoked_at = :revoked_at",
                            "ConditionExpression": "#status = :active AND account_id = :account_id",
                            "ExpressionAttributeNames": {"#status": "status"},
                            "ExpressionAttributeValues": {
                                ":revoked": "revoked",
                                ":active": "active",
                                ":revoked_at": revoked_at,
                                ":account_id": account_id,
                            },
                        }
                    },
                    {
                        "Update": {
                            "TableName": self.accounts_table_name,
                            "Key": {"account_id": account_id},
                            "UpdateExpression": "SET active_key_count = active_key_count - :one",
                            "ConditionExpression": "active_key_count > :zero",
                            "ExpressionAttributeValues": {":one": 1, ":zero": 0},
                        }
                    },
                ]
            )
        except ConditionalWriteError as e:
            if 0 in e.failed_items:
                return False
            raise
        return True
