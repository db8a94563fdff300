"""Account repository for DynamoDB operations."""

from typing import Any, Optional

from yuvi_paste.config import settings
from yuvi_paste.exceptions import AccountExistsError
from yuvi_paste.models.account import Account
from yuvi_paste.repositories.base import BaseRepository, ConditionalWriteError

# Email claim items share the accounts table under this key prefix
EMAIL_CLAIM_PREFIX = "EMAIL#"


def email_claim_key(email: str) -> str:
    """Partition key of the item that reserves an email address."""
    return f"{EMAIL_CLAIM_PREFIX}{email}"


class AccountRepository(BaseRepository):
    """
    Repository for Account operations in DynamoDB.

    Account items are keyed by ``account_id``. Each account has a companion
    claim item keyed by ``EMAIL#<email>`` that enforces email uniqueness and
    serves as the login lookup.
    """

    def __init__(self) -> None:
        """Initialize AccountRepository with accounts table."""
        super().__init__(settings.dynamodb_table_accounts)

    async def create(self, account: Account) -> Account:
        """
        Create an account and claim its email in one transaction.

        Args:
            account: Account model to store

        Returns:
            The created Account

        Raises:
            AccountExistsError: If the email is already claimed
            ConditionalWriteError: If only the account id collided
            ServiceUnavailableError: If the transaction kept conflicting
        """
        try:
            await self.transact_write(
                [
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": account.model_dump(exclude_none=True),
                            "ConditionExpression": "attribute_not_exists(account_id)",
                        }
                    },
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": {
                                "account_id": email_claim_key(account.email),
                                "owner_id": account.account_id,
                            },
                            "ConditionExpression": "attribute_not_exists(account_id)",
                        }
                    },
                ]
            )
        except ConditionalWriteError as e:
            if 1 in e.failed_items:
                raise AccountExistsError(details={"email": account.email}) from e
            raise
        return account

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        """
        Get account by ID.

        Args:
            account_id: Account partition key

        Returns:
            Account if found, None otherwise
        """
        if account_id.startswith(EMAIL_CLAIM_PREFIX):
            return None
        item = await self.get_item({"account_id": account_id})
        if item:
            return Account(**item)
        return None

    async def get_by_email(self, email: str) -> Optional[Account]:
        """
        Get account by (normalised) email through its claim item.

        Args:
            email: Normalised email address

        Returns:
            Account if found, None otherwise
        """
        claim = await self.get_item({"account_id": email_claim_key(email)})
        if not claim:
            return None
        return await self.get_by_id(claim["owner_id"])

    async def mark_verified(self, account_id: str, verified_at: str) -> Optional[Account]:
        """
        Set the verification flag.

        ``verified_at`` is only written the first time.

        Args:
            account_id: Account partition key
            verified_at: ISO 8601 timestamp

        Returns:
            Updated Account, None if the account does not exist
        """
        try:
            attributes: dict[str, Any] = await self.update_item(
                key={"account_id": account_id},
                update_expression=(
                    "SET is_verified = :verified, "
                    "verified_at = if_not_exists(verified_at, :verified_at)"
                ),
                expression_values={":verified": True, ":verified_at": verified_at},
                condition_expression="attribute_exists(account_id)",
            )
        except ConditionalWriteError:
            return None
        return Account(**attributes)
