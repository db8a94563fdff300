"""API key service: issuance, revocation and token authentication."""

import asyncio

from yuvi_paste.auth.api_key import (
    build_key_preview,
    generate_api_key,
    hash_api_key,
    verify_api_key,
)
from yuvi_paste.config import settings
from yuvi_paste.exceptions import (
    AccountNotFoundError,
    InvalidKeyError,
    KeyQuotaExceededError,
    ServiceUnavailableError,
)
from yuvi_paste.logging.config import get_logger
from yuvi_paste.models.api_key import ApiKey, IssuedApiKey
from yuvi_paste.repositories.account_repository import AccountRepository
from yuvi_paste.repositories.api_key_repository import ApiKeyRepository
from yuvi_paste.repositories.base import ConditionalWriteError
from yuvi_paste.utils.clock import utc_now_iso
from yuvi_paste.utils.identifiers import new_key_id

logger = get_logger(__name__)


class ApiKeyService:
    """
    Service layer for API key lifecycle.

    Enforces the per-account active-key cap with a conditional increment of
    the account's ``active_key_count``.
    """

    def __init__(
        self,
        repository: ApiKeyRepository | None = None,
        accounts: AccountRepository | None = None,
    ) -> None:
        """
        Initialize ApiKeyService.

        Args:
            repository: ApiKeyRepository instance (creates new if None)
            accounts: AccountRepository instance (creates new if None)
        """
        self.repository = repository or ApiKeyRepository()
        self.accounts = accounts or AccountRepository()

    async def list_keys(self, account_id: str) -> list[ApiKey]:
        """All keys owned by the account, active and revoked, oldest first."""
        return await self.repository.list_by_account(account_id)

    async def issue_key(self, account_id: str) -> IssuedApiKey:
        """
        Issue a new active key.

        Args:
            account_id: Owning account

        Returns:
            IssuedApiKey holding the stored record and the one-time secret

        Raises:
            AccountNotFoundError: If the account does not exist
            KeyQuotaExceededError: If the account already has the maximum
                number of active keys
            ServiceUnavailableError: If writes kept conflicting
        """
        limit = settings.max_active_keys_per_account

        account = await self.accounts.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError()
        if account.active_key_count >= limit:
            raise KeyQuotaExceededError(limit=limit)

        for attempt in range(1, settings.write_retry_attempts + 1):
            secret = generate_api_key(settings.api_key_prefix)
            api_key = ApiKey(
                key_id=new_key_id(),
                account_id=account_id,
                token_hash=hash_api_key(secret),
                key_preview=build_key_preview(secret, settings.api_key_prefix),
                status="active",
                rate_limit=settings.default_rate_limit_per_minute,
                created_at=utc_now_iso(),
            )

            try:
                await self.repository.create_within_quota(api_key, limit=limit)
            except ConditionalWriteError as e:
                if 0 in e.failed_items:
                    if await self.accounts.get_by_id(account_id) is None:
                        raise AccountNotFoundError() from e
                    raise KeyQuotaExceededError(limit=limit) from e
                logger.info(
                    "API key id collided, retrying",
                    extra={"context": {"account_id": account_id, "attempt": attempt}},
                )
                continue

            logger.info(
                "API key issued",
                extra={
                    "context": {"account_id": account_id, "key_id": api_key.key_id}
                },
            )
            return IssuedApiKey(api_key=api_key, secret=secret)

        raise ServiceUnavailableError(
            message="Could not issue API key due to id collisions",
            service="api_keys",
            retry_after=1,
        )

    async def revoke_key(self, account_id: str, key_id: str) -> None:
        """
        Revoke a key owned by the account.

        Idempotent: revoking an already revoked, unknown or foreign key
        is not an error.
        """
        revoked = await self.repository.revoke(key_id, account_id, utc_now_iso())
        logger.info(
            "API key revoke requested",
            extra={
                "context": {
                    "account_id": account_id,
                    "key_id": key_id,
                    "transitioned": revoked,
                }
            },
        )

    async def authenticate(self, token: str | None) -> ApiKey:
        """
        Resolve a bearer token to its active key.

        Args:
            token: Plain text API key

        Returns:
            The matching active ApiKey

        A miss is looked up once more after a short delay, since a key used
        right after issuance may not be visible in the token hash index yet.

        Raises:
            InvalidKeyError: If no key matches or the key is not active
        """
        if not token:
            raise InvalidKeyError()

        token_hash = hash_api_key(token)
        api_key = await self.repository.get_by_token_hash(token_hash)
        if api_key is None:
            await asyncio.sleep(settings.key_lookup_retry_delay_seconds)
            api_key = await self.repository.get_by_token_hash(token_hash)

        if api_key is None or not verify_api_key(token, api_key.token_hash):
            raise InvalidKeyError()

        if api_key.status != "active":
            raise InvalidKeyError(
                message="API key has been revoked",
                details={"key_id": api_key.key_id},
            )
        return api_key
