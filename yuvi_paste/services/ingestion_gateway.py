"""Ingestion gateway: the API-key authenticated paste write path."""

from typing import get_args

from yuvi_paste.config import settings
from yuvi_paste.exceptions import (
    InvalidKeyError,
    InvalidPasteError,
    PasteQuotaExceededError,
    ServiceUnavailableError,
)
from yuvi_paste.logging.config import get_logger
from yuvi_paste.models.account import Account
from yuvi_paste.models.api_key import ApiKey
from yuvi_paste.models.paste import Paste, PasteType
from yuvi_paste.repositories.account_repository import AccountRepository
from yuvi_paste.repositories.base import ConditionalWriteError
from yuvi_paste.repositories.paste_repository import PasteRepository
from yuvi_paste.services.api_key_service import ApiKeyService
from yuvi_paste.utils.clock import utc_now_iso
from yuvi_paste.utils.identifiers import new_paste_id

logger = get_logger(__name__)

PASTE_TYPES: tuple[str, ...] = get_args(PasteType)
DEFAULT_TITLE = "Untitled"


class IngestionGateway:
    """
    Authenticated write path for pastes.

    Turns an API key plus payload into a stored paste: authenticate,
    resolve the owner, enforce the paste quota, then write.
    """

    def __init__(
        self,
        api_keys: ApiKeyService | None = None,
        repository: PasteRepository | None = None,
        accounts: AccountRepository | None = None,
    ) -> None:
        """
        Initialize IngestionGateway.

        Args:
            api_keys: ApiKeyService used to authenticate tokens
            repository: PasteRepository instance (creates new if None)
            accounts: AccountRepository instance (creates new if None)
        """
        self.api_keys = api_keys or ApiKeyService()
        self.repository = repository or PasteRepository()
        self.accounts = accounts or AccountRepository()

    async def create_paste(
        self,
        api_key_token: str | None,
        title: str | None,
        content: str,
        paste_type: str,
    ) -> Paste:
        """
        Create a paste on behalf of the owner of ``api_key_token``.

        Args:
            api_key_token: Plain text API key
            title: Optional title ("Untitled" when empty)
            content: Paste content
            paste_type: One of json, text, code, markdown

        Returns:
            The stored Paste, including its generated identifier

        Raises:
            InvalidKeyError: If the key is unknown or not active
            InvalidPasteError: If the payload violates the contract
            PasteQuotaExceededError: If the owner is at the paste quota
            ServiceUnavailableError: If concurrent writes kept conflicting
        """
        api_key = await self.api_keys.authenticate(api_key_token)
        return await self.publish(api_key, title, content, paste_type)

    async def publish(
        self,
        api_key: ApiKey,
        title: str | None,
        content: str,
        paste_type: str,
    ) -> Paste:
        """
        Store a paste for an already authenticated key.

        Args:
            api_key: Active ApiKey returned by authentication
            title: Optional title
            content: Paste content
            paste_type: One of json, text, code, markdown

        Returns:
            The stored Paste
        """
        title = self._validate(title, content, paste_type)
        size = len(content.encode("utf-8"))
        limit = settings.max_pastes_per_account

        account = await self._owner(api_key)
        if account.paste_count >= limit:
            raise PasteQuotaExceededError(limit=limit)

        for attempt in range(1, settings.write_retry_attempts + 1):
            paste = Paste(
                paste_id=new_paste_id(settings.paste_id_length),
                account_id=account.account_id,
                title=title,
                content=content,
                paste_type=paste_type,
                size=size,
                created_at=utc_now_iso(),
                seq=account.paste_count + 1,
            )

            try:
                await self.repository.create_within_quota(paste, limit=limit)
            except ConditionalWriteError as e:
                if 0 in e.failed_items:
                    await self._owner(api_key)
                    raise PasteQuotaExceededError(limit=limit) from e
                logger.info(
                    "Paste id collided, retrying",
                    extra={
                        "context": {
                            "account_id": account.account_id,
                            "attempt": attempt,
                        }
                    },
                )
                continue

            logger.info(
                "Paste created",
                extra={
                    "context": {
                        "account_id": account.account_id,
                        "key_id": api_key.key_id,
                        "paste_id": paste.paste_id,
                        "size": size,
                    }
                },
            )
            return paste

        raise ServiceUnavailableError(
            message="Could not store paste due to id collisions",
            service="pastes",
            retry_after=1,
        )

    async def _owner(self, api_key: ApiKey) -> Account:
        """Load the key's owning account."""
        account = await self.accounts.get_by_id(api_key.account_id)
        if account is None:
            raise InvalidKeyError(
                message="API key owner no longer exists",
                details={"key_id": api_key.key_id},
            )
        return account

    @staticmethod
    def _validate(title: str | None, content: str, paste_type: str) -> str:
        """Check the payload and return the effective title."""
        if paste_type not in PASTE_TYPES:
            raise InvalidPasteError(
                message=f"Unsupported paste type: {paste_type}",
                details={"allowed_types": list(PASTE_TYPES)},
            )
        if not isinstance(content, str):
            raise InvalidPasteError(message="Paste content must be text")
        size = len(content.encode("utf-8"))
        if size > settings.max_paste_size_bytes:
            raise InvalidPasteError(
                message=(
                    f"Paste content ({size} bytes) exceeds maximum of "
                    f"{settings.max_paste_size_bytes} bytes"
                ),
                details={"max_size_bytes": settings.max_paste_size_bytes},
            )

        # Blank titles get the default; others are stored as given
        if title is None or not title.strip():
            return DEFAULT_TITLE
        if len(title) > settings.max_title_length:
            raise InvalidPasteError(
                message=f"Title exceeds {settings.max_title_length} characters",
            )
        return title
