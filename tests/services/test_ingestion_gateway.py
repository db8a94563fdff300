"""Tests for IngestionGateway."""

from unittest.mock import AsyncMock

import pytest

from yuvi_paste.config import settings
from yuvi_paste.exceptions import (
    InvalidKeyError,
    InvalidPasteError,
    PasteQuotaExceededError,
    ServiceUnavailableError,
)
from yuvi_paste.repositories.base import ConditionalWriteError
from yuvi_paste.services.ingestion_gateway import IngestionGateway


@pytest.fixture
def mock_api_keys(api_key):
    """Create mock ApiKeyService authenticating every token."""
    service = AsyncMock()
    service.authenticate.return_value = api_key
    return service


@pytest.fixture
def mock_repository():
    """Create mock PasteRepository that echoes created pastes."""
    repository = AsyncMock()
    repository.create_within_quota = AsyncMock(side_effect=lambda paste, **_: paste)
    return repository


@pytest.fixture
def mock_accounts(account):
    """Create mock AccountRepository returning the test account."""
    accounts = AsyncMock()
    accounts.get_by_id.return_value = account
    return accounts


@pytest.fixture
def gateway(mock_api_keys, mock_repository, mock_accounts):
    """Create IngestionGateway with mocked collaborators."""
    return IngestionGateway(
        api_keys=mock_api_keys, repository=mock_repository, accounts=mock_accounts
    )


async def test_create_paste(gateway, mock_api_keys, account):
    """A valid key and payload produce a stored paste."""
    paste = await gateway.create_paste("YUVI_token", "notes", "hello", "text")

    mock_api_keys.authenticate.assert_awaited_once_with("YUVI_token")
    assert paste.account_id == account.account_id
    assert paste.title == "notes"
    assert paste.content == "hello"
    assert paste.paste_type == "text"
    assert paste.size == 5
    assert paste.seq == 1
    assert len(paste.paste_id) == 6


async def test_size_is_utf8_bytes(gateway):
    """Size counts encoded bytes, not characters."""
    paste = await gateway.create_paste("YUVI_token", "t", "héllo ✓", "text")
    assert paste.size == len("héllo ✓".encode("utf-8"))


@pytest.mark.parametrize("title", [None, "", "   "])
async def test_empty_title_defaults(gateway, title):
    """Missing or blank titles become 'Untitled'."""
    paste = await gateway.create_paste("YUVI_token", title, "x", "code")
    assert paste.title == "Untitled"


async def test_markdown_is_accepted(gateway):
    """Markdown pastes are part of the ingestion contract."""
    paste = await gateway.create_paste("YUVI_token", "README", "# hi", "markdown")
    assert paste.paste_type == "markdown"


async def test_invalid_key_stores_nothing(gateway, mock_api_keys, mock_repository):
    """Authentication failures leave the store untouched."""
    mock_api_keys.authenticate.side_effect = InvalidKeyError()

    with pytest.raises(InvalidKeyError):
        await gateway.create_paste("YUVI_bad", "t", "x", "text")
    mock_repository.create_within_quota.assert_not_awaited()


async def test_unknown_type_rejected(gateway, mock_repository):
    """Types outside the allowed set are rejected."""
    with pytest.raises(InvalidPasteError):
        await gateway.create_paste("YUVI_token", "t", "x", "yaml")
    mock_repository.create_within_quota.assert_not_awaited()


async def test_oversized_content_rejected(gateway):
    """Content over the byte limit is rejected."""
    content = "x" * (settings.max_paste_size_bytes + 1)
    with pytest.raises(InvalidPasteError):
        await gateway.create_paste("YUVI_token", "t", content, "text")


async def test_long_title_rejected(gateway):
    """Titles over the maximum length are rejected."""
    with pytest.raises(InvalidPasteError):
        await gateway.create_paste(
            "YUVI_token", "t" * (settings.max_title_length + 1), "x", "text"
        )


async def test_quota_reached(gateway, mock_accounts, mock_repository, account):
    """The eleventh paste is refused."""
    mock_accounts.get_by_id.return_value = account.model_copy(
        update={"paste_count": 10}
    )

    with pytest.raises(PasteQuotaExceededError) as exc_info:
        await gateway.create_paste("YUVI_token", "t", "x", "text")

    assert exc_info.value.status_code == 403
    assert exc_info.value.details == {"resource": "pastes", "limit": 10}
    mock_repository.create_within_quota.assert_not_awaited()


async def test_sequence_follows_count(gateway, mock_accounts, mock_repository, account):
    """The new paste's sequence is one past the stored count."""
    mock_accounts.get_by_id.return_value = account.model_copy(update={"paste_count": 4})

    paste = await gateway.create_paste("YUVI_token", "t", "x", "text")

    assert paste.seq == 5
    assert mock_repository.create_within_quota.await_args.kwargs == {
        "limit": settings.max_pastes_per_account
    }


async def test_id_collision_is_retried(gateway, mock_repository):
    """A taken paste id is retried with a fresh id."""
    mock_repository.create_within_quota.side_effect = [
        ConditionalWriteError([1]),
        None,
    ]

    await gateway.create_paste("YUVI_token", "t", "x", "text")

    assert mock_repository.create_within_quota.await_count == 2


async def test_quota_filled_concurrently(gateway, mock_repository):
    """If another write took the last slot, the paste is refused without retry."""
    mock_repository.create_within_quota.side_effect = ConditionalWriteError([0])

    with pytest.raises(PasteQuotaExceededError):
        await gateway.create_paste("YUVI_token", "t", "x", "text")
    assert mock_repository.create_within_quota.await_count == 1


async def test_owner_deleted_during_write(gateway, mock_accounts, mock_repository, account):
    """A counter condition failing on a vanished owner reports the key invalid."""
    mock_accounts.get_by_id.side_effect = [account, None]
    mock_repository.create_within_quota.side_effect = ConditionalWriteError([0])

    with pytest.raises(InvalidKeyError):
        await gateway.create_paste("YUVI_token", "t", "x", "text")


async def test_gives_up_after_repeated_collisions(gateway, mock_repository):
    """Persistent id collisions surface as 503."""
    mock_repository.create_within_quota.side_effect = ConditionalWriteError([1])

    with pytest.raises(ServiceUnavailableError):
        await gateway.create_paste("YUVI_token", "t", "x", "text")
    assert mock_repository.create_within_quota.await_count == settings.write_retry_attempts


async def test_title_kept_as_given(gateway):
    """Surrounding whitespace in a non-blank title is preserved."""
    paste = await gateway.create_paste("YUVI_token", "  hi ", "x", "text")
    assert paste.title == "  hi "


async def test_owner_missing(gateway, mock_accounts):
    """A key whose owner vanished cannot publish."""
    mock_accounts.get_by_id.return_value = None
    with pytest.raises(InvalidKeyError):
        await gateway.create_paste("YUVI_token", "t", "x", "text")
