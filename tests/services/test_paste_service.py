"""Tests for PasteService."""

from unittest.mock import AsyncMock

import pytest

from yuvi_paste.services.paste_service import PasteService


@pytest.fixture
def mock_repository():
    """Create mock PasteRepository."""
    return AsyncMock()


@pytest.fixture
def paste_service(mock_repository):
    """Create PasteService with mocked repository."""
    return PasteService(repository=mock_repository)


async def test_list_pastes_newest_first(paste_service, mock_repository, make_paste):
    """Pastes are ordered by creation time, newest first."""
    mock_repository.list_by_account.return_value = [
        make_paste(paste_id="AAAAAA", created_at="2025-01-01T10:00:00.000000Z", seq=1),
        make_paste(paste_id="CCCCCC", created_at="2025-01-01T12:00:00.000000Z", seq=3),
        make_paste(paste_id="BBBBBB", created_at="2025-01-01T11:00:00.000000Z", seq=2),
    ]

    pastes = await paste_service.list_pastes("user_0001")

    assert [p.paste_id for p in pastes] == ["CCCCCC", "BBBBBB", "AAAAAA"]


async def test_list_pastes_ties_keep_insertion_order(
    paste_service, mock_repository, make_paste
):
    """Pastes created in the same instant keep insertion order."""
    same = "2025-01-01T10:00:00.000000Z"
    mock_repository.list_by_account.return_value = [
        make_paste(paste_id="SECOND", created_at=same, seq=2),
        make_paste(paste_id="FIRST1", created_at=same, seq=1),
        make_paste(paste_id="NEWEST", created_at="2025-01-01T11:00:00.000000Z", seq=3),
    ]

    pastes = await paste_service.list_pastes("user_0001")

    assert [p.paste_id for p in pastes] == ["NEWEST", "FIRST1", "SECOND"]


async def test_list_pastes_empty(paste_service, mock_repository):
    """An account without pastes gets an empty list."""
    mock_repository.list_by_account.return_value = []
    assert await paste_service.list_pastes("user_0001") == []


async def test_get_paste(paste_service, mock_repository, make_paste):
    """Lookups return the paste or None."""
    paste = make_paste()
    mock_repository.get_by_id.return_value = paste
    assert await paste_service.get_paste("ABC123") == paste

    mock_repository.get_by_id.return_value = None
    assert await paste_service.get_paste("NOPE00") is None


async def test_get_raw_content(paste_service, mock_repository, make_paste):
    """Raw view is just the content."""
    mock_repository.get_by_id.return_value = make_paste(content='{"a": 1}')
    assert await paste_service.get_raw_content("ABC123") == '{"a": 1}'

    mock_repository.get_by_id.return_value = None
    assert await paste_service.get_raw_content("NOPE00") is None
