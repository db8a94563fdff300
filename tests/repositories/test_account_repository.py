"""Tests for AccountRepository against a local moto DynamoDB."""

import pytest

from yuvi_paste.exceptions import AccountExistsError
from yuvi_paste.repositories.account_repository import (
    AccountRepository,
    email_claim_key,
)


@pytest.fixture
def repository(dynamodb_tables) -> AccountRepository:
    """Create AccountRepository bound to the moto tables."""
    return AccountRepository()


async def test_create_and_get(repository, account):
    """A created account can be read back by id and by email."""
    await repository.create(account)

    by_id = await repository.get_by_id(account.account_id)
    by_email = await repository.get_by_email(account.email)

    assert by_id == account
    assert by_email == account


async def test_duplicate_email_rejected(repository, account):
    """A second account with the same email is refused."""
    await repository.create(account)
    twin = account.model_copy(update={"account_id": "user_0002"})

    with pytest.raises(AccountExistsError):
        await repository.create(twin)

    assert await repository.get_by_id("user_0002") is None


async def test_missing_account(repository):
    """Unknown ids and emails return None."""
    assert await repository.get_by_id("user_missing") is None
    assert await repository.get_by_email("nobody@gmail.com") is None


async def test_claim_items_are_not_accounts(repository, account):
    """The email claim key never resolves as an account."""
    await repository.create(account)
    assert await repository.get_by_id(email_claim_key(account.email)) is None


async def test_mark_verified_keeps_first_timestamp(repository, account):
    """Verification is idempotent and keeps the first verified_at."""
    unverified = account.model_copy(update={"is_verified": False, "verified_at": None})
    await repository.create(unverified)

    first = await repository.mark_verified(account.account_id, "2025-11-11T13:00:00.000000Z")
    second = await repository.mark_verified(account.account_id, "2025-11-11T14:00:00.000000Z")

    assert first.is_verified is True
    assert first.verified_at == "2025-11-11T13:00:00.000000Z"
    assert second.verified_at == "2025-11-11T13:00:00.000000Z"


async def test_mark_verified_missing_account(repository):
    """Verifying an unknown account returns None and creates nothing."""
    assert await repository.mark_verified("user_missing", "2025-11-11T13:00:00.000000Z") is None
    assert await repository.get_by_id("user_missing") is None
