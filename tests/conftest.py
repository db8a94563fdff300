"""Shared pytest fixtures: model factories and a local moto DynamoDB server."""

from typing import AsyncGenerator, Callable, Generator

import aioboto3
import httpx
import pytest
from moto.server import ThreadedMotoServer

from infrastructure.dynamodb_tables import create_all_tables
from yuvi_paste.config import settings
from yuvi_paste.middleware.rate_limit import rate_limiter
from yuvi_paste.models.account import Account, Session
from yuvi_paste.models.api_key import ApiKey
from yuvi_paste.models.paste import Paste
from yuvi_paste.repositories.base import get_dynamodb_config

MOTO_PORT = 5123


@pytest.fixture(autouse=True)
def reset_rate_limiter() -> Generator:
    """Start every test with empty rate limit windows."""
    rate_limiter.clear_all()
    yield
    rate_limiter.clear_all()


@pytest.fixture(autouse=True)
def no_retry_delays(monkeypatch: pytest.MonkeyPatch) -> None:
    """Retry immediately instead of backing off."""
    monkeypatch.setattr(settings, "write_retry_base_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "key_lookup_retry_delay_seconds", 0.0)


@pytest.fixture(scope="session")
def moto_endpoint() -> Generator[str, None, None]:
    """Run a moto server for the whole session and return its URL."""
    server = ThreadedMotoServer(ip_address="127.0.0.1", port=MOTO_PORT, verbose=False)
    server.start()
    yield f"http://127.0.0.1:{MOTO_PORT}"
    server.stop()


@pytest.fixture
async def dynamodb_tables(
    moto_endpoint: str, monkeypatch: pytest.MonkeyPatch
) -> AsyncGenerator:
    """
    Point the settings at moto and create fresh tables.

    moto state is reset before each test, so tests never see each
    other's items.
    """
    monkeypatch.setattr(settings, "dynamodb_endpoint_url", moto_endpoint)
    monkeypatch.setattr(settings, "aws_region", "us-east-1")
    monkeypatch.setattr(settings, "aws_access_key_id", "testing")
    monkeypatch.setattr(settings, "aws_secret_access_key", "testing")
    monkeypatch.setattr(settings, "aws_session_token", None)

    async with httpx.AsyncClient() as client:
        await client.post(f"{moto_endpoint}/moto-api/reset")

    session = aioboto3.Session()
    async with session.resource("dynamodb", **get_dynamodb_config()) as dynamodb:
        await create_all_tables(dynamodb, settings)
        yield dynamodb


@pytest.fixture
def account() -> Account:
    """A verified account with no keys or pastes."""
    return Account(
        account_id="user_0001",
        email="dev@gmail.com",
        password_hash="$2b$12$notarealhashnotarealhashnotarealhashnotarealhashnot",
        is_verified=True,
        created_at="2025-11-11T12:00:00.000000Z",
        verified_at="2025-11-11T12:01:00.000000Z",
    )


@pytest.fixture
def session(account: Account) -> Session:
    """A live session for ``account``."""
    return Session(
        session_id="session-token-0001",
        account_id=account.account_id,
        created_at="2025-11-11T12:00:00.000000Z",
        expires_at="2999-01-01T00:00:00.000000Z",
        ttl=32472144000,
    )


@pytest.fixture
def api_key(account: Account) -> ApiKey:
    """An active key owned by ``account``."""
    return ApiKey(
        key_id="key_0001",
        account_id=account.account_id,
        token_hash="0" * 64,
        key_preview="YUVI_abcd••••••••••••",
        status="active",
        rate_limit=100,
        created_at="2025-11-11T12:02:00.000000Z",
    )


@pytest.fixture
def make_paste() -> Callable[..., Paste]:
    """Factory building a Paste with sensible defaults."""

    def _make(**overrides) -> Paste:
        values = {
            "paste_id": "ABC123",
            "account_id": "user_0001",
            "title": "build.log",
            "content": "hello",
            "paste_type": "text",
            "size": 5,
            "created_at": "2025-11-11T12:03:00.000000Z",
            "seq": 1,
        }
        values.update(overrides)
        return Paste(**values)

    return _make
