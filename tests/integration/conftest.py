"""Pytest fixtures for end-to-end tests against moto DynamoDB."""

from typing import AsyncGenerator, Awaitable, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from yuvi_paste.main import app


@pytest.fixture
async def api_client(dynamodb_tables) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing API endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client


@pytest.fixture
def register_verified(
    api_client: AsyncClient,
) -> Callable[[str], Awaitable[dict[str, str]]]:
    """
    Factory that registers and verifies an account.

    Returns the session headers for dashboard requests.
    """

    async def _register(email: str = "a@gmail.com") -> dict[str, str]:
        response = await api_client.post(
            "/auth/register", json={"email": email, "password": "pw"}
        )
        assert response.status_code == 201, response.text
        headers = {"X-Session-Token": response.json()["session_token"]}

        response = await api_client.post(
            "/auth/verify-otp", json={"code": "654321"}, headers=headers
        )
        assert response.status_code == 200, response.text
        return headers

    return _register


@pytest.fixture
def issue_key(api_client: AsyncClient) -> Callable[[dict], Awaitable[dict]]:
    """Factory that issues a key and returns the issuance response."""

    async def _issue(session_headers: dict[str, str]) -> dict:
        response = await api_client.post("/keys", headers=session_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _issue
