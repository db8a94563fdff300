"""Tests for error response formatting and the exception handlers."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from httpx import ASGITransport, AsyncClient

from yuvi_paste.config import settings
from yuvi_paste.exceptions import (
    PasteNotFoundError,
    RateLimitError,
    ServiceUnavailableError,
)
from yuvi_paste.handlers.exception_handler import (
    error_response_from_exception,
    generic_exception_handler,
    paste_api_exception_handler,
    validation_exception_handler,
)
from yuvi_paste.main import app


@pytest.fixture
def mock_request():
    """Request stub carrying a correlation id."""
    request = AsyncMock(spec=Request)
    request.state.correlation_id = "test-correlation-id"
    request.method = "GET"
    request.url.path = "/paste/ABC123"
    return request


async def test_paste_api_error_format(mock_request) -> None:
    """Domain errors render the standard envelope."""
    response = await paste_api_exception_handler(
        mock_request, PasteNotFoundError(paste_id="ABC123")
    )

    assert response.status_code == 404
    data = json.loads(response.body)
    assert data == {
        "status": "error",
        "error_code": "PASTE_NOT_FOUND",
        "message": "Paste not found",
        "details": {"paste_id": "ABC123"},
        "correlation_id": "test-correlation-id",
    }


def test_rate_limit_error_sets_retry_after() -> None:
    """429 responses carry Retry-After."""
    response = error_response_from_exception(RateLimitError(retry_after=17))

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "17"
    assert "correlation_id" not in json.loads(response.body)


async def test_service_unavailable_is_logged(mock_request, caplog) -> None:
    """5xx domain errors are logged as warnings."""
    with caplog.at_level("WARNING"):
        response = await paste_api_exception_handler(
            mock_request, ServiceUnavailableError(service="pastes", retry_after=1)
        )

    assert response.status_code == 503
    assert any("SERVICE_UNAVAILABLE" in r.getMessage() for r in caplog.records)


async def test_validation_error_messages(mock_request) -> None:
    """Validation errors are summarised per field."""
    exc = RequestValidationError(
        errors=[
            {"loc": ("body", "content"), "msg": "Field required", "type": "missing"},
            {"loc": ("body", "type"), "msg": "Input should be 'json'", "type": "literal_error"},
        ]
    )

    response = await validation_exception_handler(mock_request, exc)

    assert response.status_code == 400
    data = json.loads(response.body)
    assert data["error_code"] == "VALIDATION_ERROR"
    assert data["message"] == "content: Field is required (and 1 more errors)"
    assert data["details"]["validation_errors"][1]["field"] == "type"


async def test_generic_error_is_500(mock_request) -> None:
    """Unexpected errors hide their details."""
    response = await generic_exception_handler(mock_request, KeyError("secret detail"))

    assert response.status_code == 500
    data = json.loads(response.body)
    assert data["error_code"] == "INTERNAL_ERROR"
    assert "secret detail" not in data["message"]


async def test_connection_error_is_503(mock_request) -> None:
    """Connectivity failures are reported as unavailable."""
    response = await generic_exception_handler(
        mock_request, ConnectionError("could not reach endpoint")
    )

    assert response.status_code == 503
    assert json.loads(response.body)["error_code"] == "SERVICE_UNAVAILABLE"


async def test_unhandled_exception_through_app() -> None:
    """An exception escaping a route becomes a 500 envelope."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    with patch("yuvi_paste.routes.pastes.PasteService") as mock_service_class:
        mock_service_class.return_value.get_paste = AsyncMock(side_effect=KeyError("boom"))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/paste/ABC123")

    assert response.status_code == 500
    assert response.json()["error_code"] == "INTERNAL_ERROR"


async def test_oversized_request_is_413() -> None:
    """Bodies over the request limit are rejected before parsing."""
    body = "x" * (settings.max_request_size_bytes + 1)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post(
            "/api/paste",
            content=body,
            headers={"Content-Type": "application/json", "X-Request-ID": "big-1"},
        )

    assert response.status_code == 413
    data = response.json()
    assert data["error_code"] == "PAYLOAD_TOO_LARGE"
    assert data["correlation_id"] == "big-1"
    assert response.headers["X-Request-ID"] == "big-1"
