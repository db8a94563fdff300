"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from yuvi_paste.config import settings
from yuvi_paste.exceptions import PasteAPIError
from yuvi_paste.handlers.exception_handler import (
    generic_exception_handler,
    paste_api_exception_handler,
    validation_exception_handler,
)
from yuvi_paste.logging.config import configure_logging
from yuvi_paste.middleware.logging import LoggingMiddleware
from yuvi_paste.middleware.request_validation import RequestSizeValidationMiddleware
from yuvi_paste.routes import auth, dashboard, keys, pastes, status

configure_logging()

app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="""
## YUVI Paste API

An API-first pastebin for developers. Accounts mint API keys on the
dashboard and push pastes from scripts and CI jobs; anyone with a paste
link can read it.

### Accounts

1. **Register**: `POST /auth/register` with an allowed email domain
2. **Verify**: `POST /auth/verify-otp` with the six-digit code
3. **Session**: send `X-Session-Token` on dashboard requests

### API Keys

Verified accounts may hold at most 2 active keys. The full key is shown
once at creation; only a hash is stored. Send it as:

```
Authorization: Bearer YUVI_...
```

or `X-API-Key: YUVI_...`.

### Pastes

- `POST /api/paste` creates a paste (json, text, code or markdown)
- Each account can store at most 10 pastes
- `GET /paste/{id}` returns the paste, `GET /raw/{id}` only its content
""",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Last added runs first: size validation wraps logging
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestSizeValidationMiddleware)

app.add_exception_handler(PasteAPIError, paste_api_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(auth.router)
app.include_router(keys.router)
app.include_router(pastes.router)
app.include_router(dashboard.router)
app.include_router(status.router)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """
    Root endpoint with API information.

    Returns:
        Dict with welcome message and docs link
    """
    return {
        "message": f"Welcome to {settings.api_title}",
        "version": settings.api_version,
        "docs": "/docs",
        "health": "/status",
    }
