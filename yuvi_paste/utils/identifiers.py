"""Identifier generation for accounts, keys, sessions and pastes."""

import secrets
import string
import uuid

# Upper-case base36, matching short links such as "A9FK2Q"
PASTE_ID_ALPHABET = string.ascii_uppercase + string.digits


def new_account_id() -> str:
    """Return a globally unique account identifier."""
    return f"user_{uuid.uuid4().hex}"


def new_key_id() -> str:
    """Return a globally unique API key identifier."""
    return f"key_{uuid.uuid4().hex}"


def new_session_id() -> str:
    """Return an unguessable session token."""
    return secrets.token_urlsafe(32)


def new_paste_id(length: int = 6) -> str:
    """
    Return a short random paste identifier.

    Uniqueness is not guaranteed here; the repository write is conditional
    on the identifier being unused and the caller retries on collision.

    Args:
        length: Number of characters

    Returns:
        Identifier drawn from ``PASTE_ID_ALPHABET``
    """
    return "".join(secrets.choice(PASTE_ID_ALPHABET) for _ in range(length))
