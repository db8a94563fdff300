"""API key generation, hashing and verification utilities."""

import hashlib
import hmac
import secrets


def generate_api_key(prefix: str = "YUVI_") -> str:
    """
    Generate a high-entropy API key secret.

    Args:
        prefix: Human-recognisable key prefix

    Returns:
        Prefix followed by 43 URL-safe random characters (256 bits)
    """
    return f"{prefix}{secrets.token_urlsafe(32)}"


def hash_api_key(api_key: str) -> str:
    """
    Hash an API key with SHA-256.

    A deterministic digest lets the key be found through an index instead
    of checking every stored hash.

    Args:
        api_key: Plain text API key to hash

    Returns:
        Hex digest of the API key
    """
    return hashlib.sha256(api_key.encode("utf-8")).hexdigest()


def verify_api_key(api_key: str, key_hash: str) -> bool:
    """
    Verify an API key against its hash in constant time.

    Args:
        api_key: Plain text API key to verify
        key_hash: Stored hex digest

    Returns:
        True if the API key matches the hash, False otherwise
    """
    return hmac.compare_digest(hash_api_key(api_key), key_hash)


def build_key_preview(api_key: str, prefix: str = "YUVI_", visible: int = 4) -> str:
    """
    Build a masked preview of a key for listings.

    Args:
        api_key: Plain text API key
        prefix: Key prefix kept in clear
        visible: Number of secret characters to keep after the prefix

    Returns:
        Preview such as ``YUVI_a1B2••••••••••••``
    """
    body = api_key[len(prefix):] if api_key.startswith(prefix) else api_key
    return f"{prefix}{body[:visible]}{'•' * 12}"
