"""Registration email domain policy."""


def normalize_email(email: str) -> str:
    """Strip surrounding whitespace and lower-case an email address."""
    return email.strip().lower()


def is_allowed_email(email: str, allowed_domains: list[str]) -> bool:
    """
    Check an email against the allowed-domain policy.

    An empty ``allowed_domains`` list accepts every domain. The local part
    must be non-empty and the address must contain exactly one ``@``.

    Args:
        email: Email address (normalised or not)
        allowed_domains: Lower-case domains without ``@``

    Returns:
        True if registration is permitted for this address
    """
    local, sep, domain = normalize_email(email).rpartition("@")
    if not sep or not local or not domain or "@" in local:
        return False
    if not allowed_domains:
        return True
    return domain in allowed_domains
