"""Custom exception classes for the YUVI Paste API."""

from typing import Any


class PasteAPIError(Exception):
    """Base exception for the Paste API."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}


class UnauthorizedError(PasteAPIError):
    """Raised when a credential header is missing or malformed (401)."""

    def __init__(
        self,
        message: str = "Unauthorized: Invalid or missing API key",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="UNAUTHORIZED",
            details=details,
        )


class InvalidDomainError(PasteAPIError):
    """Raised when a registration email is outside the allowed domains (400)."""

    def __init__(
        self,
        message: str = "Email domain is not allowed for registration",
        allowed_domains: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize InvalidDomainError.

        Args:
            message: Error message
            allowed_domains: Domains accepted by the registration policy
            details: Additional error details
        """
        error_details = details or {}
        if allowed_domains:
            error_details["allowed_domains"] = allowed_domains
        super().__init__(
            message=message,
            status_code=400,
            error_code="INVALID_DOMAIN",
            details=error_details,
        )


class AccountExistsError(PasteAPIError):
    """Raised when an email is already registered (409)."""

    def __init__(
        self,
        message: str = "An account with this email already exists",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="ACCOUNT_EXISTS",
            details=details,
        )


class AccountNotFoundError(PasteAPIError):
    """Raised when no account matches (404)."""

    def __init__(
        self,
        message: str = "Account not found",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=404,
            error_code="ACCOUNT_NOT_FOUND",
            details=details,
        )


class InvalidCredentialsError(PasteAPIError):
    """Raised when a password does not match (401)."""

    def __init__(
        self,
        message: str = "Invalid credentials",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="INVALID_CREDENTIALS",
            details=details,
        )


class NoSessionError(PasteAPIError):
    """Raised when a session is missing or expired (401)."""

    def __init__(
        self,
        message: str = "No active session",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="NO_SESSION",
            details=details,
        )


class InvalidCodeError(PasteAPIError):
    """Raised when a verification code is rejected (400)."""

    def __init__(
        self,
        message: str = "Invalid verification code",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="INVALID_CODE",
            details=details,
        )


class AccountNotVerifiedError(PasteAPIError):
    """Raised when an unverified account reaches a dashboard route (403)."""

    def __init__(
        self,
        message: str = "Account email has not been verified",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="ACCOUNT_NOT_VERIFIED",
            details=details,
        )


class QuotaExceededError(PasteAPIError):
    """
    Base for per-account quota violations (403).

    Attributes:
        resource: Name of the limited resource ("api_keys" or "pastes")
        limit: The cap that was hit
    """

    def __init__(
        self,
        message: str,
        resource: str,
        limit: int,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        error_details = details or {}
        error_details["resource"] = resource
        error_details["limit"] = limit
        super().__init__(
            message=message,
            status_code=403,
            error_code=error_code,
            details=error_details,
        )
        self.resource = resource
        self.limit = limit


class KeyQuotaExceededError(QuotaExceededError):
    """Raised when an account already holds the maximum active API keys."""

    def __init__(self, limit: int, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=f"Maximum of {limit} active API keys allowed",
            resource="api_keys",
            limit=limit,
            error_code="KEY_QUOTA_EXCEEDED",
            details=details,
        )


class PasteQuotaExceededError(QuotaExceededError):
    """Raised when an account already holds the maximum pastes."""

    def __init__(self, limit: int, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=f"Paste limit reached (max {limit})",
            resource="pastes",
            limit=limit,
            error_code="PASTE_QUOTA_EXCEEDED",
            details=details,
        )


class InvalidKeyError(PasteAPIError):
    """Raised when an API key is unknown or not active (401)."""

    def __init__(
        self,
        message: str = "Invalid or inactive API key",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="INVALID_API_KEY",
            details=details,
        )


class PasteNotFoundError(PasteAPIError):
    """Raised by the view routes when a paste does not exist (404)."""

    def __init__(
        self,
        message: str = "Paste not found",
        paste_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        error_details = details or {}
        if paste_id:
            error_details["paste_id"] = paste_id
        super().__init__(
            message=message,
            status_code=404,
            error_code="PASTE_NOT_FOUND",
            details=error_details,
        )


class RateLimitError(PasteAPIError):
    """Raised when rate limit is exceeded (429)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: int = 60,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize RateLimitError.

        Args:
            message: Error message
            retry_after: Seconds until retry is allowed
            details: Additional error details
        """
        error_details = details or {}
        error_details["retry_after"] = retry_after
        super().__init__(
            message=message,
            status_code=429,
            error_code="RATE_LIMIT_EXCEEDED",
            details=error_details,
        )
        self.retry_after = retry_after


class ServiceUnavailableError(PasteAPIError):
    """Raised when a dependent service is unavailable or contended (503)."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        service: str | None = None,
        retry_after: int = 60,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize ServiceUnavailableError.

        Args:
            message: Error message
            service: Name of the unavailable service
            retry_after: Seconds until retry is recommended
            details: Additional error details
        """
        error_details = details or {}
        error_details["retry_after"] = retry_after
        if service:
            error_details["service"] = service
        super().__init__(
            message=message,
            status_code=503,
            error_code="SERVICE_UNAVAILABLE",
            details=error_details,
        )


class RequestTooLargeError(PasteAPIError):
    """Raised when request payload exceeds size limit (413)."""

    def __init__(
        self,
        message: str = "Request payload too large",
        max_size: str = "512KB",
        details: dict[str, Any] | None = None,
    ) -> None:
        error_details = details or {}
        error_details["max_size"] = max_size
        super().__init__(
            message=message,
            status_code=413,
            error_code="PAYLOAD_TOO_LARGE",
            details=error_details,
        )


class InvalidPasteError(PasteAPIError):
    """Raised when paste fields violate the ingestion contract (400)."""

    def __init__(
        self,
        message: str = "Invalid paste",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="INVALID_PASTE",
            details=details,
        )
