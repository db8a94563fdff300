"""Identity service: registration, login, OTP verification and sessions."""

import re
from datetime import timedelta

from yuvi_paste.auth.passwords import hash_password, verify_password
from yuvi_paste.config import settings
from yuvi_paste.exceptions import (
    AccountNotFoundError,
    InvalidCodeError,
    InvalidCredentialsError,
    InvalidDomainError,
    NoSessionError,
)
from yuvi_paste.logging.config import get_logger
from yuvi_paste.models.account import Account, Session
from yuvi_paste.repositories.account_repository import AccountRepository
from yuvi_paste.repositories.session_repository import SessionRepository
from yuvi_paste.schemas.account import UsageSummary
from yuvi_paste.utils.clock import from_iso, to_iso, utc_now
from yuvi_paste.utils.email_policy import is_allowed_email, normalize_email
from yuvi_paste.utils.identifiers import new_account_id, new_session_id

logger = get_logger(__name__)


class IdentityService:
    """
    Service layer for account lifecycle.

    Every session-scoped operation receives an explicit ``Session`` (or
    its token) instead of reading an implicit "current user".
    """

    def __init__(
        self,
        accounts: AccountRepository | None = None,
        sessions: SessionRepository | None = None,
    ) -> None:
        """
        Initialize IdentityService.

        Args:
            accounts: AccountRepository instance (creates new if None)
            sessions: SessionRepository instance (creates new if None)
        """
        self.accounts = accounts or AccountRepository()
        self.sessions = sessions or SessionRepository()

    async def register(self, email: str, password: str) -> tuple[Account, Session]:
        """
        Register a new, unverified account and open a session for it.

        Args:
            email: Email address (must satisfy the domain policy)
            password: Plain text password (stored as a bcrypt hash)

        Returns:
            Tuple of (created Account, new Session)

        Raises:
            InvalidDomainError: If the email is not in an allowed domain
            AccountExistsError: If the email is already registered
        """
        normalized = normalize_email(email)
        if not is_allowed_email(normalized, settings.allowed_email_domains):
            raise InvalidDomainError(
                message=(
                    "Registration restricted to "
                    + ", ".join(f"@{d}" for d in settings.allowed_email_domains)
                    + " accounts only"
                ),
                allowed_domains=settings.allowed_email_domains,
            )

        account = Account(
            account_id=new_account_id(),
            email=normalized,
            password_hash=hash_password(password),
            is_verified=False,
            created_at=to_iso(utc_now()),
        )
        await self.accounts.create(account)

        logger.info(
            "Account registered",
            extra={"context": {"account_id": account.account_id}},
        )
        session = await self._open_session(account.account_id)
        return account, session

    async def authenticate(self, email: str, password: str) -> tuple[Account, Session]:
        """
        Log in with email and password.

        Args:
            email: Registered email address
            password: Plain text password

        Returns:
            Tuple of (Account unchanged, new Session)

        Raises:
            AccountNotFoundError: If no account has this email
            InvalidCredentialsError: If the password does not match
        """
        account = await self.accounts.get_by_email(normalize_email(email))
        if account is None:
            raise AccountNotFoundError(message="User not found")

        if not verify_password(password, account.password_hash):
            logger.warning(
                "Login rejected",
                extra={"context": {"account_id": account.account_id}},
            )
            raise InvalidCredentialsError()

        session = await self._open_session(account.account_id)
        return account, session

    async def verify_otp(self, session: Session | None, code: str) -> Account:
        """
        Complete email verification with a one-time code.

        The code is checked before the session so that the reserved
        sentinel fails the same way whatever the session state.

        Args:
            session: Session of the account being verified
            code: Six-digit code

        Returns:
            The verified Account

        Raises:
            InvalidCodeError: If the code is malformed or the sentinel
            NoSessionError: If there is no live session or account
        """
        if not self._is_well_formed_code(code) or code == settings.otp_rejected_code:
            raise InvalidCodeError(message="Invalid OTP")

        if session is None or self._is_expired(session):
            raise NoSessionError()

        account = await self.accounts.mark_verified(
            session.account_id, to_iso(utc_now())
        )
        if account is None:
            raise NoSessionError(message="Session account no longer exists")

        logger.info(
            "Account verified",
            extra={"context": {"account_id": account.account_id}},
        )
        return account

    async def resolve_session(self, session_id: str | None) -> Session:
        """
        Look up a live session by token.

        Args:
            session_id: Session token presented by the client

        Returns:
            The Session

        Raises:
            NoSessionError: If the token is missing, unknown or expired
        """
        if not session_id:
            raise NoSessionError()
        session = await self.sessions.get_by_id(session_id)
        if session is None or self._is_expired(session):
            raise NoSessionError()
        return session

    async def current_session(self, session_id: str | None) -> Account | None:
        """Return the account behind a live session, or None."""
        try:
            session = await self.resolve_session(session_id)
        except NoSessionError:
            return None
        return await self.accounts.get_by_id(session.account_id)

    async def end_session(self, session_id: str | None) -> None:
        """Delete a session. Ending a missing session is a no-op."""
        if session_id:
            await self.sessions.delete(session_id)

    async def get_usage(self, account_id: str) -> UsageSummary:
        """
        Summarise quota usage for the dashboard.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        account = await self.accounts.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError()
        return UsageSummary(
            pastes_used=account.paste_count,
            paste_quota=settings.max_pastes_per_account,
            active_keys=account.active_key_count,
            key_quota=settings.max_active_keys_per_account,
        )

    async def _open_session(self, account_id: str) -> Session:
        now = utc_now()
        expires = now + timedelta(hours=settings.session_ttl_hours)
        session = Session(
            session_id=new_session_id(),
            account_id=account_id,
            created_at=to_iso(now),
            expires_at=to_iso(expires),
            ttl=int(expires.timestamp()),
        )
        return await self.sessions.create(session)

    @staticmethod
    def _is_well_formed_code(code: str) -> bool:
        return bool(re.fullmatch(rf"[0-9]{{{settings.otp_length}}}", code or ""))

    @staticmethod
    def _is_expired(session: Session) -> bool:
        return from_iso(session.expires_at) <= utc_now()
