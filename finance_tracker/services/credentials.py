"""
Credential Store

Simulates a login backend on top of the local key-value store.
Three records are kept under separate keys:
- the user directory (list of User)
- the credential directory (list of Credential)
- the active session (a single User, or absent)

CRITICAL: Passwords are stored and compared in plaintext. This is the
existing client-only behavior, documented here, not a security model.

WRITE ORDERING: The storage has no multi-key transactions. signup()
writes the user directory before the credential directory, so a crash
between the two can leave an orphan User but never a Credential that
references a missing User.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

import structlog
from pydantic import TypeAdapter

from finance_tracker.config import StorageSettings, get_settings
from finance_tracker.models.user import Credential, Session, User
from finance_tracker.services.storage import DuplicateError, StorageAdapter


_USERS = TypeAdapter(list[User])
_CREDENTIALS = TypeAdapter(list[Credential])
_SESSION_USER = TypeAdapter(User)


class AuthenticationError(Exception):
    """Base exception for credential operations."""
    pass


class InvalidCredentialsError(AuthenticationError):
    """
    Login failed.

    Raised both for an unknown email and for a wrong password,
    so callers cannot tell which emails are registered.
    """

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class AlreadyExistsError(DuplicateError):
    """Signup attempted with an email that is already registered."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User with email {email} already exists")


class CredentialStore:
    """
    Signup, login and session management.

    The active Session is held by this instance and mirrored to storage
    so it can be restored when the process starts again.
    """

    def __init__(
        self,
        adapter: StorageAdapter,
        settings: Optional[StorageSettings] = None,
    ):
        settings = settings or get_settings().storage
        self._adapter = adapter
        self._users_key = settings.users_key
        self._credentials_key = settings.credentials_key
        self._session_key = settings.session_key
        self._lock = asyncio.Lock()
        self._logger = structlog.get_logger(__name__)

        self._session = Session(user=self._restore_session())

    # -------------------------------------------------------------------------
    # Persistence helpers
    # -------------------------------------------------------------------------

    def _load_users(self) -> list[User]:
        return self._adapter.read(self._users_key, _USERS, [])

    def _load_credentials(self) -> list[Credential]:
        return self._adapter.read(self._credentials_key, _CREDENTIALS, [])

    def _restore_session(self) -> Optional[User]:
        return self._adapter.read(self._session_key, _SESSION_USER, None)

    def _set_session(self, user: User) -> None:
        self._adapter.write(self._session_key, user, _SESSION_USER)
        self._session = Session(user=user)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def signup(self, email: str, password: str, name: str) -> User:
        """
        Register a new user and log them in.

        Raises:
            AlreadyExistsError: If a user with this exact email exists
        """
        async with self._lock:
            users = self._load_users()
            if any(u.email == email for u in users):
                raise AlreadyExistsError(email)

            existing_ids = {u.id for u in users}
            user_id = str(uuid4())
            while user_id in existing_ids:
                user_id = str(uuid4())

            user = User(
                id=user_id,
                email=email,
                name=name,
                created_at=datetime.now(timezone.utc),
            )

            # User first, then Credential (see module docstring)
            self._adapter.write(self._users_key, [*users, user], _USERS)

            credentials = self._load_credentials()
            credentials.append(
                Credential(email=email, password=password, user_id=user.id)
            )
            self._adapter.write(self._credentials_key, credentials, _CREDENTIALS)

            self._set_session(user)

        self._logger.info("user_signed_up", user_id=user.id)
        return user

    async def login(self, email: str, password: str) -> User:
        """
        Authenticate with an exact email and password match.

        Raises:
            InvalidCredentialsError: If no credential matches, or the
                matching credential points to a missing user
        """
        async with self._lock:
            credential = next(
                (c for c in self._load_credentials() if c.matches(email, password)),
                None,
            )
            if credential is None:
                raise InvalidCredentialsError()

            user = next(
                (u for u in self._load_users() if u.id == credential.user_id),
                None,
            )
            if user is None:
                # Data-integrity failure, reported like a wrong password
                self._logger.warning(
                    "credential_without_user",
                    user_id=credential.user_id,
                )
                raise InvalidCredentialsError()

            self._set_session(user)

        return user

    def logout(self) -> None:
        """Clear the active session. Idempotent."""
        self._adapter.remove(self._session_key)
        self._session = Session()

    def current_session(self) -> Optional[User]:
        """The currently authenticated user, if any."""
        return self._session.user

    @property
    def session(self) -> Session:
        return self._session

    def list_users(self) -> list[User]:
        """The full user directory."""
        return self._load_users()
