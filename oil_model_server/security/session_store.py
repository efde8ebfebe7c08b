"""In-memory credential and session stores. Ephemeral: everything is lost on restart."""

import secrets
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Mapping, Optional

from oil_model_server.security.exceptions import (
    CredentialTooShortError,
    InvalidCredentialsError,
    UnauthorizedError,
    UsernameTakenError,
)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 4
TOKEN_BYTES = 32


class ReadWriteLock:
    """
    Many concurrent readers or one writer. Writers wait for active readers to drain;
    new readers wait while a writer is waiting, so writers are not starved.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class CredentialStore:
    """username -> password, exact case-sensitive match, plain text."""

    def __init__(self, seed: Optional[Mapping[str, str]] = None) -> None:
        self._lock = ReadWriteLock()
        self._passwords: Dict[str, str] = dict(seed or {})

    def register(self, username: str, password: str) -> None:
        """Add a credential. Raises CredentialTooShortError or UsernameTakenError."""
        if len(username) < MIN_USERNAME_LENGTH or len(password) < MIN_PASSWORD_LENGTH:
            raise CredentialTooShortError(
                f"Username must be {MIN_USERNAME_LENGTH}+ chars, "
                f"password {MIN_PASSWORD_LENGTH}+ chars"
            )
        with self._lock.write():
            if username in self._passwords:
                raise UsernameTakenError("Username already exists")
            self._passwords[username] = password

    def verify(self, username: str, password: str) -> bool:
        with self._lock.read():
            stored = self._passwords.get(username)
        return stored is not None and stored == password


class SessionStore:
    """
    token -> username. Every login issues a fresh token; earlier tokens for the same
    user stay valid until logged out. No expiry.
    """

    def __init__(self, credentials: CredentialStore) -> None:
        self._credentials = credentials
        self._lock = ReadWriteLock()
        self._sessions: Dict[str, str] = {}

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    def login(self, username: str, password: str) -> str:
        """Return a new 256-bit hex token. Raises InvalidCredentialsError on mismatch."""
        if not self._credentials.verify(username, password):
            raise InvalidCredentialsError("Invalid username or password")
        token = secrets.token_hex(TOKEN_BYTES)
        with self._lock.write():
            self._sessions[token] = username
        return token

    def logout(self, token: str) -> None:
        """Forget token. Unknown or empty tokens are ignored."""
        with self._lock.write():
            self._sessions.pop(token, None)

    def authenticate(self, token: Optional[str]) -> str:
        """Return the username bound to token. Raises UnauthorizedError if empty or unknown."""
        if not token:
            raise UnauthorizedError("Unauthorized. Please login.")
        with self._lock.read():
            username = self._sessions.get(token)
        if username is None:
            raise UnauthorizedError("Unauthorized. Please login.")
        return username

    def active_sessions(self) -> int:
        with self._lock.read():
            return len(self._sessions)

    def clear(self) -> None:
        """Drop all sessions (service shutdown)."""
        with self._lock.write():
            self._sessions.clear()
