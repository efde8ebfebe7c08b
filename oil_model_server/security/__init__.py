"""Security: in-memory credentials and session tokens. No FastAPI."""

from oil_model_server.security.session_store import CredentialStore, ReadWriteLock, SessionStore

__all__ = [
    "CredentialStore",
    "ReadWriteLock",
    "SessionStore",
]
