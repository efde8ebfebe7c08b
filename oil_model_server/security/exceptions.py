"""Security-layer exceptions. Typed, no HTTP."""


class SecurityError(Exception):
    """Base for all security-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidCredentialsError(SecurityError):
    """Raised when username/password do not match a known credential."""


class UnauthorizedError(SecurityError):
    """Raised when a session token is missing or unknown."""


class UsernameTakenError(SecurityError):
    """Raised when registering a username that already exists."""


class CredentialTooShortError(SecurityError):
    """Raised when username or password is below the minimum length."""
