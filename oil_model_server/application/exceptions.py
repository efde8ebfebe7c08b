"""Application-layer exceptions. Typed, no HTTP."""


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ExecutionFailedError(ApplicationError):
    """Raised when the engine process cannot be started, times out, or exits non-zero. Message is the engine's stderr."""


class ParseFailedError(ApplicationError):
    """Raised when engine output cannot be read at all. Short rows are skipped and bad fields read as 0."""


class StoreUnavailableError(ApplicationError):
    """Raised when the audit store is not configured or cannot be queried."""
