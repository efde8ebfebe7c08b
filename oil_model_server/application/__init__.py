# Application layer: engine strategies and the job orchestrator.

from oil_model_server.application.exceptions import (
    ApplicationError,
    ExecutionFailedError,
    ParseFailedError,
    StoreUnavailableError,
)

__all__ = [
    "ApplicationError",
    "ExecutionFailedError",
    "ParseFailedError",
    "StoreUnavailableError",
]
