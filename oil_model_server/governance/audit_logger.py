"""Audit logging of model runs. No FastAPI."""

import logging
from typing import List, Optional

from oil_model_server.application.exceptions import StoreUnavailableError
from oil_model_server.domain.models.simulation import SimulationParameters
from oil_model_server.governance.audit_models import AuditRecord
from oil_model_server.governance.audit_repository import AuditRepository

DEFAULT_HISTORY_LIMIT = 50


class AuditLogger:
    """
    Writes one audit record per job attempt via repository and serves per-user history.
    Writes are best-effort: a failing or missing store never fails the caller.
    Reads distinguish "no history" (empty list) from "store unavailable" (raises).
    """

    def __init__(
        self,
        repository: Optional[AuditRepository],
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._repository = repository
        self._history_limit = history_limit
        self._logger = logger or logging.getLogger(__name__)

    async def record(
        self,
        *,
        username: str,
        parameters: SimulationParameters,
        success: bool,
        result_count: int,
        error: Optional[str] = None,
    ) -> None:
        """Persist one record. Failures are logged and swallowed, never retried."""
        record = AuditRecord(
            username=username,
            parameters=parameters,
            success=success,
            result_count=result_count,
            error_message=error or None,
        )
        if self._repository is None:
            self._logger.debug("audit_store_missing", extra={"audit": record.to_dict()})
            return
        try:
            await self._repository.save(record)
        except Exception as e:
            self._logger.error(
                "audit_persist_failed",
                extra={"audit": record.to_dict(), "error": str(e)},
            )

    async def history(self, username: str) -> List[AuditRecord]:
        """Most recent records for username, newest first. Raises StoreUnavailableError."""
        if self._repository is None:
            raise StoreUnavailableError("database not connected")
        try:
            return await self._repository.list_for_user(username, self._history_limit)
        except Exception as e:
            self._logger.error("audit_history_failed", extra={"error": str(e)})
            raise StoreUnavailableError(str(e)) from e

    async def is_available(self) -> bool:
        if self._repository is None:
            return False
        try:
            return await self._repository.ping()
        except Exception as e:
            self._logger.warning("audit_store_ping_failed", extra={"error": str(e)})
            return False
