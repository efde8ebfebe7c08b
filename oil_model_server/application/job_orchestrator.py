"""Job orchestrator: normalize, run the engine, parse, audit. No HTTP, no FastAPI."""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from oil_model_server.application.engine import SimulationEngine
from oil_model_server.application.engine_output import parse_output
from oil_model_server.application.exceptions import ApplicationError, ExecutionFailedError
from oil_model_server.domain.models.simulation import SimulationParameters, SimulationResult
from oil_model_server.governance.audit_logger import AuditLogger


@dataclass(frozen=True)
class ModelRun:
    """Completed run: the parameters actually used, the yearly results, and the Unix completion time."""

    parameters: SimulationParameters
    results: List[SimulationResult]
    timestamp: int = field(default_factory=lambda: int(time.time()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parameters": self.parameters.to_dict(),
            "results": [r.to_dict() for r in self.results],
            "timestamp": self.timestamp,
        }


class JobOrchestrator:
    """
    One synchronous engine run per call. No retries, no pooling.
    Every attempt produces exactly one audit record, success or failure.
    """

    def __init__(
        self,
        engine: SimulationEngine,
        audit_logger: AuditLogger,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._engine = engine
        self._audit = audit_logger
        self._logger = logger or logging.getLogger(__name__)

    async def run_model(self, username: str, params: SimulationParameters) -> ModelRun:
        """
        Raises ExecutionFailedError or ParseFailedError after auditing the failure.
        Any other error from the engine or parser is audited and raised as ExecutionFailedError.
        """
        params = params.normalized()
        self._logger.info(
            "model_run_started",
            extra={"username": username, "parameters": params.to_dict()},
        )

        try:
            output = await self._engine.run(params)
            results = parse_output(output)
        except Exception as e:
            if isinstance(e, ApplicationError):
                error = e
            else:
                error = ExecutionFailedError(str(e) or type(e).__name__)
            self._logger.error(
                "model_run_failed",
                extra={
                    "username": username,
                    "error_type": type(e).__name__,
                    "error": error.message,
                },
            )
            await self._audit.record(
                username=username,
                parameters=params,
                success=False,
                result_count=0,
                error=error.message,
            )
            if error is e:
                raise
            raise error from e

        self._logger.info(
            "model_run_completed",
            extra={"username": username, "result_count": len(results)},
        )
        await self._audit.record(
            username=username,
            parameters=params,
            success=True,
            result_count=len(results),
        )
        return ModelRun(parameters=params, results=results)
