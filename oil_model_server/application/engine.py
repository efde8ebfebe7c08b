"""Simulation engine strategies. The orchestrator depends on the protocol; each engine returns raw stdout bytes."""

import asyncio
import logging
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Protocol, Sequence

from oil_model_server.application.engine_output import format_output
from oil_model_server.application.exceptions import ExecutionFailedError
from oil_model_server.domain.models.simulation import SimulationParameters
from oil_model_server.domain.resampling import (
    DEFAULT_HORIZON_YEARS,
    Sample,
    resample_channels,
)

logger = logging.getLogger(__name__)

ChannelSource = Callable[[SimulationParameters], Mapping[str, Sequence[Sample]]]


class SimulationEngine(Protocol):
    """Runs the model for one parameter set to completion."""

    async def run(self, params: SimulationParameters) -> bytes:
        """Return engine stdout in the CSV contract. Raises ExecutionFailedError."""
        ...


class SubprocessEngine:
    """
    Spawns the external engine once per call: command + positional parameters.
    stdout is returned whole; stderr is only used as the failure reason.
    No timeout unless timeout_seconds is set.
    """

    def __init__(
        self,
        command: Sequence[str],
        cwd: Optional[Path] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        if not command:
            raise ValueError("engine command must not be empty")
        self._command = list(command)
        self._cwd = cwd
        self._timeout = timeout_seconds

    def argv(self, params: SimulationParameters) -> List[str]:
        return self._command + params.to_engine_args()

    async def run(self, params: SimulationParameters) -> bytes:
        args = self.argv(params)
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                cwd=str(self._cwd) if self._cwd else None,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ExecutionFailedError(str(e)) from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            proc.kill()
            await proc.wait()
            raise ExecutionFailedError(
                f"engine timed out after {self._timeout} seconds"
            ) from e

        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace")
            if not detail.strip():
                detail = f"exit status {proc.returncode}"
            raise ExecutionFailedError(detail)

        if stderr:
            logger.debug("engine_stderr", extra={"stderr": stderr.decode("utf-8", errors="replace")})
        return stdout


class SeriesEngine:
    """
    In-process engine: takes raw per-channel time series from source, resamples them onto
    the year grid and emits the same CSV the external engine writes.
    """

    def __init__(
        self,
        source: ChannelSource,
        horizon_years: int = DEFAULT_HORIZON_YEARS,
    ) -> None:
        self._source = source
        self._horizon = horizon_years

    async def run(self, params: SimulationParameters) -> bytes:
        try:
            channels = self._source(params)
        except Exception as e:
            raise ExecutionFailedError(f"Error running model: {e}") from e
        results = resample_channels(channels, params, self._horizon)
        return format_output(results).encode("utf-8")
