"""Shared fixtures: in-memory audit repository and canned engines."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from oil_model_server.application.engine_output import CSV_HEADER
from oil_model_server.domain.models.simulation import SimulationParameters
from oil_model_server.governance.audit_models import AuditRecord


class InMemoryAuditRepository:
    """Append-only list standing in for the request_logs table."""

    def __init__(self):
        self.records: List[AuditRecord] = []
        self.available = True
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    async def save(self, record: AuditRecord) -> None:
        if not self.available:
            raise ConnectionError("connection refused")
        self._clock += timedelta(seconds=1)
        self.records.append(
            replace(record, id=len(self.records) + 1, timestamp=self._clock)
        )

    async def list_for_user(self, username: str, limit: int) -> List[AuditRecord]:
        if not self.available:
            raise ConnectionError("connection refused")
        mine = [r for r in self.records if r.username == username]
        mine.sort(key=lambda r: (r.timestamp, r.id), reverse=True)
        return mine[:limit]

    async def ping(self) -> bool:
        if not self.available:
            raise ConnectionError("connection refused")
        return True


def csv_output(params: SimulationParameters, years: int = 31) -> bytes:
    """Well-formed engine stdout: header plus one row per year."""
    lines = [CSV_HEADER]
    for year in range(years):
        lines.append(
            "%.2f,%d,%.2f,%.2f,%.2f,%.2f"
            % (year, params.scenario, 1000.0 + year, 10.0 + year, 5.0, 95.0 - year)
        )
    return ("\n".join(lines) + "\n").encode("utf-8")


class StubEngine:
    """Returns canned stdout, or raises the configured error. Records every call."""

    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error
        self.calls: List[SimulationParameters] = []

    async def run(self, params: SimulationParameters) -> bytes:
        self.calls.append(params)
        if self.error is not None:
            raise self.error
        if self.output is not None:
            return self.output
        return csv_output(params)


@pytest.fixture
def audit_repository():
    return InMemoryAuditRepository()


@pytest.fixture
def stub_engine():
    return StubEngine()


@pytest.fixture
def make_stub_engine():
    """Factory for engines with canned output or a canned failure."""
    return StubEngine
