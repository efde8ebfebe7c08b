"""AuditLogger: best-effort writes, history ordering and limit, explicit unavailability."""

from unittest.mock import AsyncMock

import pytest

from oil_model_server.application.exceptions import StoreUnavailableError
from oil_model_server.domain.models.simulation import SimulationParameters
from oil_model_server.governance.audit_logger import AuditLogger
from oil_model_server.governance.audit_models import AuditRecord


@pytest.fixture
def audit_logger(audit_repository):
    return AuditLogger(repository=audit_repository)


async def _record(logger, username="admin", success=True, count=31, error=None):
    await logger.record(
        username=username,
        parameters=SimulationParameters(),
        success=success,
        result_count=count,
        error=error,
    )


async def test_record_persists_fields(audit_logger, audit_repository):
    await _record(audit_logger, success=False, count=0, error="engine crashed")
    record = audit_repository.records[0]
    assert isinstance(record, AuditRecord)
    assert record.username == "admin"
    assert record.success is False
    assert record.result_count == 0
    assert record.error_message == "engine crashed"
    assert record.parameters == SimulationParameters()
    with pytest.raises(AttributeError):
        record.username = "other"  # type: ignore[misc]


async def test_empty_error_stored_as_none(audit_logger, audit_repository):
    await _record(audit_logger, error="")
    assert audit_repository.records[0].error_message is None


async def test_record_swallows_store_failure():
    repo = AsyncMock()
    repo.save = AsyncMock(side_effect=RuntimeError("disk full"))
    logger = AuditLogger(repository=repo)
    await _record(logger)
    assert repo.save.await_count == 1


async def test_record_without_store_is_noop():
    await _record(AuditLogger(repository=None))


async def test_history_empty_for_new_user(audit_logger):
    assert await audit_logger.history("nobody") == []


async def test_history_newest_first_and_scoped_to_user(audit_logger):
    await _record(audit_logger, username="admin", count=1)
    await _record(audit_logger, username="user", count=2)
    await _record(audit_logger, username="admin", count=3)
    history = await audit_logger.history("admin")
    assert [r.result_count for r in history] == [3, 1]
    assert all(r.username == "admin" for r in history)


async def test_history_capped_at_limit(audit_repository):
    logger = AuditLogger(repository=audit_repository, history_limit=50)
    for i in range(55):
        await _record(logger, count=i)
    history = await logger.history("admin")
    assert len(history) == 50
    assert history[0].result_count == 54


async def test_history_without_store_raises_unavailable():
    with pytest.raises(StoreUnavailableError):
        await AuditLogger(repository=None).history("admin")


async def test_history_store_error_raises_unavailable(audit_logger, audit_repository):
    audit_repository.available = False
    with pytest.raises(StoreUnavailableError):
        await audit_logger.history("admin")


async def test_is_available(audit_logger, audit_repository):
    assert await audit_logger.is_available() is True
    audit_repository.available = False
    assert await audit_logger.is_available() is False
    assert await AuditLogger(repository=None).is_available() is False


def test_to_dict_omits_empty_error():
    record = AuditRecord(
        username="admin",
        parameters=SimulationParameters(),
        success=True,
        result_count=31,
    )
    d = record.to_dict()
    assert "errorMessage" not in d
    assert d["resultCount"] == 31
    assert d["parameters"]["oilPrice"] == 80.0
