"""Fixtures for API unit tests: in-memory stores, stub engine, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient

from oil_model_server.application.job_orchestrator import JobOrchestrator
from oil_model_server.governance.audit_logger import AuditLogger
from oil_model_server.main import app
from oil_model_server.security.session_store import CredentialStore, SessionStore


@pytest.fixture
def session_store():
    return SessionStore(CredentialStore({"admin": "admin123", "user": "user123"}))


@pytest.fixture
def audit_logger(audit_repository):
    return AuditLogger(repository=audit_repository)


@pytest.fixture
def orchestrator(stub_engine, audit_logger):
    return JobOrchestrator(stub_engine, audit_logger)


@pytest.fixture
def app_with_overrides(session_store, audit_logger, orchestrator):
    """App with stores, audit logger and orchestrator overridden for testing."""
    from oil_model_server.api import dependencies

    app.dependency_overrides[dependencies.get_session_store] = lambda: session_store
    app.dependency_overrides[dependencies.get_audit_logger] = lambda: audit_logger
    app.dependency_overrides[dependencies.get_orchestrator] = lambda: orchestrator
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app_with_overrides):
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers(session_store):
    token = session_store.login("admin", "admin123")
    return {"Authorization": f"Bearer {token}"}
