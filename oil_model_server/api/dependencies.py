"""FastAPI dependency injection: stores, audit logger, orchestrator, authenticated username."""

from typing import Annotated, Optional

from fastapi import Depends, Header, Request

from oil_model_server.application.job_orchestrator import JobOrchestrator
from oil_model_server.core.context import username_ctx
from oil_model_server.governance.audit_logger import AuditLogger
from oil_model_server.security.session_store import CredentialStore, SessionStore

BEARER_PREFIX = "Bearer "


def get_session_store(request: Request) -> SessionStore:
    """Session store created at startup (see main.lifespan)."""
    return request.app.state.session_store


def get_credential_store(
    sessions: Annotated[SessionStore, Depends(get_session_store)],
) -> CredentialStore:
    return sessions.credentials


def get_audit_logger(request: Request) -> AuditLogger:
    return request.app.state.audit_logger


def get_orchestrator(request: Request) -> JobOrchestrator:
    return request.app.state.orchestrator


def get_bearer_token(
    authorization: Annotated[Optional[str], Header()] = None,
) -> str:
    """Token from the Authorization header; the "Bearer " prefix is optional."""
    token = authorization or ""
    if token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):]
    return token


async def get_current_username(
    request: Request,
    token: Annotated[str, Depends(get_bearer_token)],
    sessions: Annotated[SessionStore, Depends(get_session_store)],
) -> str:
    """Resolve the caller's username; raises UnauthorizedError for missing or unknown tokens."""
    username = sessions.authenticate(token)
    request.state.username = username
    username_ctx.set(username)
    return username
