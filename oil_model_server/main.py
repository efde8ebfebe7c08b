# oil_model_server/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from oil_model_server.api.middleware import (
    CORS_HEADERS,
    CORSHeadersMiddleware,
    CorrelationIdMiddleware,
    RequestAuditMiddleware,
)
from oil_model_server.api.routers import auth, model, status
from oil_model_server.application.engine import SubprocessEngine
from oil_model_server.application.exceptions import (
    ApplicationError,
    ExecutionFailedError,
    ParseFailedError,
    StoreUnavailableError,
)
from oil_model_server.application.job_orchestrator import JobOrchestrator
from oil_model_server.config.logging import configure_logging
from oil_model_server.config.settings import AppSettings, get_settings
from oil_model_server.domain.schemas.envelope import fail
from oil_model_server.governance.audit_logger import AuditLogger
from oil_model_server.infrastructure.database.audit_repository_db import DbAuditRepository
from oil_model_server.infrastructure.database.session import build_engine
from oil_model_server.security.exceptions import (
    CredentialTooShortError,
    InvalidCredentialsError,
    SecurityError,
    UnauthorizedError,
    UsernameTakenError,
)
from oil_model_server.security.session_store import CredentialStore, SessionStore

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

ROUTES = (
    ("POST", "/api/login", "Login"),
    ("POST", "/api/register", "Register new user"),
    ("POST", "/api/logout", "Logout"),
    ("POST", "/api/run-model", "Run simulation (auth required)"),
    ("GET", "/api/history", "Request history (auth required)"),
    ("GET", "/api/status", "Server status"),
)


async def build_audit_repository(app_settings: AppSettings) -> DbAuditRepository | None:
    """Connect the audit store. A store that is down at startup is kept; calls report it unavailable."""
    if not app_settings.database_url:
        logger.warning("audit_store_not_configured")
        return None
    repository = DbAuditRepository(build_engine(app_settings.database_url))
    try:
        await repository.create_schema()
        logger.info("audit_store_connected")
    except Exception as e:
        logger.warning("audit_store_connect_failed", extra={"error": str(e)})
    return repository


@asynccontextmanager
async def lifespan(app: FastAPI):
    credentials = CredentialStore(settings.default_users)
    sessions = SessionStore(credentials)
    repository = await build_audit_repository(settings)
    audit_logger = AuditLogger(repository, history_limit=settings.history_limit)
    engine = SubprocessEngine(
        settings.engine_command(),
        cwd=settings.model_dir,
        timeout_seconds=settings.engine_timeout_seconds,
    )

    app.state.session_store = sessions
    app.state.audit_logger = audit_logger
    app.state.orchestrator = JobOrchestrator(engine, audit_logger)

    logger.info(
        "server_started",
        extra={
            "version": settings.version,
            "model_dir": str(settings.model_dir.resolve()),
            "routes": [f"{method} {path} - {summary}" for method, path, summary in ROUTES],
            "default_users": sorted(settings.default_users),
        },
    )
    try:
        yield
    finally:
        sessions.clear()
        if repository is not None:
            await repository.dispose()
        logger.info("server_stopped")


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CORS -> CorrelationId -> RequestAudit.
app.add_middleware(RequestAuditMiddleware)
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(CORSHeadersMiddleware)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return JSONResponse(status_code=400, content=fail(f"Invalid JSON: {errors}"))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=fail(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(CredentialTooShortError)
async def credential_too_short_handler(request, exc: CredentialTooShortError):
    return JSONResponse(status_code=400, content=fail(exc.message))


@app.exception_handler(UsernameTakenError)
async def username_taken_handler(request, exc: UsernameTakenError):
    return JSONResponse(status_code=409, content=fail(exc.message))


@app.exception_handler(InvalidCredentialsError)
async def invalid_credentials_handler(request, exc: InvalidCredentialsError):
    return JSONResponse(status_code=401, content=fail(exc.message))


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request, exc: UnauthorizedError):
    return JSONResponse(status_code=401, content=fail(exc.message))


@app.exception_handler(SecurityError)
async def security_error_handler(request, exc: SecurityError):
    return JSONResponse(status_code=400, content=fail(exc.message))


@app.exception_handler(ExecutionFailedError)
async def execution_failed_handler(request, exc: ExecutionFailedError):
    return JSONResponse(status_code=500, content=fail(f"Model execution failed: {exc.message}"))


@app.exception_handler(ParseFailedError)
async def parse_failed_handler(request, exc: ParseFailedError):
    return JSONResponse(status_code=500, content=fail(f"Failed to parse results: {exc.message}"))


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request, exc: StoreUnavailableError):
    return JSONResponse(status_code=500, content=fail(f"Failed to fetch history: {exc.message}"))


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    return JSONResponse(status_code=500, content=fail(exc.message))


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    logger.exception("unhandled_error")
    # Runs in ServerErrorMiddleware, outside CORSHeadersMiddleware.
    return JSONResponse(
        status_code=500,
        content=fail("Internal server error"),
        headers=CORS_HEADERS,
    )


# Routers: /api/login, /api/register, /api/logout, /api/run-model, /api/history, /api/status
app.include_router(auth.router, prefix="/api")
app.include_router(model.router, prefix="/api")
app.include_router(status.router, prefix="/api")


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
