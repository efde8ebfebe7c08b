"""Status API router: GET /api/status."""

import time
from typing import Annotated

from fastapi import APIRouter, Depends

from oil_model_server.api.dependencies import get_audit_logger
from oil_model_server.config.settings import get_settings
from oil_model_server.governance.audit_logger import AuditLogger
from oil_model_server.domain.schemas.envelope import ok

router = APIRouter()


@router.get("/status")
async def status(audit_logger: Annotated[AuditLogger, Depends(get_audit_logger)]):
    """Liveness plus audit store connectivity."""
    settings = get_settings()
    database = "connected" if await audit_logger.is_available() else "disconnected"
    return ok(
        "Server is running",
        {
            "timestamp": int(time.time()),
            "version": settings.version,
            "database": database,
        },
    )
