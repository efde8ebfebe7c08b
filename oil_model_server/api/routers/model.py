"""Model API router: POST /api/run-model, GET /api/history."""

from typing import Annotated

from fastapi import APIRouter, Depends

from oil_model_server.api.dependencies import (
    get_audit_logger,
    get_current_username,
    get_orchestrator,
)
from oil_model_server.application.job_orchestrator import JobOrchestrator
from oil_model_server.domain.schemas.envelope import ok
from oil_model_server.domain.schemas.simulation import AuditRecordResponse, ModelRunRequest
from oil_model_server.governance.audit_logger import AuditLogger

router = APIRouter()


@router.post("/run-model")
async def run_model(
    body: ModelRunRequest,
    username: Annotated[str, Depends(get_current_username)],
    orchestrator: Annotated[JobOrchestrator, Depends(get_orchestrator)],
):
    """Run the simulation synchronously. Out-of-range parameters are replaced by defaults, never rejected."""
    run = await orchestrator.run_model(username, body.to_parameters())
    return ok("Simulation completed", run.to_dict())


@router.get("/history")
async def history(
    username: Annotated[str, Depends(get_current_username)],
    audit_logger: Annotated[AuditLogger, Depends(get_audit_logger)],
):
    """Caller's most recent runs, newest first."""
    records = await audit_logger.history(username)
    data = [
        AuditRecordResponse.model_validate(record.to_dict()).model_dump(
            mode="json", exclude_none=True
        )
        for record in records
    ]
    return ok(data=data)
