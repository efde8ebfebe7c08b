"""Governance: audit trail of model runs. No FastAPI."""

from oil_model_server.governance.audit_logger import AuditLogger
from oil_model_server.governance.audit_models import AuditRecord
from oil_model_server.governance.audit_repository import AuditRepository

__all__ = [
    "AuditLogger",
    "AuditRecord",
    "AuditRepository",
]
