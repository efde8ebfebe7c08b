"""Audit repository protocol. Governance layer depends on this; infrastructure implements it."""

from typing import List, Protocol

from oil_model_server.governance.audit_models import AuditRecord


class AuditRepository(Protocol):
    """Protocol for the append-only audit store."""

    async def save(self, record: AuditRecord) -> None:
        """Append one record. The store assigns id and timestamp."""
        ...

    async def list_for_user(self, username: str, limit: int) -> List[AuditRecord]:
        """Records for username, newest first, at most limit."""
        ...

    async def ping(self) -> bool:
        """True when the store is reachable."""
        ...
