"""Immutable audit record model: one per model-run attempt."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from oil_model_server.domain.models.simulation import SimulationParameters


@dataclass(frozen=True)
class AuditRecord:
    """
    Outcome of one job attempt. id and timestamp are assigned by the store;
    they are None on records that have not been persisted yet.
    """

    username: str
    parameters: SimulationParameters
    success: bool
    result_count: int
    error_message: Optional[str] = None
    id: Optional[int] = None
    timestamp: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation for the history API and JSON logging."""
        data: Dict[str, Any] = {
            "id": self.id,
            "username": self.username,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "parameters": self.parameters.to_dict(),
            "success": self.success,
            "resultCount": self.result_count,
        }
        if self.error_message:
            data["errorMessage"] = self.error_message
        return data
