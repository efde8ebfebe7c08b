"""Pydantic schemas for the run-model and history API. Out-of-range values are accepted here and normalized later."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from oil_model_server.domain.models.simulation import SimulationParameters


class ModelRunRequest(BaseModel):
    """Body of /api/run-model. Missing fields default to 0, which normalization replaces."""

    model_config = ConfigDict(populate_by_name=True)

    # strict: "2", true and 2.0 are not integers
    scenario: Optional[int] = Field(0, strict=True)
    drilling_rate: Optional[int] = Field(0, alias="drillingRate", strict=True)
    oil_price: Optional[float] = Field(0.0, alias="oilPrice", strict=True)
    exchange_rate: Optional[float] = Field(0.0, alias="exchangeRate", strict=True)

    def to_parameters(self) -> SimulationParameters:
        """Raw (not yet normalized) parameters; null fields count as zero."""
        return SimulationParameters(
            scenario=self.scenario or 0,
            drilling_rate=self.drilling_rate or 0,
            oil_price=self.oil_price or 0.0,
            exchange_rate=self.exchange_rate or 0.0,
        )


class ParametersView(BaseModel):
    scenario: int
    drillingRate: int
    oilPrice: float
    exchangeRate: float


class AuditRecordResponse(BaseModel):
    """One history entry as returned by /api/history."""

    id: int
    username: str
    timestamp: datetime
    parameters: ParametersView
    success: bool
    resultCount: int
    errorMessage: Optional[str] = None
