# Domain models: simulation parameters and results.

from oil_model_server.domain.models.simulation import (
    DEFAULT_DRILLING_RATE,
    DEFAULT_EXCHANGE_RATE,
    DEFAULT_OIL_PRICE,
    DEFAULT_SCENARIO,
    SimulationParameters,
    SimulationResult,
)

__all__ = [
    "DEFAULT_DRILLING_RATE",
    "DEFAULT_EXCHANGE_RATE",
    "DEFAULT_OIL_PRICE",
    "DEFAULT_SCENARIO",
    "SimulationParameters",
    "SimulationResult",
]
