"""Simulation domain models: parameters with their normalization policy and per-year results."""

import math
from dataclasses import dataclass
from typing import Any, Dict

DEFAULT_SCENARIO = 1
DEFAULT_DRILLING_RATE = 50
DEFAULT_OIL_PRICE = 80.0
DEFAULT_EXCHANGE_RATE = 75.0

VALID_SCENARIOS = frozenset({1, 2, 3})


def _positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class SimulationParameters:
    """Inputs to one engine run. Use normalized() before dispatching to the engine."""

    scenario: int = DEFAULT_SCENARIO
    drilling_rate: int = DEFAULT_DRILLING_RATE
    oil_price: float = DEFAULT_OIL_PRICE
    exchange_rate: float = DEFAULT_EXCHANGE_RATE

    def normalized(self) -> "SimulationParameters":
        """
        Replace every out-of-domain field with its default. Never rejects:
        scenario outside {1,2,3} -> 1, non-positive drilling rate -> 50,
        non-positive or non-finite oil price -> 80.0, exchange rate -> 75.0.
        """
        return SimulationParameters(
            scenario=self.scenario if self.scenario in VALID_SCENARIOS else DEFAULT_SCENARIO,
            drilling_rate=self.drilling_rate if self.drilling_rate > 0 else DEFAULT_DRILLING_RATE,
            oil_price=float(self.oil_price) if _positive(self.oil_price) else DEFAULT_OIL_PRICE,
            exchange_rate=(
                float(self.exchange_rate)
                if _positive(self.exchange_rate)
                else DEFAULT_EXCHANGE_RATE
            ),
        )

    def to_engine_args(self) -> list[str]:
        """Positional argv for the engine process: scenario drillingRate oilPrice exchangeRate."""
        return [
            str(self.scenario),
            str(self.drilling_rate),
            f"{self.oil_price:.2f}",
            f"{self.exchange_rate:.2f}",
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scenario": self.scenario,
            "drillingRate": self.drilling_rate,
            "oilPrice": self.oil_price,
            "exchangeRate": self.exchange_rate,
        }


@dataclass(frozen=True)
class SimulationResult:
    """Model state sampled at one integer year."""

    year: int
    scenario: int
    revenue: float
    production_volume: float
    new_wells_fund: float
    old_wells_fund: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "scenario": self.scenario,
            "revenue": self.revenue,
            "productionVolume": self.production_volume,
            "newWellsFund": self.new_wells_fund,
            "oldWellsFund": self.old_wells_fund,
        }
