"""Resample irregular engine time series onto the integer year grid. Pure functions, no state."""

from typing import Iterable, List, Mapping, Sequence, Tuple

from oil_model_server.domain.models.simulation import SimulationParameters, SimulationResult

Sample = Tuple[float, float]

CHANNEL_REVENUE = "revenue"
CHANNEL_PRODUCTION_VOLUME = "production_volume"
CHANNEL_NEW_WELLS_FUND = "new_wells_fund"
CHANNEL_OLD_WELLS_FUND = "old_wells_fund"

DEFAULT_HORIZON_YEARS = 30


def sample_at(series: Sequence[Sample], t: float) -> float:
    """
    Value of series at time t. Series is ordered by time.
    Empty -> 0.0; clamps to the first/last value outside the sampled range;
    linear interpolation between bracketing samples otherwise.
    """
    if not series:
        return 0.0
    first_t, first_v = series[0]
    last_t, last_v = series[-1]
    if t <= first_t:
        return first_v
    if t >= last_t:
        return last_v
    for (x1, y1), (x2, y2) in zip(series, series[1:]):
        if x1 <= t <= x2:
            if x2 == x1:
                return y1
            return y1 + (t - x1) / (x2 - x1) * (y2 - y1)
    return last_v


def sample_at_years(
    series: Sequence[Sample],
    years: Iterable[int] = range(0, DEFAULT_HORIZON_YEARS + 1),
) -> List[float]:
    """Sample series at each year, in order."""
    return [sample_at(series, float(year)) for year in years]


def disambiguate_revenue(
    revenue: float,
    production: float,
    oil_price: float,
    exchange_rate: float,
) -> float:
    """
    The revenue channel sometimes carries a normalized 0..1 figure instead of money.
    When that happens and production is positive, rebuild revenue from production.
    """
    if 0.0 <= revenue <= 1.0 and production > 0:
        return production * oil_price * exchange_rate
    return revenue


def resample_channels(
    channels: Mapping[str, Sequence[Sample]],
    params: SimulationParameters,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> List[SimulationResult]:
    """Build one SimulationResult per year 0..horizon_years from named engine channels."""
    years = range(0, horizon_years + 1)
    revenue = sample_at_years(channels.get(CHANNEL_REVENUE, ()), years)
    production = sample_at_years(channels.get(CHANNEL_PRODUCTION_VOLUME, ()), years)
    new_wells = sample_at_years(channels.get(CHANNEL_NEW_WELLS_FUND, ()), years)
    old_wells = sample_at_years(channels.get(CHANNEL_OLD_WELLS_FUND, ()), years)

    results = []
    for i, year in enumerate(years):
        results.append(
            SimulationResult(
                year=year,
                scenario=params.scenario,
                revenue=disambiguate_revenue(
                    revenue[i], production[i], params.oil_price, params.exchange_rate
                ),
                production_volume=production[i],
                new_wells_fund=new_wells[i],
                old_wells_fund=old_wells[i],
            )
        )
    return results
