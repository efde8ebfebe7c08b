"""Resampler tests: clamping, interpolation without overshoot, revenue disambiguation."""

import pytest

from oil_model_server.domain.models.simulation import SimulationParameters
from oil_model_server.domain.resampling import (
    CHANNEL_NEW_WELLS_FUND,
    CHANNEL_OLD_WELLS_FUND,
    CHANNEL_PRODUCTION_VOLUME,
    CHANNEL_REVENUE,
    disambiguate_revenue,
    resample_channels,
    sample_at,
    sample_at_years,
)

SERIES = [(0.5, 10.0), (2.0, 40.0), (2.0, 50.0), (7.25, 5.0), (12.0, 20.0)]


def test_empty_series_is_zero():
    assert sample_at([], 3.0) == 0.0
    assert sample_at_years([], range(3)) == [0.0, 0.0, 0.0]


@pytest.mark.parametrize("t", [-5.0, 0.0, 0.5])
def test_clamps_low_to_first_value(t):
    assert sample_at(SERIES, t) == 10.0


@pytest.mark.parametrize("t", [12.0, 13.0, 30.0])
def test_clamps_high_to_last_value(t):
    assert sample_at(SERIES, t) == 20.0


def test_linear_interpolation():
    assert sample_at([(0.0, 0.0), (10.0, 100.0)], 2.5) == pytest.approx(25.0)
    assert sample_at([(1.0, 4.0), (3.0, 0.0)], 2.0) == pytest.approx(2.0)


def test_interpolation_stays_between_bracketing_values():
    for t in [1, 3, 4, 5, 6, 7, 8, 9, 10, 11]:
        value = sample_at(SERIES, float(t))
        for (x1, y1), (x2, y2) in zip(SERIES, SERIES[1:]):
            if x1 < t < x2:
                assert min(y1, y2) <= value <= max(y1, y2)


def test_duplicate_sample_time_returns_left_value():
    assert sample_at(SERIES, 2.0) == 40.0


def test_single_point_series_is_constant():
    assert sample_at_years([(4.0, 7.0)], range(0, 31)) == [7.0] * 31


def test_sample_at_years_defaults_to_31_years():
    values = sample_at_years([(0.0, 0.0), (30.0, 30.0)])
    assert len(values) == 31
    assert values == pytest.approx([float(y) for y in range(31)])


def test_sampling_is_deterministic():
    assert sample_at_years(SERIES) == sample_at_years(list(SERIES))


def test_revenue_override_uses_production_price_and_rate():
    assert disambiguate_revenue(0.5, 10.0, 80.0, 75.0) == 60000.0


@pytest.mark.parametrize("revenue", [0.0, 1.0])
def test_revenue_override_bounds_inclusive(revenue):
    assert disambiguate_revenue(revenue, 2.0, 10.0, 3.0) == 60.0


@pytest.mark.parametrize(
    "revenue,production",
    [(1.5, 10.0), (-0.1, 10.0), (0.5, 0.0), (0.5, -3.0)],
)
def test_revenue_kept_outside_override_conditions(revenue, production):
    assert disambiguate_revenue(revenue, production, 80.0, 75.0) == revenue


def test_resample_channels_builds_full_year_grid():
    params = SimulationParameters(scenario=2, drilling_rate=10, oil_price=80.0, exchange_rate=75.0)
    channels = {
        CHANNEL_REVENUE: [(0.0, 0.5), (30.0, 0.5)],
        CHANNEL_PRODUCTION_VOLUME: [(0.0, 10.0), (30.0, 10.0)],
        CHANNEL_NEW_WELLS_FUND: [(0.0, 0.0), (10.0, 100.0)],
    }
    results = resample_channels(channels, params)
    assert [r.year for r in results] == list(range(31))
    assert all(r.scenario == 2 for r in results)
    assert all(r.revenue == 60000.0 for r in results)
    assert results[5].new_wells_fund == pytest.approx(50.0)
    assert results[20].new_wells_fund == 100.0
    assert all(r.old_wells_fund == 0.0 for r in results)
    assert CHANNEL_OLD_WELLS_FUND not in channels


def test_resample_channels_override_evaluated_per_year():
    params = SimulationParameters(scenario=1, drilling_rate=10, oil_price=2.0, exchange_rate=3.0)
    channels = {
        CHANNEL_REVENUE: [(0.0, 0.0), (2.0, 4.0)],
        CHANNEL_PRODUCTION_VOLUME: [(0.0, 1.0), (2.0, 1.0)],
    }
    results = resample_channels(channels, params, horizon_years=2)
    assert [r.revenue for r in results] == [6.0, 2.0, 4.0]
