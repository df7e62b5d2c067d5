import pytest

from comp_model.call_pay.budget import calculate_call_budget
from comp_model.call_pay.forecast import (
    ForecastAssumptions,
    calculate_budget_variance,
    generate_budget_forecast,
)
from comp_model.call_pay.models import CallProvider
from comp_model.exceptions import ValidationError


@pytest.fixture
def budget(program, providers, daily_tier, assumptions):
    return calculate_call_budget(program, providers, [daily_tier], assumptions)


def test_rate_increase_only(program, budget):
    forecast = generate_budget_forecast(
        program, budget, ForecastAssumptions(rateIncreasePercent=3, yearsToForecast=3)
    )
    assert [f.year for f in forecast.forecasts] == [2025, 2026, 2027]
    first = forecast.forecasts[0]
    assert first.total_providers == 4
    assert first.adjusted_budget == pytest.approx(budget.total_annual_call_budget * 1.03)
    assert forecast.forecasts[2].rate_increase == pytest.approx((1.03 ** 3 - 1) * 100)
    expected_total = budget.total_annual_call_budget * (1 + 1.03 + 1.03 ** 2 + 1.03 ** 3)
    assert forecast.total_projected_spend == pytest.approx(expected_total)


def test_provider_growth(program, budget):
    forecast = generate_budget_forecast(
        program, budget, ForecastAssumptions(providerGrowthPercent=25, yearsToForecast=1)
    )
    year = forecast.forecasts[0]
    assert year.total_providers == 5
    assert year.provider_growth == pytest.approx(25)
    assert year.adjusted_budget == pytest.approx(budget.avg_call_pay_per_provider * 5)


def test_flat_forecast_starts_from_eligible_providers(program, providers, daily_tier, assumptions):
    roster = providers[:3] + [CallProvider(id="p4", fte=1.0, eligibleForCall=False)]
    budget = calculate_call_budget(program, roster, [daily_tier], assumptions)
    forecast = generate_budget_forecast(program, budget, ForecastAssumptions(yearsToForecast=1))
    year = forecast.forecasts[0]
    assert year.total_providers == 3
    assert year.provider_growth == pytest.approx(0)
    assert year.adjusted_budget == pytest.approx(budget.total_annual_call_budget)

def test_forecast_needs_a_year():
    with pytest.raises(ValidationError):
        ForecastAssumptions(yearsToForecast=0)


def test_budget_variance():
    over = calculate_budget_variance(110, 100)
    assert over.variance == pytest.approx(10)
    assert over.variance_percent == pytest.approx(10)
    assert over.is_over_budget
    assert calculate_budget_variance(50, 0).variance_percent == 0
    assert not calculate_budget_variance(90, 100).is_over_budget
