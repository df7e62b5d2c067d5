# comp_model/call_pay/forecast.py
"""
Multi-year call budget projection with annual rate increases and provider growth.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from comp_model.call_pay.models import BudgetResult, CallProgram
from comp_model.exceptions import ValidationError

logger = logging.getLogger(__name__)


class ForecastAssumptions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rate_increase_percent: float = Field(0.0, alias="rateIncreasePercent")
    provider_growth_percent: float = Field(0.0, alias="providerGrowthPercent")
    years_to_forecast: int = Field(3, alias="yearsToForecast")

    @model_validator(mode="after")
    def check_years(self) -> "ForecastAssumptions":
        if self.years_to_forecast < 1:
            raise ValidationError(f"years_to_forecast must be at least 1 (got {self.years_to_forecast})")
        return self


@dataclass(frozen=True)
class YearlyForecast:
    year: int
    base_budget: float
    adjusted_budget: float
    rate_increase: float
    provider_growth: float
    total_providers: int
    average_pay_per_provider: float


@dataclass(frozen=True)
class MultiYearForecast:
    base_year: int
    base_budget: float
    forecasts: List[YearlyForecast] = field(default_factory=list)
    total_projected_spend: float = 0.0


def generate_budget_forecast(
    program: CallProgram,
    budget: BudgetResult,
    assumptions: ForecastAssumptions,
) -> MultiYearForecast:
    """
    Project the call budget forward from ``program.model_year``.

    Average pay per provider compounds by the rate increase each year; the
    provider count compounds by the growth rate from the eligible headcount the
    budget was priced for (``providers_on_call`` when the budget has none) and
    is rounded to whole providers. ``rate_increase`` and ``provider_growth`` in each
    row are cumulative percentages over the base year. The projected spend
    includes the base year.
    """
    base_providers = budget.eligible_provider_count or program.providers_on_call
    base_pay = budget.avg_call_pay_per_provider
    rate_factor = 1.0
    forecasts: List[YearlyForecast] = []

    for offset in range(1, assumptions.years_to_forecast + 1):
        rate_factor *= 1 + assumptions.rate_increase_percent / 100
        providers = round(base_providers * (1 + assumptions.provider_growth_percent / 100) ** offset)
        average_pay = base_pay * rate_factor
        forecasts.append(
            YearlyForecast(
                year=program.model_year + offset,
                base_budget=budget.total_annual_call_budget,
                adjusted_budget=average_pay * providers,
                rate_increase=(rate_factor - 1) * 100,
                provider_growth=(providers - base_providers) / base_providers * 100,
                total_providers=providers,
                average_pay_per_provider=average_pay,
            )
        )

    total = budget.total_annual_call_budget + sum(f.adjusted_budget for f in forecasts)
    logger.info(
        f"Forecast {program.model_year}-{program.model_year + assumptions.years_to_forecast}: "
        f"projected spend {total:.2f}"
    )
    return MultiYearForecast(
        base_year=program.model_year,
        base_budget=budget.total_annual_call_budget,
        forecasts=forecasts,
        total_projected_spend=total,
    )


@dataclass(frozen=True)
class BudgetVariance:
    variance: float
    variance_percent: float
    is_over_budget: bool


def calculate_budget_variance(actual: float, budgeted: float) -> BudgetVariance:
    """Actual minus budgeted; the percentage is 0 when nothing was budgeted."""
    variance = actual - budgeted
    return BudgetVariance(
        variance=variance,
        variance_percent=variance / budgeted * 100 if budgeted > 0 else 0.0,
        is_over_budget=variance > 0,
    )


__all__ = [
    "ForecastAssumptions",
    "YearlyForecast",
    "MultiYearForecast",
    "BudgetVariance",
    "generate_budget_forecast",
    "calculate_budget_variance",
]
