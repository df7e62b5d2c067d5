"""
Call-pay package: call budget, burden allocation, fairness and stipend calculators.
"""

__all__ = [
    "CallProgram",
    "CallProvider",
    "CallAssumptions",
    "TierBurden",
    "CallTierRates",
    "CallTier",
    "BudgetResult",
    "FairnessSummary",
    "ProviderBurden",
    "CallPayResult",
    "ValidationReport",
    "calculate_call_budget",
    "calculate_expected_burden",
    "calculate_fairness_metrics",
    "calculate_per_call_stipend",
    "calculate_per_shift_pay",
    "calculate_tiered_call_pay",
    "ForecastAssumptions",
    "generate_budget_forecast",
    "calculate_budget_variance",
    "validate_configuration",
]

from .budget import calculate_call_budget
from .burden import calculate_expected_burden, calculate_fairness_metrics
from .forecast import ForecastAssumptions, calculate_budget_variance, generate_budget_forecast
from .models import (
    BudgetResult,
    CallAssumptions,
    CallPayResult,
    CallProgram,
    CallProvider,
    CallTier,
    CallTierRates,
    FairnessSummary,
    ProviderBurden,
    TierBurden,
    ValidationReport,
)
from .stipends import calculate_per_call_stipend, calculate_per_shift_pay, calculate_tiered_call_pay
from .validation import validate_configuration
