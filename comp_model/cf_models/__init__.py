"""
CF models package: conversion-factor model variants and their evaluator.
"""

__all__ = [
    "SingleCFModel",
    "TieredCFModel",
    "PercentileTieredCFModel",
    "BudgetNeutralCFModel",
    "QualityWeightedCFModel",
    "FTEAdjustedCFModel",
    "CFModel",
    "CFContext",
    "CFResult",
    "BracketAllocation",
    "parse_cf_model",
    "evaluate_cf",
    "bracket_allocations",
    "calculate_incentive_pay",
    "summarize_cf_model",
]

from .engine import bracket_allocations, calculate_incentive_pay, evaluate_cf
from .models import (
    BracketAllocation,
    BudgetNeutralCFModel,
    CFContext,
    CFModel,
    CFResult,
    FTEAdjustedCFModel,
    PercentileTieredCFModel,
    QualityWeightedCFModel,
    SingleCFModel,
    TieredCFModel,
    parse_cf_model,
)
from .summary import summarize_cf_model
