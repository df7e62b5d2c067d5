"""
Compensation benchmarking, conversion-factor and call-pay budget engine.

Subpackages:
- benchmarks: market benchmark records and the percentile estimator
- fmv: fair-market-value risk classification and narrative
- cf_models: conversion-factor model variants and their evaluator
- call_pay: call budget, burden, fairness, stipends and forecasting
- reporting: pandas views of results
- config: scenario files
"""

__version__ = "0.1.0"

__all__ = [
    "EngineError",
    "ValidationError",
    "UnmatchedTierError",
    "DegenerateInputError",
    "estimate_percentile",
    "value_at_percentile",
    "evaluate_fmv",
    "find_best_matching_benchmark",
    "evaluate_cf",
    "calculate_call_budget",
    "calculate_expected_burden",
    "calculate_fairness_metrics",
]

from .benchmarks.percentile import estimate_percentile, value_at_percentile
from .call_pay.budget import calculate_call_budget
from .call_pay.burden import calculate_expected_burden, calculate_fairness_metrics
from .cf_models.engine import evaluate_cf
from .exceptions import DegenerateInputError, EngineError, UnmatchedTierError, ValidationError
from .fmv.evaluator import evaluate_fmv, find_best_matching_benchmark
