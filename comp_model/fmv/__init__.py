"""
FMV package: benchmark matching, risk classification and narrative text.
"""

__all__ = [
    "RiskLevel",
    "EvaluationInput",
    "EvaluationResult",
    "FMVPolicy",
    "find_best_matching_benchmark",
    "classify_risk",
    "evaluate_fmv",
    "evaluate_budget_fmv",
    "build_narrative",
]

from .evaluator import classify_risk, evaluate_budget_fmv, evaluate_fmv, find_best_matching_benchmark
from .models import EvaluationInput, EvaluationResult, FMVPolicy, RiskLevel
from .narrative import build_narrative
