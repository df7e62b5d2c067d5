# comp_model/fmv/evaluator.py
"""
Fair-market-value risk classification.

Finds the best matching market benchmark for a specialty and coverage type,
places the observed value on the benchmark curve and maps the percentile to a
LOW / MODERATE / HIGH risk tier, optionally downgraded one step when the call
burden is high.
"""

import logging
from typing import List, Optional, Sequence

from comp_model.benchmarks.defaults import SAMPLE_FMV_BENCHMARKS
from comp_model.benchmarks.models import Benchmark
from comp_model.benchmarks.percentile import estimate_percentile
from comp_model.fmv.models import EvaluationInput, EvaluationResult, FMVPolicy, RiskLevel
from comp_model.fmv.narrative import build_narrative
from comp_model.logging_config import EVALUATION_LOGGER

logger = logging.getLogger(__name__)
event_logger = logging.getLogger(EVALUATION_LOGGER)

DEFAULT_POLICY = FMVPolicy()


def find_best_matching_benchmark(
    specialty: str,
    coverage_type: str,
    catalog: Optional[Sequence[Benchmark]] = None,
    generic_specialty: Optional[str] = None,
) -> Optional[Benchmark]:
    """
    Find the benchmark that best matches a specialty and coverage type.

    Matching precedence, first hit wins:
    1. exact specialty and exact coverage type
    2. exact specialty, any coverage type
    3. generic specialty ("All Specialties") and exact coverage type

    Returns None when nothing matches; that is an expected outcome, not an error.
    """
    if catalog is None:
        catalog = SAMPLE_FMV_BENCHMARKS
    generic = generic_specialty or DEFAULT_POLICY.generic_specialty

    for b in catalog:
        if b.specialty == specialty and b.coverage_type == coverage_type:
            return b
    for b in catalog:
        if b.specialty == specialty:
            return b
    for b in catalog:
        if b.specialty == generic and b.coverage_type == coverage_type:
            return b
    logger.debug(f"No benchmark found for specialty={specialty!r}, coverage={coverage_type!r}")
    return None


def classify_risk(percentile: float, policy: Optional[FMVPolicy] = None) -> RiskLevel:
    """Map a percentile estimate to a risk tier (before any burden adjustment)."""
    policy = policy or DEFAULT_POLICY
    if percentile > policy.high_above:
        return RiskLevel.HIGH
    if percentile > policy.moderate_above:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


def _position_notes(percentile: float, benchmark: Benchmark, observed: float) -> List[str]:
    notes: List[str] = []
    if percentile < 0:
        notes.append("Below standard range: value is under the lowest published benchmark quartile")
    elif percentile < 25:
        notes.append("Below 25th percentile of market rates")
    elif percentile < 50:
        notes.append("Below median market rate")
    elif percentile <= 75:
        notes.append("Within typical market range (25th-75th percentile)")
    elif percentile <= 90:
        notes.append("Above 75th percentile of market rates")
        if benchmark.p90 is not None:
            notes.append("Approaching 90th percentile")
    else:
        notes.append("Above 90th percentile of market rates")
        if benchmark.p90 is not None and benchmark.p75 is not None:
            spread = benchmark.p90 - benchmark.p75
            excess = observed - benchmark.p90
            if spread > 0 and excess / spread > 0.5:
                notes.append("Significantly above market benchmarks")
        if percentile > 100:
            notes.append("Above standard range: value exceeds the extrapolated market range")
    return notes


def evaluate_fmv(
    evaluation_input: EvaluationInput,
    catalog: Optional[Sequence[Benchmark]] = None,
    policy: Optional[FMVPolicy] = None,
) -> EvaluationResult:
    """
    Evaluate the FMV risk of an observed compensation value.

    Args:
        evaluation_input: Specialty, coverage type, observed value, optional burden score
        catalog: Benchmark catalog; defaults to the sample catalog
        policy: Risk thresholds; defaults to FMVPolicy()

    Returns:
        EvaluationResult with risk level, notes and narrative. When no benchmark
        matches, the risk level is MODERATE and ``benchmark`` is None.
    """
    policy = policy or DEFAULT_POLICY
    logger.debug(f"Evaluating FMV for {evaluation_input}")

    benchmark = find_best_matching_benchmark(
        evaluation_input.specialty,
        evaluation_input.coverage_type,
        catalog,
        generic_specialty=policy.generic_specialty,
    )

    if benchmark is None:
        notes = [
            "No direct benchmark data available for this specialty/coverage type combination",
            "Professional judgment required",
        ]
        result = EvaluationResult(risk_level=RiskLevel.MODERATE, notes=notes)
        narrative = build_narrative(result, evaluation_input, policy.burden_downgrade_threshold)
        event_logger.info(
            f"FMV: no benchmark for {evaluation_input.specialty}/{evaluation_input.coverage_type}; "
            f"defaulting to MODERATE"
        )
        return EvaluationResult(risk_level=RiskLevel.MODERATE, notes=notes, narrative=narrative)

    percentile = estimate_percentile(evaluation_input.observed_value, benchmark)
    base_level = classify_risk(percentile, policy)
    risk_level = base_level
    notes = _position_notes(percentile, benchmark, evaluation_input.observed_value)

    burden = evaluation_input.burden_score
    if burden is not None:
        if burden >= policy.burden_downgrade_threshold:
            risk_level = base_level.downgraded()
            if risk_level is not base_level:
                notes.append(
                    f"High call burden (burden score: {burden:g}) supports an above-median rate; "
                    f"risk downgraded from {base_level.value} to {risk_level.value}"
                )
            else:
                notes.append(f"High call burden (burden score: {burden:g}) considered")
        else:
            notes.append(
                f"Call burden score {burden:g} is below the {policy.burden_downgrade_threshold:g} "
                f"downgrade threshold; no burden adjustment applied"
            )

    result = EvaluationResult(
        risk_level=risk_level,
        benchmark=benchmark,
        percentile_estimate=percentile,
        notes=notes,
    )
    narrative = build_narrative(result, evaluation_input, policy.burden_downgrade_threshold)
    event_logger.info(
        f"FMV: {benchmark.id or benchmark.specialty} percentile={percentile:.1f} "
        f"risk={risk_level.value} (base {base_level.value})"
    )
    return EvaluationResult(
        risk_level=risk_level,
        benchmark=benchmark,
        percentile_estimate=percentile,
        notes=notes,
        narrative=narrative,
    )


def evaluate_budget_fmv(
    budget,
    specialty: str,
    coverage_type: str,
    burden_score: Optional[float] = None,
    catalog: Optional[Sequence[Benchmark]] = None,
    policy: Optional[FMVPolicy] = None,
) -> EvaluationResult:
    """Evaluate the effective per-24h rate of a call budget against call-pay benchmarks."""
    evaluation_input = EvaluationInput(
        specialty=specialty,
        coverage_type=coverage_type,
        observed_value=budget.effective_per_24h,
        burden_score=burden_score,
    )
    return evaluate_fmv(evaluation_input, catalog=catalog, policy=policy)


__all__ = [
    "find_best_matching_benchmark",
    "classify_risk",
    "evaluate_fmv",
    "evaluate_budget_fmv",
]
