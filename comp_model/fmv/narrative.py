# comp_model/fmv/narrative.py
"""
Deterministic narrative text for FMV evaluation results.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from comp_model.fmv.models import EvaluationInput, EvaluationResult, FMVPolicy, RiskLevel

logger = logging.getLogger(__name__)

SOURCE_DISPLAY_NAMES = {
    "SC": "SullivanCotter",
    "MGMA": "MGMA",
    "ECG": "ECG",
    "Gallagher": "Gallagher",
    "Other": "Other",
}

CLOSING_SENTENCES = {
    RiskLevel.LOW: "This value appears reasonable and consistent with market FMV ranges.",
    RiskLevel.MODERATE: (
        "This value may warrant additional review or documentation to support FMV compliance."
    ),
    RiskLevel.HIGH: (
        "This value exceeds typical market ranges and requires formal valuation "
        "and comprehensive documentation to support FMV compliance."
    ),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def ordinal(n: int) -> str:
    """Return ``n`` with its English ordinal suffix (1st, 2nd, 11th, 23rd)."""
    magnitude = abs(n)
    if 11 <= magnitude % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(magnitude % 10, "th")
    return f"{n}{suffix}"


def _position_clause(observed: float, percentile: float) -> str:
    label = ordinal(round_half_up(percentile))
    subject = f"the observed value of {observed:.2f}"
    if percentile < 0:
        return (
            f"{subject} falls below the standard benchmark range "
            f"(extrapolated to approximately the {label} percentile)."
        )
    if percentile < 25:
        return f"{subject} falls below the 25th percentile (approximately the {label} percentile)."
    if percentile < 50:
        return f"{subject} falls below the median, approximately at the {label} percentile."
    if percentile <= 75:
        return (
            f"{subject} falls within the typical market range, "
            f"approximately at the {label} percentile."
        )
    if percentile <= 90:
        return f"{subject} falls above the 75th percentile, approximately at the {label} percentile."
    if percentile <= 100:
        return f"{subject} falls above the 90th percentile (approximately the {label} percentile)."
    return (
        f"{subject} falls above the standard benchmark range "
        f"(extrapolated to approximately the {label} percentile)."
    )


def _burden_clause(burden_score: float, threshold: float) -> str:
    if burden_score >= threshold:
        return (
            f"The arrangement carries a high call burden (burden score: {burden_score:g}), "
            f"which supports compensation above the market median."
        )
    return (
        f"The arrangement's call burden (burden score: {burden_score:g}) was considered "
        f"but does not by itself support an above-median rate."
    )


def build_narrative(
    result: EvaluationResult,
    evaluation_input: EvaluationInput,
    burden_threshold: Optional[float] = None,
) -> str:
    """Compose the justification paragraph for an evaluation result.

    Args:
        result: Evaluation result (risk level, benchmark, percentile estimate)
        evaluation_input: The request that produced the result
        burden_threshold: Burden score at or above which burden is called high

    Returns:
        Narrative string
    """
    if burden_threshold is None:
        burden_threshold = FMVPolicy().burden_downgrade_threshold
    observed = evaluation_input.observed_value
    benchmark = result.benchmark

    if benchmark is None:
        return (
            f"No direct market benchmark data is available for {evaluation_input.specialty} "
            f"with {evaluation_input.coverage_type} coverage. "
            f"FMV determination requires professional judgment and may benefit from a "
            f"formal valuation. The observed value of {observed:.2f} should be evaluated "
            f"against comparable arrangements and documented with appropriate justification."
        )

    source_name = SOURCE_DISPLAY_NAMES.get(benchmark.source, benchmark.source)
    survey = f"{source_name} {benchmark.survey_year}" if benchmark.survey_year else source_name
    sentences = [
        f"Based on {survey} survey data for {benchmark.specialty} "
        f"with {benchmark.coverage_type} coverage,"
    ]
    if result.percentile_estimate is not None:
        sentences.append(_position_clause(observed, result.percentile_estimate))
    else:
        sentences.append(f"the observed value is {observed:.2f}.")
    if evaluation_input.burden_score is not None:
        sentences.append(_burden_clause(evaluation_input.burden_score, burden_threshold))
    sentences.append(
        f"The market median for this specialty and coverage type is {benchmark.p50:.2f}."
    )
    sentences.append(CLOSING_SENTENCES[result.risk_level])
    return " ".join(sentences)


__all__ = ["SOURCE_DISPLAY_NAMES", "round_half_up", "ordinal", "build_narrative"]
