# comp_model/cf_models/engine.py
"""
Central calculation engine for all conversion factor (CF) model types.

Each variant has its own pure evaluator; ``evaluate_cf`` dispatches on the
model's ``model_type`` tag.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from comp_model.benchmarks.models import QuartileBenchmark
from comp_model.benchmarks.percentile import value_at_percentile
from comp_model.cf_models.brackets import walk_brackets
from comp_model.cf_models.models import (
    BracketAllocation,
    BudgetNeutralCFModel,
    CFContext,
    CFResult,
    FTEAdjustedCFModel,
    PercentileTieredCFModel,
    QualityWeightedCFModel,
    SingleCFModel,
    TieredCFModel,
)
from comp_model.exceptions import DegenerateInputError, UnmatchedTierError, ValidationError

logger = logging.getLogger(__name__)

_Evaluation = Tuple[float, List[BracketAllocation]]


def _require_benchmark(context: Optional[CFContext], metric: str, model_type: str) -> QuartileBenchmark:
    market = context.market if context is not None else None
    benchmark = getattr(market, metric, None) if market is not None else None
    if benchmark is None:
        raise ValidationError(f"{model_type} CF model requires a {metric} benchmark in the context")
    return benchmark


def _evaluate_single(model: SingleCFModel, wrvus: float, fte: float, context) -> _Evaluation:
    return wrvus * model.cf, []


def _evaluate_tiered(model: TieredCFModel, wrvus: float, fte: float, context) -> _Evaluation:
    thresholds = [t.threshold for t in model.bounded_tiers]
    if model.tier_type == "percentage":
        boundaries = [pct / 100.0 * wrvus for pct in thresholds]
    else:
        boundaries = thresholds
    rates = [t.cf for t in model.bounded_tiers] + [model.final_tier.cf]
    brackets = walk_brackets(wrvus, boundaries, rates)
    return sum(b.dollars for b in brackets), brackets


def _evaluate_percentile_tiered(
    model: PercentileTieredCFModel, wrvus: float, fte: float, context: Optional[CFContext]
) -> _Evaluation:
    benchmark = _require_benchmark(context, "wrvu", model.model_type)
    # Market wRVU values are per 1.0 FTE
    boundaries = [
        max(0.0, value_at_percentile(t.percentile_threshold, benchmark) * fte)
        for t in model.bounded_tiers
    ]
    logger.debug(f"Percentile tier boundaries (wRVUs at FTE {fte}): {boundaries}")
    rates = [t.cf for t in model.bounded_tiers] + [model.final_tier.cf]
    brackets = walk_brackets(wrvus, boundaries, rates)
    return sum(b.dollars for b in brackets), brackets


def solve_budget_neutral_cf(
    model: BudgetNeutralCFModel, wrvus: float, fte: float, context: Optional[CFContext]
) -> float:
    """
    Solve for the flat CF that puts modeled TCC (fixed comp + wRVUs x CF) at the
    target TCC percentile. The target is scaled by FTE; a negative solution is
    clamped to 0. Falls back to ``base_cf`` when no TCC benchmark is available.

    Raises:
        DegenerateInputError: If ``wrvus`` <= 0
        ValidationError: If neither a TCC benchmark nor ``base_cf`` is available
    """
    if wrvus <= 0:
        raise DegenerateInputError(
            f"Budget-neutral CF is undefined for wRVUs <= 0 (got {wrvus})"
        )
    market = context.market if context is not None else None
    if market is None or market.tcc is None:
        if model.base_cf is None:
            raise ValidationError(
                "budget_neutral CF model requires a tcc benchmark in the context or a base_cf"
            )
        logger.warning(f"No TCC benchmark supplied; using base CF {model.base_cf}")
        return model.base_cf

    fixed_comp = context.fixed_comp
    target_tcc = value_at_percentile(model.target_tcc_percentile, market.tcc) * fte
    cf = (target_tcc - fixed_comp) / wrvus
    if cf < 0:
        logger.warning(
            f"Fixed compensation {fixed_comp:.2f} exceeds target TCC {target_tcc:.2f}; CF clamped to 0"
        )
        cf = 0.0
    logger.debug(f"Budget-neutral CF: target TCC {target_tcc:.2f}, fixed {fixed_comp:.2f}, CF {cf:.4f}")
    return cf


def _evaluate_budget_neutral(
    model: BudgetNeutralCFModel, wrvus: float, fte: float, context: Optional[CFContext]
) -> _Evaluation:
    cf = solve_budget_neutral_cf(model, wrvus, fte, context)
    return wrvus * cf, []


def normalize_quality_score(score: float) -> float:
    """Scores above 1 are on a 0-100 scale; result is clamped to [0, 1]."""
    normalized = score / 100.0 if score > 1 else score
    return max(0.0, min(1.0, normalized))


def _evaluate_quality_weighted(
    model: QualityWeightedCFModel, wrvus: float, fte: float, context
) -> _Evaluation:
    effective_cf = model.base_cf * normalize_quality_score(model.quality_score)
    return wrvus * effective_cf, []


def select_fte_tier(model: FTEAdjustedCFModel, fte: float):
    """Return the tier whose [fte_min, fte_max) contains ``fte``; the last tier's max is inclusive."""
    last = len(model.tiers) - 1
    for position, tier in enumerate(model.tiers):
        if position == last:
            if tier.fte_min <= fte <= tier.fte_max:
                return tier
        elif tier.fte_min <= fte < tier.fte_max:
            return tier
    raise UnmatchedTierError(
        f"No FTE tier covers FTE {fte}; configured ranges: "
        + ", ".join(f"[{t.fte_min}, {t.fte_max})" for t in model.tiers)
    )


def _evaluate_fte_adjusted(model: FTEAdjustedCFModel, wrvus: float, fte: float, context) -> _Evaluation:
    tier = select_fte_tier(model, fte)
    return wrvus * tier.cf, []


_EVALUATORS: Dict[str, Callable[..., _Evaluation]] = {
    "single": _evaluate_single,
    "tiered": _evaluate_tiered,
    "percentile_tiered": _evaluate_percentile_tiered,
    "budget_neutral": _evaluate_budget_neutral,
    "quality_weighted": _evaluate_quality_weighted,
    "fte_adjusted": _evaluate_fte_adjusted,
}


def _validate_inputs(wrvus: float, fte: float) -> None:
    if wrvus < 0:
        raise ValidationError(f"wRVUs cannot be negative (got {wrvus})")
    if not 0 < fte <= 1:
        raise ValidationError(f"FTE must be in (0, 1] (got {fte})")


def evaluate_cf(model, wrvus: float, fte: float = 1.0, context: Optional[CFContext] = None) -> CFResult:
    """
    Turn productivity into clinical dollars under a CF model.

    Args:
        model: Any CF model variant
        wrvus: Annual wRVUs for the provider
        fte: Provider FTE in (0, 1]
        context: Market benchmarks and fixed compensation, when the variant needs them

    Returns:
        CFResult with clinical dollars, effective CF (dollars / wRVUs, 0 when
        wRVUs is 0) and the marginal brackets for tiered variants
    """
    if model.model_type == "budget_neutral" and wrvus <= 0:
        raise DegenerateInputError(f"Budget-neutral CF is undefined for wRVUs <= 0 (got {wrvus})")
    _validate_inputs(wrvus, fte)

    evaluator = _EVALUATORS.get(model.model_type)
    if evaluator is None:
        raise ValidationError(f"Unknown CF model type: {model.model_type!r}")

    clinical_dollars, brackets = evaluator(model, wrvus, fte, context)
    effective_cf = clinical_dollars / wrvus if wrvus > 0 else 0.0
    logger.debug(
        f"{model.model_type} CF: wRVUs={wrvus}, FTE={fte}, dollars={clinical_dollars:.2f}, "
        f"effective CF={effective_cf:.4f}"
    )
    return CFResult(
        model_type=model.model_type,
        clinical_dollars=clinical_dollars,
        effective_cf=effective_cf,
        brackets=tuple(brackets),
    )


def bracket_allocations(
    model, wrvus: float, fte: float = 1.0, context: Optional[CFContext] = None
) -> List[BracketAllocation]:
    """Marginal brackets for a tiered or percentile-tiered model; empty for flat variants."""
    return list(evaluate_cf(model, wrvus, fte, context).brackets)


def calculate_incentive_pay(
    model,
    wrvus: float,
    fte: float,
    base_pay: float,
    context: Optional[CFContext] = None,
) -> float:
    """Productivity incentive above base pay; negative when wRVU pay falls short of base."""
    return evaluate_cf(model, wrvus, fte, context).clinical_dollars - base_pay


__all__ = [
    "evaluate_cf",
    "bracket_allocations",
    "calculate_incentive_pay",
    "solve_budget_neutral_cf",
    "normalize_quality_score",
    "select_fte_tier",
]
