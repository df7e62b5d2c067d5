# comp_model/call_pay/burden.py
"""
Expected call burden per provider and group fairness metrics.

Each enabled tier's annual call volume is allocated across eligible providers
in proportion to their share of total eligible FTE. Fairness is scored from
the coefficient of variation of the allocated calls.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from comp_model.call_pay.models import (
    CallAssumptions,
    CallProvider,
    CallTier,
    FairnessSummary,
    ProviderBurden,
)
from comp_model.call_pay.validation import ensure_valid, validate_roster

logger = logging.getLogger(__name__)


def _annual_volume(assumptions: CallAssumptions, tiers: Optional[Sequence[CallTier]]):
    """(weekday, weekend, holiday) calls per year summed over the enabled tiers."""
    if tiers is None:
        sources = [assumptions]
    else:
        sources = [t.burden or assumptions for t in tiers if t.enabled]
    weekday = sum(s.weekday_calls_per_month * 12 for s in sources)
    weekend = sum(s.weekend_calls_per_month * 12 for s in sources)
    holiday = sum(s.holidays_per_year for s in sources)
    return weekday, weekend, holiday


def calculate_expected_burden(
    providers: Sequence[CallProvider],
    assumptions: CallAssumptions,
    tiers: Optional[Sequence[CallTier]] = None,
) -> List[ProviderBurden]:
    """
    Allocate annual calls to eligible providers by FTE share.

    Args:
        providers: Call roster; ineligible providers get no row
        assumptions: Group call volume (used for tiers without their own burden)
        tiers: Optional tiers; when given, the volume of every enabled tier is summed

    Returns:
        One ProviderBurden per eligible provider, in roster order. ``burden_index``
        is the percent deviation from an even per-head split.
    """
    ensure_valid(validate_roster(providers, tiers or ()))
    eligible = [p for p in providers if p.eligible_for_call]
    if not eligible:
        return []

    weekday, weekend, holiday = _annual_volume(assumptions, tiers)
    total_calls = weekday + weekend + holiday
    total_fte = sum(p.fte for p in eligible)
    even_split = total_calls / len(eligible)

    burdens = []
    for provider in eligible:
        share = provider.fte / total_fte
        provider_total = total_calls * share
        burdens.append(
            ProviderBurden(
                provider_id=provider.id,
                provider_name=provider.name,
                fte=provider.fte,
                expected_weekday_calls=weekday * share,
                expected_weekend_calls=weekend * share,
                expected_holiday_calls=holiday * share,
                total_expected_calls=provider_total,
                burden_index=(provider_total - even_split) / even_split * 100 if even_split > 0 else 0.0,
            )
        )
    logger.debug(f"Allocated {total_calls:g} calls/year across {len(eligible)} providers ({total_fte:g} FTE)")
    return burdens


def calculate_fairness_metrics(burdens: Sequence[ProviderBurden]) -> FairnessSummary:
    """Summarize how evenly calls are spread; 100 means perfectly even."""
    if not burdens:
        return FairnessSummary(
            group_average_calls=0.0,
            min_calls=0.0,
            max_calls=0.0,
            standard_deviation=0.0,
            fairness_score=100.0,
        )

    calls = np.array([b.total_expected_calls for b in burdens], dtype=float)
    mean = float(calls.mean())
    std = float(calls.std())  # population

    if mean > 0:
        score = float(np.clip(100 - 100 * (std / mean), 0, 100))
    else:
        score = 100.0

    summary = FairnessSummary(
        group_average_calls=mean,
        min_calls=float(calls.min()),
        max_calls=float(calls.max()),
        standard_deviation=std,
        fairness_score=round(score, 1),
        total_eligible_fte=sum(b.fte for b in burdens),
        eligible_provider_count=len(burdens),
    )
    logger.info(f"Fairness score {summary.fairness_score} (mean {mean:.1f}, std {std:.2f})")
    return summary


__all__ = ["calculate_expected_burden", "calculate_fairness_metrics"]
