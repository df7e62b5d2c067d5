# comp_model/cf_models/summary.py
"""
Human-readable one-line summaries of CF models.
"""

from typing import List


def _k(value: float) -> str:
    return f"{value / 1000:g}K" if value >= 1000 else f"{value:g}"


def summarize_cf_model(model) -> str:
    """Describe a CF model, e.g. ``Tiered: 0-4K @ $50.00; 4K+ @ $60.00``."""
    kind = model.model_type
    if kind == "single":
        return f"Single CF: ${model.cf:,.2f}/wRVU"

    if kind == "tiered":
        parts: List[str] = []
        previous = 0.0
        pct = model.tier_type == "percentage"
        for tier in model.bounded_tiers:
            if pct:
                parts.append(f"{previous:g}%-{tier.threshold:g}% @ ${tier.cf:.2f}")
            else:
                parts.append(f"{_k(previous)}-{_k(tier.threshold)} @ ${tier.cf:.2f}")
            previous = tier.threshold
        top = f"{previous:g}%+" if pct else f"{_k(previous)}+"
        parts.append(f"{top} @ ${model.final_tier.cf:.2f}")
        return "Tiered: " + "; ".join(parts)

    if kind == "percentile_tiered":
        parts = []
        previous = 0.0
        for tier in model.bounded_tiers:
            parts.append(f"{previous:g}-{tier.percentile_threshold:g}th @ ${tier.cf:.2f}")
            previous = tier.percentile_threshold
        parts.append(f"{previous:g}th+ @ ${model.final_tier.cf:.2f}")
        return "Percentile Tiered: " + "; ".join(parts)

    if kind == "budget_neutral":
        return f"Budget Neutral: Target {model.target_tcc_percentile:g}th percentile"

    if kind == "quality_weighted":
        quality = model.quality_score if model.quality_score > 1 else model.quality_score * 100
        return f"Quality Weighted: ${model.base_cf:.2f} base @ {quality:.0f}% quality"

    if kind == "fte_adjusted":
        parts = []
        last = len(model.tiers) - 1
        for i, tier in enumerate(model.tiers):
            if i == 0 and tier.fte_min == 0:
                parts.append(f"<{tier.fte_max:g} @ ${tier.cf:.2f}")
            elif i == last:
                parts.append(f">={tier.fte_min:g} @ ${tier.cf:.2f}")
            else:
                parts.append(f"{tier.fte_min:g}-{tier.fte_max:g} @ ${tier.cf:.2f}")
        return "FTE Adjusted: " + "; ".join(parts)

    return "Unknown CF Model"
