# comp_model/cf_models/brackets.py
"""
Marginal-bracket evaluation shared by the tiered CF variants.

Works like a progressive tax table: each bracket pays its own CF on the wRVUs
that fall between its lower and upper boundary, and the open-ended final
bracket absorbs whatever remains.
"""

from typing import List, Sequence

from comp_model.cf_models.models import BracketAllocation


def walk_brackets(
    wrvus: float, boundaries: Sequence[float], rates: Sequence[float]
) -> List[BracketAllocation]:
    """Allocate ``wrvus`` across brackets.

    Args:
        wrvus: Total wRVUs to allocate (>= 0)
        boundaries: Ascending upper boundaries of the bounded brackets
        rates: CF per bracket; one more entry than ``boundaries``

    Returns:
        One BracketAllocation per bracket, including empty ones
    """
    if len(rates) != len(boundaries) + 1:
        raise ValueError("rates must have exactly one more entry than boundaries")

    allocations: List[BracketAllocation] = []
    lower = 0.0
    remaining = wrvus
    for upper, cf in zip(boundaries, rates):
        upper = max(lower, upper)
        taken = min(remaining, upper - lower)
        allocations.append(BracketAllocation(lower, upper, cf, taken, taken * cf))
        remaining -= taken
        lower = upper
    final_cf = rates[-1]
    allocations.append(BracketAllocation(lower, None, final_cf, remaining, remaining * final_cf))
    return allocations


__all__ = ["walk_brackets"]
