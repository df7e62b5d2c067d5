# comp_model/call_pay/stipends.py
"""
Single-provider call pay calculators: per-call stipend, per-shift pay and
threshold-tiered call pay. Monthly figures are annualized by 12.
"""

from comp_model.call_pay.models import CallPayResult
from comp_model.exceptions import ValidationError


def _check_non_negative(**values: float) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValidationError(f"{name} cannot be negative (got {value})")


def _weekday_weekend_pay(weekday_count: float, weekend_count: float, weekday_rate: float, weekend_rate: float) -> CallPayResult:
    monthly = weekday_count * weekday_rate + weekend_count * weekend_rate
    count = weekday_count + weekend_count
    return CallPayResult(
        monthly_pay=monthly,
        annual_pay=monthly * 12,
        effective_rate=monthly / count if count > 0 else 0.0,
    )


def calculate_per_call_stipend(
    weekday_calls_per_month: float,
    weekend_calls_per_month: float,
    weekday_stipend: float,
    weekend_stipend: float,
) -> CallPayResult:
    """Stipend paid per weekday and weekend call; effective rate is the blended $/call."""
    _check_non_negative(
        weekday_calls_per_month=weekday_calls_per_month,
        weekend_calls_per_month=weekend_calls_per_month,
        weekday_stipend=weekday_stipend,
        weekend_stipend=weekend_stipend,
    )
    return _weekday_weekend_pay(
        weekday_calls_per_month, weekend_calls_per_month, weekday_stipend, weekend_stipend
    )


def calculate_per_shift_pay(
    weekday_shifts_per_month: float,
    weekend_shifts_per_month: float,
    weekday_rate: float,
    weekend_rate: float,
) -> CallPayResult:
    _check_non_negative(
        weekday_shifts_per_month=weekday_shifts_per_month,
        weekend_shifts_per_month=weekend_shifts_per_month,
        weekday_rate=weekday_rate,
        weekend_rate=weekend_rate,
    )
    return _weekday_weekend_pay(
        weekday_shifts_per_month, weekend_shifts_per_month, weekday_rate, weekend_rate
    )


def calculate_tiered_call_pay(
    threshold: float,
    rate_below_threshold: float,
    rate_above_threshold: float,
    actual_calls_or_shifts: float,
) -> CallPayResult:
    """
    Monthly calls up to ``threshold`` are paid at the lower rate and any excess
    at the higher rate, the same marginal mechanics as the tiered CF model.
    """
    _check_non_negative(
        threshold=threshold,
        rate_below_threshold=rate_below_threshold,
        rate_above_threshold=rate_above_threshold,
        actual_calls_or_shifts=actual_calls_or_shifts,
    )
    below = min(actual_calls_or_shifts, threshold)
    above = max(0.0, actual_calls_or_shifts - threshold)
    monthly = below * rate_below_threshold + above * rate_above_threshold
    return CallPayResult(
        monthly_pay=monthly,
        annual_pay=monthly * 12,
        effective_rate=monthly / actual_calls_or_shifts if actual_calls_or_shifts > 0 else 0.0,
    )


__all__ = ["calculate_per_call_stipend", "calculate_per_shift_pay", "calculate_tiered_call_pay"]
