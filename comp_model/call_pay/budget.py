# comp_model/call_pay/budget.py
"""
Annual call-pay budget for a call program.

For every enabled tier the group's call volume (tier burden, or the program
assumptions when the tier has none) is priced at the tier rates and divided by
the rotation ratio to get what one provider on the rotation earns, regardless
of how many providers are actually eligible. Tier amounts are summed per
provider and multiplied by the eligible provider count for the group total.
"""

import logging
from typing import List, Sequence

from comp_model.call_pay.models import (
    FIXED_PAYMENT_METHODS,
    HOURS_PER_CALL,
    VOLUME_PAYMENT_METHODS,
    BudgetResult,
    CallAssumptions,
    CallProgram,
    CallProvider,
    CallTier,
    ProviderCallPay,
    TierBudget,
)
from comp_model.call_pay.validation import ensure_valid, validate_configuration
from comp_model.logging_config import EVALUATION_LOGGER

logger = logging.getLogger(__name__)
event_logger = logging.getLogger(EVALUATION_LOGGER)


def _monthly_group_pay(tier: CallTier, burden: CallAssumptions) -> float:
    """Monthly pay for covering the whole group's calls under a per-call payment method."""
    rates = tier.rates
    weekday_calls = burden.weekday_calls_per_month
    weekend_calls = burden.weekend_calls_per_month
    holiday_calls = burden.holidays_per_year / 12

    if tier.payment_method == "Hourly rate":
        return HOURS_PER_CALL * (
            weekday_calls * rates.weekday + weekend_calls * rates.weekend + holiday_calls * rates.holiday
        )

    if tier.payment_method in VOLUME_PAYMENT_METHODS:
        cases = getattr(burden, "cases_per_call", 0.0)
        weekend_rate = rates.weekend if rates.weekend > 0 else rates.weekday
        holiday_rate = rates.holiday if rates.holiday > 0 else rates.weekday
        return cases * (
            weekday_calls * rates.weekday + weekend_calls * weekend_rate + holiday_calls * holiday_rate
        )

    return weekday_calls * rates.weekday + weekend_calls * rates.weekend + holiday_calls * rates.holiday


def tier_annual_pay_per_provider(
    tier: CallTier, program: CallProgram, assumptions: CallAssumptions
) -> float:
    """Annual pay one provider on the rotation earns from ``tier`` (0 when disabled)."""
    if not tier.enabled:
        return 0.0

    burden = tier.burden or assumptions
    uplift = 1 + tier.rates.trauma_uplift_percent / 100

    if tier.payment_method in FIXED_PAYMENT_METHODS:
        # weekday rate carries the stipend or retainer amount
        months = 1 if tier.payment_method == "Annual stipend" else 12
        return tier.rates.weekday * months * uplift

    annual_group_pay = _monthly_group_pay(tier, burden) * 12 * uplift
    return annual_group_pay / program.rotation_ratio


def _billable_units(tier: CallTier, burden: CallAssumptions) -> float:
    """Calls per year, or cases per year for volume-paid tiers."""
    if tier.payment_method in VOLUME_PAYMENT_METHODS:
        return burden.calls_per_year * getattr(burden, "cases_per_call", 0.0)
    return burden.calls_per_year


def _zero_budget(warnings: List[str], eligible_count: int = 0, eligible_fte: float = 0.0) -> BudgetResult:
    return BudgetResult(
        total_annual_call_budget=0.0,
        call_pay_per_fte=0.0,
        effective_per_24h=0.0,
        eligible_provider_count=eligible_count,
        total_eligible_fte=eligible_fte,
        warnings=warnings,
    )


def calculate_call_budget(
    program: CallProgram,
    providers: Sequence[CallProvider],
    tiers: Sequence[CallTier],
    assumptions: CallAssumptions,
) -> BudgetResult:
    """
    Calculate the annual call budget.

    Args:
        program: Call program (providers on call, rotation ratio)
        providers: Call roster; only providers eligible for call are paid
        tiers: Call tiers; disabled tiers are ignored
        assumptions: Group-level call volume used by tiers without their own burden

    Returns:
        BudgetResult with totals, per-tier rows, per-provider pay and any
        advisory warnings raised by validation

    Raises:
        ValidationError: If the configuration has errors (all are listed)
    """
    report = ensure_valid(validate_configuration(program, providers, tiers, assumptions))
    warnings = list(report.warnings)

    eligible = [p for p in providers if p.eligible_for_call]
    eligible_count = len(eligible)
    eligible_fte = sum(p.fte for p in eligible)
    enabled = [t for t in tiers if t.enabled]

    if not enabled or not eligible:
        logger.warning(
            f"Zero call budget for {program.specialty}: "
            f"{len(enabled)} enabled tiers, {eligible_count} eligible providers"
        )
        return _zero_budget(warnings, eligible_count, eligible_fte)

    tier_rows: List[TierBudget] = []
    calls_per_year = 0.0
    billable_units = 0.0
    for tier in enabled:
        burden = tier.burden or assumptions
        per_provider = tier_annual_pay_per_provider(tier, program, assumptions)
        tier_total = per_provider * eligible_count
        tier_calls = burden.calls_per_year
        calls_per_year += tier_calls
        billable_units += _billable_units(tier, burden)
        tier_rows.append(
            TierBudget(
                tier_id=tier.id,
                payment_method=tier.payment_method,
                annual_pay_per_provider=per_provider,
                total_annual_pay=tier_total,
                calls_per_year=tier_calls,
                effective_per_24h=tier_total / tier_calls if tier_calls > 0 else 0.0,
            )
        )
        logger.debug(
            f"Tier {tier.id} ({tier.payment_method}): {per_provider:.2f}/provider, "
            f"{tier_total:.2f} total over {tier_calls:g} calls/year"
        )

    pay_per_provider = sum(row.annual_pay_per_provider for row in tier_rows)
    total = pay_per_provider * eligible_count

    result = BudgetResult(
        total_annual_call_budget=total,
        call_pay_per_fte=total / eligible_fte if eligible_fte > 0 else 0.0,
        effective_per_24h=total / calls_per_year if calls_per_year > 0 else 0.0,
        per_provider=[
            ProviderCallPay(
                provider_id=p.id,
                provider_name=p.name,
                fte=p.fte,
                annual_call_pay=pay_per_provider,
            )
            for p in eligible
        ],
        avg_call_pay_per_provider=pay_per_provider,
        effective_per_call=total / billable_units if billable_units > 0 else 0.0,
        tiers=tier_rows,
        eligible_provider_count=eligible_count,
        total_eligible_fte=eligible_fte,
        warnings=warnings,
    )
    event_logger.info(
        f"Call budget {program.specialty} {program.model_year}: total={total:.2f}, "
        f"per FTE={result.call_pay_per_fte:.2f}, per 24h={result.effective_per_24h:.2f}"
    )
    return result


__all__ = ["calculate_call_budget", "tier_annual_pay_per_provider"]
