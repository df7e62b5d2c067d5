# comp_model/call_pay/validation.py
"""
Pre-calculation checks for call programs, tiers and rosters.

Each check returns a ValidationReport: errors make the configuration unusable,
warnings flag values that are legal but unusual. ``ensure_valid`` turns a
report with errors into a ValidationError listing all of them.
"""

import logging
from collections import Counter
from typing import List, Optional, Sequence

from comp_model.call_pay.models import (
    VOLUME_PAYMENT_METHODS,
    CallAssumptions,
    CallProgram,
    CallProvider,
    CallTier,
    ValidationReport,
)
from comp_model.exceptions import ValidationError

logger = logging.getLogger(__name__)

MAX_WEEKDAY_CALLS_PER_MONTH = 22
MAX_WEEKEND_CALLS_PER_MONTH = 9
MAX_HOLIDAYS_PER_YEAR = 15
MODEL_YEAR_RANGE = (2020, 2100)


def validate_program(program: CallProgram) -> ValidationReport:
    errors: List[str] = []
    warnings: List[str] = []

    if program.providers_on_call < 1:
        errors.append("Must have at least 1 provider on call.")
    if program.rotation_ratio < 1:
        errors.append("Rotation ratio must be at least 1.")
    elif program.rotation_ratio > program.providers_on_call:
        errors.append(
            f"Rotation ratio (1-in-{program.rotation_ratio:g}) exceeds providers on call "
            f"({program.providers_on_call})."
        )

    lo, hi = MODEL_YEAR_RANGE
    if not lo <= program.model_year <= hi:
        warnings.append(f"Model year {program.model_year} seems unusual. Verify this is correct.")

    return ValidationReport(errors=errors, warnings=warnings)


def validate_assumptions(assumptions: CallAssumptions, label: str = "Group") -> ValidationReport:
    warnings: List[str] = []
    if assumptions.weekday_calls_per_month > MAX_WEEKDAY_CALLS_PER_MONTH:
        warnings.append(
            f"{label}: weekday calls ({assumptions.weekday_calls_per_month:g}) exceed typical "
            f"business days per month ({MAX_WEEKDAY_CALLS_PER_MONTH}). Verify this is correct."
        )
    if assumptions.weekend_calls_per_month > MAX_WEEKEND_CALLS_PER_MONTH:
        warnings.append(
            f"{label}: weekend calls ({assumptions.weekend_calls_per_month:g}) exceed typical "
            f"weekends per month (8-9). Verify this is correct."
        )
    if assumptions.holidays_per_year > MAX_HOLIDAYS_PER_YEAR:
        warnings.append(
            f"{label}: holidays per year ({assumptions.holidays_per_year:g}) seems high. "
            f"Typical range is 8-12."
        )
    return ValidationReport(warnings=warnings)


def validate_tier(tier: CallTier, assumptions: Optional[CallAssumptions] = None) -> ValidationReport:
    """Check one tier; disabled tiers are never flagged."""
    if not tier.enabled:
        return ValidationReport()

    warnings: List[str] = []
    burden = tier.burden or assumptions
    if tier.burden is not None:
        warnings.extend(validate_assumptions(tier.burden, f"Tier {tier.id}").warnings)

    rates = tier.rates
    if tier.payment_method in ("Daily / shift rate", "Hourly rate"):
        if rates.weekday == 0 and rates.weekend == 0 and rates.holiday == 0:
            warnings.append(f"Tier {tier.id}: all rates are $0. Verify this is intentional.")

    if tier.payment_method in VOLUME_PAYMENT_METHODS:
        cases = tier.burden.cases_per_call if tier.burden is not None else 0
        if not cases:
            warnings.append(
                f"Tier {tier.id}: {tier.payment_method} requires average cases or callbacks "
                f"per 24h to calculate pay."
            )

    if burden is None:
        warnings.append(f"Tier {tier.id}: no call volume assumptions supplied.")

    return ValidationReport(warnings=warnings)


def validate_roster(
    providers: Sequence[CallProvider],
    tiers: Sequence[CallTier] = (),
    program: Optional[CallProgram] = None,
) -> ValidationReport:
    errors: List[str] = []
    warnings: List[str] = []

    duplicates = sorted(pid for pid, n in Counter(p.id for p in providers).items() if n > 1)
    if duplicates:
        errors.append(f"Duplicate provider ids: {', '.join(duplicates)}")

    if tiers:
        known = {t.id for t in tiers}
        for provider in providers:
            if provider.tier_id is not None and provider.tier_id not in known:
                errors.append(f"Provider {provider.id} references unknown tier '{provider.tier_id}'.")

    eligible = [p for p in providers if p.eligible_for_call]
    if not eligible:
        warnings.append("No providers are eligible for call.")
    elif program is not None and len(eligible) != program.providers_on_call:
        warnings.append(
            f"Eligible providers ({len(eligible)}) differ from providers on call "
            f"({program.providers_on_call})."
        )

    return ValidationReport(errors=errors, warnings=warnings)


def validate_configuration(
    program: CallProgram,
    providers: Sequence[CallProvider],
    tiers: Sequence[CallTier],
    assumptions: CallAssumptions,
) -> ValidationReport:
    """Run every check and merge the reports."""
    report = validate_program(program)
    report = report.merged(validate_assumptions(assumptions))
    for tier in tiers:
        report = report.merged(validate_tier(tier, assumptions))
    report = report.merged(validate_roster(providers, tiers, program))
    if not any(t.enabled for t in tiers):
        report = report.merged(ValidationReport(warnings=["No call tiers are enabled."]))
    return report


def ensure_valid(report: ValidationReport) -> ValidationReport:
    """Raise ValidationError when ``report`` has errors; otherwise return it."""
    if report.errors:
        logger.error(f"Call configuration invalid: {report.errors}")
        raise ValidationError("Invalid call configuration: " + "; ".join(report.errors), report.errors)
    for warning in report.warnings:
        logger.warning(warning)
    return report


__all__ = [
    "validate_program",
    "validate_assumptions",
    "validate_tier",
    "validate_roster",
    "validate_configuration",
    "ensure_valid",
]
