from comp_model.call_pay.models import CallAssumptions, CallProvider, CallTier
from comp_model.call_pay.validation import (
    validate_assumptions,
    validate_configuration,
    validate_program,
    validate_roster,
    validate_tier,
)


def test_valid_configuration_has_no_findings(program, providers, daily_tier, assumptions):
    report = validate_configuration(program, providers, [daily_tier], assumptions)
    assert report.is_valid
    assert report.warnings == []


def test_volume_warnings():
    report = validate_assumptions(
        CallAssumptions(weekdayCallsPerMonth=23, weekendCallsPerMonth=10, holidaysPerYear=16)
    )
    assert report.is_valid
    assert len(report.warnings) == 3


def test_all_zero_rates_warning():
    report = validate_tier(CallTier(id="C1"))
    assert any("$0" in w for w in report.warnings)


def test_disabled_tier_not_checked():
    assert validate_tier(CallTier(id="C1", enabled=False)).warnings == []


def test_per_procedure_without_cases_warning(assumptions):
    tier = CallTier(id="P1", paymentMethod="Per procedure", rates={"weekday": 100})
    report = validate_tier(tier, assumptions)
    assert any("cases" in w for w in report.warnings)


def test_duplicate_ids_and_unknown_tier(daily_tier):
    roster = [
        CallProvider(id="p1", fte=1.0, tierId="C1"),
        CallProvider(id="p1", fte=0.5, tierId="C9"),
    ]
    report = validate_roster(roster, [daily_tier])
    assert not report.is_valid
    assert len(report.errors) == 2


def test_eligible_count_mismatch_warning(program, daily_tier):
    report = validate_roster([CallProvider(id="p1", fte=1.0)], [daily_tier], program)
    assert report.is_valid
    assert any("differ" in w for w in report.warnings)


def test_unusual_model_year():
    from comp_model.call_pay.models import CallProgram

    program = CallProgram(modelYear=1999, specialty="Pediatrics", providersOnCall=2, rotationRatio=2)
    assert validate_program(program).warnings
