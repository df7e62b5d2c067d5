import pytest

from comp_model.benchmarks.defaults import SAMPLE_FMV_BENCHMARKS
from comp_model.exceptions import ValidationError
from comp_model.fmv.evaluator import classify_risk, evaluate_fmv, find_best_matching_benchmark
from comp_model.fmv.models import EvaluationInput, FMVPolicy, RiskLevel


def _input(value, specialty="Pediatrics", coverage="In-house", burden=None):
    return EvaluationInput(
        specialty=specialty, coverageType=coverage, observedValue=value, burdenScore=burden
    )


def test_exact_match_on_sample_catalog():
    b = find_best_matching_benchmark("Pediatrics", "In-house")
    assert b is not None
    assert b.id == "ped-inhouse-2024"


def test_specialty_match_any_coverage():
    b = find_best_matching_benchmark("Pediatrics", "Telemedicine")
    assert b is not None
    assert b.specialty == "Pediatrics"


def test_generic_fallback():
    b = find_best_matching_benchmark("Unknown Specialty", "In-house")
    assert b is not None
    assert b.specialty == "All Specialties"
    assert b.coverage_type == "In-house"


def test_no_match_returns_none():
    assert find_best_matching_benchmark("Unknown Specialty", "Unknown Coverage") is None


def test_custom_catalog(catalog):
    assert find_best_matching_benchmark("Orthopedics", "In-house", catalog).id == "ortho-inhouse"
    assert find_best_matching_benchmark("Cardiology", "Unrestricted home", catalog).id == "generic-home"
    assert find_best_matching_benchmark("Pediatrics", "In-house", catalog) is None


@pytest.mark.parametrize(
    "pct, level",
    [(-10, RiskLevel.LOW), (50, RiskLevel.LOW), (75, RiskLevel.LOW), (75.1, RiskLevel.MODERATE),
     (90, RiskLevel.MODERATE), (90.1, RiskLevel.HIGH), (130, RiskLevel.HIGH)],
)
def test_classify_risk(pct, level):
    assert classify_risk(pct) is level


def test_low_risk_within_market():
    result = evaluate_fmv(_input(1380))
    assert result.risk_level is RiskLevel.LOW
    assert result.percentile_estimate == pytest.approx(65)
    assert result.benchmark.id == "ped-inhouse-2024"
    assert any("Within typical market range" in n for n in result.notes)


def test_moderate_and_high_risk():
    assert evaluate_fmv(_input(1650)).risk_level is RiskLevel.MODERATE
    high = evaluate_fmv(_input(2000))
    assert high.risk_level is RiskLevel.HIGH
    assert high.percentile_estimate == pytest.approx(100)


def test_high_burden_downgrades_high_to_moderate():
    result = evaluate_fmv(_input(2000, burden=85))
    assert result.risk_level is RiskLevel.MODERATE
    assert any("burden" in n.lower() for n in result.notes)


def test_high_burden_downgrades_moderate_to_low_one_step_only():
    assert evaluate_fmv(_input(1650, burden=80)).risk_level is RiskLevel.LOW
    assert evaluate_fmv(_input(5000, burden=100)).risk_level is RiskLevel.MODERATE


def test_burden_below_threshold_no_downgrade():
    result = evaluate_fmv(_input(2000, burden=60))
    assert result.risk_level is RiskLevel.HIGH


def test_configurable_burden_threshold():
    policy = FMVPolicy(burden_downgrade_threshold=50)
    assert evaluate_fmv(_input(2000, burden=60), policy=policy).risk_level is RiskLevel.MODERATE


def test_below_range_is_low_with_note():
    result = evaluate_fmv(_input(500))
    assert result.percentile_estimate < 0
    assert result.risk_level is RiskLevel.LOW
    assert any("Below standard range" in n for n in result.notes)


def test_no_benchmark_defaults_to_moderate():
    result = evaluate_fmv(_input(1000, specialty="Unknown Specialty", coverage="Unknown Coverage"))
    assert result.risk_level is RiskLevel.MODERATE
    assert result.benchmark is None
    assert result.percentile_estimate is None
    assert result.narrative.startswith("No direct market benchmark")
    assert "professional judgment" in result.narrative


@pytest.mark.parametrize("burden", [None, 80])
def test_risk_monotonic_in_observed_value(burden):
    order = {RiskLevel.LOW: 0, RiskLevel.MODERATE: 1, RiskLevel.HIGH: 2}
    levels = [order[evaluate_fmv(_input(v, burden=burden)).risk_level] for v in range(500, 2600, 100)]
    assert levels == sorted(levels)


def test_burden_score_out_of_range():
    with pytest.raises(ValidationError):
        _input(1000, burden=120)


def test_invalid_policy():
    with pytest.raises(ValidationError):
        FMVPolicy(moderate_above=90, high_above=75)


def test_sample_catalog_ids_unique():
    ids = [b.id for b in SAMPLE_FMV_BENCHMARKS]
    assert len(ids) == len(set(ids))
