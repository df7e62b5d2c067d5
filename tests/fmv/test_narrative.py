import pytest

from comp_model.fmv.evaluator import evaluate_fmv
from comp_model.fmv.models import EvaluationInput, FMVPolicy
from comp_model.fmv.narrative import build_narrative, ordinal, round_half_up


@pytest.mark.parametrize(
    "n, expected",
    [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"),
     (13, "13th"), (21, "21st"), (65, "65th"), (102, "102nd"), (111, "111th")],
)
def test_ordinal(n, expected):
    assert ordinal(n) == expected


def test_round_half_up():
    assert round_half_up(64.5) == 65
    assert round_half_up(82.5) == 83
    assert round_half_up(-2.5) == -3


def test_narrative_cites_source_year_percentile_and_closing():
    result = evaluate_fmv(
        EvaluationInput(specialty="Pediatrics", coverageType="In-house", observedValue=1380)
    )
    assert "MGMA 2024" in result.narrative
    assert "65th percentile" in result.narrative
    assert "reasonable" in result.narrative
    assert "1200.00" in result.narrative


def test_narrative_uses_source_display_name():
    result = evaluate_fmv(
        EvaluationInput(specialty="Cardiology", coverageType="In-house", observedValue=3500)
    )
    assert "SullivanCotter" in result.narrative
    assert "requires formal valuation" in result.narrative


def test_narrative_burden_clause():
    result = evaluate_fmv(
        EvaluationInput(
            specialty="Pediatrics", coverageType="In-house", observedValue=1650, burdenScore=90
        )
    )
    assert "burden score: 90" in result.narrative
    assert "reasonable" in result.narrative


def test_moderate_closing_sentence():
    result = evaluate_fmv(
        EvaluationInput(specialty="Pediatrics", coverageType="In-house", observedValue=1650)
    )
    assert "may warrant additional review" in result.narrative


@pytest.mark.parametrize("offset, high", [(0, True), (-1, False)])
def test_default_burden_threshold_follows_policy(offset, high):
    score = FMVPolicy().burden_downgrade_threshold + offset
    inp = EvaluationInput(
        specialty="Pediatrics", coverageType="In-house", observedValue=1380, burdenScore=score
    )
    narrative = build_narrative(evaluate_fmv(inp), inp)
    assert ("carries a high call burden" in narrative) is high
