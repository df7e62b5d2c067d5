import pytest

from comp_model.cf_models.models import (
    BudgetNeutralCFModel,
    FTEAdjustedCFModel,
    PercentileTieredCFModel,
    QualityWeightedCFModel,
    SingleCFModel,
    TieredCFModel,
    parse_cf_model,
)
from comp_model.cf_models.summary import summarize_cf_model
from comp_model.exceptions import ValidationError


@pytest.mark.parametrize(
    "raw, cls",
    [
        ({"modelType": "single", "cf": 50}, SingleCFModel),
        ({"modelType": "tiered", "parameters": {"tiers": [{"threshold": 1, "cf": 1}, {"cf": 2}]}}, TieredCFModel),
        ({"modelType": "percentile-tiered", "tiers": [{"cf": 2}]}, PercentileTieredCFModel),
        ({"modelType": "budgetNeutral", "targetTccPercentile": 60}, BudgetNeutralCFModel),
        ({"model_type": "quality_weighted", "baseCF": 50, "qualityScore": 85}, QualityWeightedCFModel),
        ({"modelType": "fteAdjusted", "tiers": [{"fteMin": 0, "fteMax": 1, "cf": 40}]}, FTEAdjustedCFModel),
    ],
)
def test_parse_cf_model_variants(raw, cls):
    assert isinstance(parse_cf_model(raw), cls)


def test_parse_rejects_unknown_or_missing_type():
    with pytest.raises(ValidationError):
        parse_cf_model({"modelType": "salary_only", "cf": 1})
    with pytest.raises(ValidationError):
        parse_cf_model({"cf": 1})


def test_last_tier_must_be_open_ended():
    with pytest.raises(ValidationError):
        TieredCFModel(tiers=[{"threshold": 4000, "cf": 50}, {"threshold": 6000, "cf": 60}])


def test_only_last_tier_may_omit_threshold():
    with pytest.raises(ValidationError):
        TieredCFModel(tiers=[{"cf": 50}, {"threshold": 6000, "cf": 55}, {"cf": 60}])


def test_thresholds_must_ascend():
    with pytest.raises(ValidationError):
        TieredCFModel(tiers=[{"threshold": 6000, "cf": 50}, {"threshold": 4000, "cf": 55}, {"cf": 60}])


def test_percentage_threshold_capped_at_100():
    with pytest.raises(ValidationError):
        TieredCFModel(tierType="percentage", tiers=[{"threshold": 120, "cf": 50}, {"cf": 60}])


def test_negative_cf_rejected():
    with pytest.raises(ValidationError):
        SingleCFModel(cf=-1)


def test_overlapping_fte_tiers_rejected():
    with pytest.raises(ValidationError):
        FTEAdjustedCFModel(
            tiers=[{"fteMin": 0, "fteMax": 0.6, "cf": 40}, {"fteMin": 0.5, "fteMax": 1.0, "cf": 50}]
        )


def test_budget_neutral_target_range():
    with pytest.raises(ValidationError):
        BudgetNeutralCFModel(targetTccPercentile=120)


def test_summaries():
    assert summarize_cf_model(SingleCFModel(cf=50)) == "Single CF: $50.00/wRVU"
    tiered = TieredCFModel(tiers=[{"threshold": 4000, "cf": 50}, {"cf": 60}])
    assert summarize_cf_model(tiered) == "Tiered: 0-4K @ $50.00; 4K+ @ $60.00"
    pct = TieredCFModel(tierType="percentage", tiers=[{"threshold": 50, "cf": 40}, {"cf": 60}])
    assert summarize_cf_model(pct) == "Tiered: 0%-50% @ $40.00; 50%+ @ $60.00"
    assert summarize_cf_model(BudgetNeutralCFModel(targetTccPercentile=50)) == "Budget Neutral: Target 50th percentile"
    assert (
        summarize_cf_model(QualityWeightedCFModel(baseCF=50, qualityScore=90))
        == "Quality Weighted: $50.00 base @ 90% quality"
    )
