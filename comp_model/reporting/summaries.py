# comp_model/reporting/summaries.py
"""
Tabular (pandas) views of engine results for reporting and export.
"""

import logging
from typing import Mapping, Optional, Sequence

import pandas as pd

from comp_model.benchmarks.percentile import estimate_percentile
from comp_model.call_pay.forecast import MultiYearForecast
from comp_model.call_pay.models import BudgetResult, ProviderBurden
from comp_model.cf_models.engine import evaluate_cf
from comp_model.cf_models.models import CFContext
from comp_model.cf_models.summary import summarize_cf_model

logger = logging.getLogger(__name__)

BUDGET_COLUMNS = [
    "tier_id",
    "payment_method",
    "annual_pay_per_provider",
    "total_annual_pay",
    "calls_per_year",
    "effective_per_24h",
]

BURDEN_COLUMNS = [
    "provider_id",
    "provider_name",
    "fte",
    "expected_weekday_calls",
    "expected_weekend_calls",
    "expected_holiday_calls",
    "total_expected_calls",
    "burden_index",
]


def budget_to_frame(budget: BudgetResult) -> pd.DataFrame:
    """One row per enabled tier, plus a TOTAL row when any tier contributed."""
    rows = [
        {
            "tier_id": t.tier_id,
            "payment_method": t.payment_method,
            "annual_pay_per_provider": t.annual_pay_per_provider,
            "total_annual_pay": t.total_annual_pay,
            "calls_per_year": t.calls_per_year,
            "effective_per_24h": t.effective_per_24h,
        }
        for t in budget.tiers
    ]
    df = pd.DataFrame(rows, columns=BUDGET_COLUMNS)
    if df.empty:
        return df

    total = {
        "tier_id": "TOTAL",
        "payment_method": "",
        "annual_pay_per_provider": budget.avg_call_pay_per_provider,
        "total_annual_pay": budget.total_annual_call_budget,
        "calls_per_year": df["calls_per_year"].sum(),
        "effective_per_24h": budget.effective_per_24h,
    }
    return pd.concat([df, pd.DataFrame([total], columns=BUDGET_COLUMNS)], ignore_index=True)


def burden_to_frame(burdens: Sequence[ProviderBurden]) -> pd.DataFrame:
    df = pd.DataFrame([vars(b) for b in burdens], columns=BURDEN_COLUMNS)
    if not df.empty:
        df["fte_share"] = df["fte"] / df["fte"].sum()
    return df


def forecast_to_frame(forecast: MultiYearForecast) -> pd.DataFrame:
    """Base year followed by one row per projected year, indexed by year."""
    base = {
        "year": forecast.base_year,
        "adjusted_budget": forecast.base_budget,
        "rate_increase": 0.0,
        "provider_growth": 0.0,
        "total_providers": None,
        "average_pay_per_provider": None,
    }
    rows = [base] + [
        {
            "year": f.year,
            "adjusted_budget": f.adjusted_budget,
            "rate_increase": f.rate_increase,
            "provider_growth": f.provider_growth,
            "total_providers": f.total_providers,
            "average_pay_per_provider": f.average_pay_per_provider,
        }
        for f in forecast.forecasts
    ]
    df = pd.DataFrame(rows).set_index("year")
    df["cumulative_spend"] = df["adjusted_budget"].cumsum()
    return df


def compare_cf_models(
    named_models: Mapping[str, object],
    wrvus: float,
    fte: float = 1.0,
    context: Optional[CFContext] = None,
) -> pd.DataFrame:
    """
    Evaluate several CF models on the same productivity and compare them.

    Columns: model, model_type, summary, clinical_dollars, effective_cf and,
    when ``context`` carries market data, tcc (fixed comp + clinical dollars)
    with tcc/wrvu/cf percentiles. TCC and wRVU are compared per 1.0 FTE.
    """
    market = context.market if context is not None else None
    fixed_comp = context.fixed_comp if context is not None else 0.0
    rows = []
    for name, model in named_models.items():
        result = evaluate_cf(model, wrvus, fte, context)
        row = {
            "model": name,
            "model_type": result.model_type,
            "summary": summarize_cf_model(model),
            "clinical_dollars": result.clinical_dollars,
            "effective_cf": result.effective_cf,
        }
        if market is not None:
            tcc = fixed_comp + result.clinical_dollars
            row["tcc"] = tcc
            if market.tcc is not None:
                row["tcc_percentile"] = estimate_percentile(tcc / fte, market.tcc)
            if market.wrvu is not None:
                row["wrvu_percentile"] = estimate_percentile(wrvus / fte, market.wrvu)
            if market.cf is not None:
                row["cf_percentile"] = estimate_percentile(result.effective_cf, market.cf)
        rows.append(row)

    logger.debug(f"Compared {len(rows)} CF models at {wrvus:g} wRVUs, FTE {fte:g}")
    return pd.DataFrame(rows)


__all__ = ["budget_to_frame", "burden_to_frame", "forecast_to_frame", "compare_cf_models"]
