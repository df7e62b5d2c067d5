"""
Reporting package: DataFrame views of budgets, burden, forecasts and CF model comparisons.
"""

__all__ = ["budget_to_frame", "burden_to_frame", "forecast_to_frame", "compare_cf_models"]

from .summaries import budget_to_frame, burden_to_frame, compare_cf_models, forecast_to_frame
