"""
Benchmarks package: market reference records and the percentile estimator.
"""

__all__ = [
    "QuartileBenchmark",
    "Benchmark",
    "MarketBenchmarks",
    "GENERIC_SPECIALTY",
    "SAMPLE_FMV_BENCHMARKS",
    "estimate_percentile",
    "value_at_percentile",
    "percentile_for_metric",
    "value_at_metric_percentile",
]

from .defaults import GENERIC_SPECIALTY, SAMPLE_FMV_BENCHMARKS
from .models import Benchmark, MarketBenchmarks, QuartileBenchmark
from .percentile import (
    estimate_percentile,
    percentile_for_metric,
    value_at_metric_percentile,
    value_at_percentile,
)
