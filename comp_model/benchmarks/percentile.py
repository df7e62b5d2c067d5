# comp_model/benchmarks/percentile.py
"""
Piecewise-linear percentile estimation against a quartile benchmark.

Control points are (25, p25), (50, p50), (75, p75), (90, p90), skipping any
quartile the benchmark does not define. Values between two control points are
interpolated linearly. Values outside the control range are extrapolated with
the slope of the nearest segment that has a positive spread, so the estimate
may fall below 0 or rise above 100 to signal an out-of-market value.

``value_at_percentile`` is the algebraic inverse of the same function.
"""

import logging
from typing import List, Literal, Optional, Tuple

from comp_model.benchmarks.models import MarketBenchmarks, QuartileBenchmark
from comp_model.exceptions import ValidationError

logger = logging.getLogger(__name__)

Metric = Literal["tcc", "wrvu", "cf"]

_Point = Tuple[float, float]


def _points(benchmark: QuartileBenchmark) -> List[_Point]:
    points = benchmark.control_points()
    if len(points) < 2:
        raise ValidationError(
            "Benchmark needs at least two defined quartiles (p50 plus one of p25/p75/p90)"
        )
    return points


def _lowest_segment(points: List[_Point]) -> Optional[Tuple[_Point, _Point]]:
    for lo, hi in zip(points, points[1:]):
        if hi[1] > lo[1]:
            return lo, hi
    return None


def _highest_segment(points: List[_Point]) -> Optional[Tuple[_Point, _Point]]:
    for lo, hi in reversed(list(zip(points, points[1:]))):
        if hi[1] > lo[1]:
            return lo, hi
    return None


def _slope(segment: Tuple[_Point, _Point]) -> float:
    """Percentile points per unit of value."""
    (lo_pct, lo_val), (hi_pct, hi_val) = segment
    return (hi_pct - lo_pct) / (hi_val - lo_val)


def estimate_percentile(value: float, benchmark: QuartileBenchmark) -> float:
    """Estimate the percentile position of ``value`` against ``benchmark``.

    Args:
        value: Observed metric value (rate, TCC, wRVUs, CF)
        benchmark: Quartile benchmark with p50 and at least one other quartile

    Returns:
        Percentile on a 0-100 scale; below 0 or above 100 when the value lies
        outside the benchmark range.

    Raises:
        ValidationError: If the benchmark has fewer than two control points
    """
    points = _points(benchmark)
    first_pct, first_val = points[0]
    last_pct, last_val = points[-1]

    if value < first_val:
        segment = _lowest_segment(points)
        if segment is None:
            return 0.0
        return first_pct + (value - first_val) * _slope(segment)

    if value > last_val:
        segment = _highest_segment(points)
        if segment is None:
            return 100.0
        return last_pct + (value - last_val) * _slope(segment)

    # Exact hit on one or more control points: a flat run maps to the
    # percentile in that run closest to the median.
    matches = [pct for pct, val in points if val == value]
    if matches:
        return min(matches, key=lambda pct: (abs(pct - 50.0), pct))

    for (lo_pct, lo_val), (hi_pct, hi_val) in zip(points, points[1:]):
        if lo_val < value < hi_val:
            return lo_pct + (value - lo_val) / (hi_val - lo_val) * (hi_pct - lo_pct)

    # Unreachable for a validated, non-decreasing benchmark
    raise ValidationError(f"Could not place value {value} on benchmark curve")


def value_at_percentile(percentile: float, benchmark: QuartileBenchmark) -> float:
    """Return the metric value at ``percentile`` on the benchmark curve.

    Exact inverse of :func:`estimate_percentile` for strictly increasing
    benchmarks. Percentiles outside the control range are extrapolated with the
    same edge slopes, so the result may be negative for very low percentiles.
    """
    points = _points(benchmark)
    first_pct, first_val = points[0]
    last_pct, last_val = points[-1]

    if percentile < first_pct:
        segment = _lowest_segment(points)
        if segment is None:
            return first_val
        return first_val + (percentile - first_pct) / _slope(segment)

    if percentile > last_pct:
        segment = _highest_segment(points)
        if segment is None:
            return last_val
        return last_val + (percentile - last_pct) / _slope(segment)

    for (lo_pct, lo_val), (hi_pct, hi_val) in zip(points, points[1:]):
        if lo_pct <= percentile <= hi_pct:
            return lo_val + (percentile - lo_pct) / (hi_pct - lo_pct) * (hi_val - lo_val)

    raise ValidationError(f"Could not place percentile {percentile} on benchmark curve")


def _metric_benchmark(metric: Metric, market: MarketBenchmarks) -> QuartileBenchmark:
    if metric not in ("tcc", "wrvu", "cf"):
        raise ValidationError(f"Unknown benchmark metric: {metric!r}")
    benchmark = getattr(market, metric)
    if benchmark is None:
        raise ValidationError(f"Market data has no {metric} benchmark")
    return benchmark


def percentile_for_metric(value: float, metric: Metric, market: MarketBenchmarks) -> float:
    """Estimate the percentile of a TCC, wRVU or CF value against market data."""
    return estimate_percentile(value, _metric_benchmark(metric, market))


def value_at_metric_percentile(
    percentile: float, metric: Metric, market: MarketBenchmarks
) -> float:
    """Return the TCC, wRVU or CF value at ``percentile`` in market data."""
    return value_at_percentile(percentile, _metric_benchmark(metric, market))


__all__ = [
    "Metric",
    "estimate_percentile",
    "value_at_percentile",
    "percentile_for_metric",
    "value_at_metric_percentile",
]
