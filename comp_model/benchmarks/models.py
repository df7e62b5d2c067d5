# comp_model/benchmarks/models.py
"""
Pydantic models for market benchmark reference data.

Benchmarks are immutable reference records created when a catalog is loaded.
Fields use snake_case names and also accept the camelCase names used by
catalog exports (``coverageType``, ``surveyYear``).
"""

import logging
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from comp_model.exceptions import ValidationError

logger = logging.getLogger(__name__)

# Percentile anchors of a quartile benchmark
QUARTILE_PERCENTILES: Tuple[int, ...] = (25, 50, 75, 90)

BenchmarkSource = Literal["SC", "MGMA", "ECG", "Gallagher", "Other"]


class QuartileBenchmark(BaseModel):
    """Four-point quartile curve (p25/p50/p75/p90); only the median is required."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    p25: Optional[float] = None
    p50: float = Field(..., alias="median")
    p75: Optional[float] = None
    p90: Optional[float] = None

    @model_validator(mode="after")
    def check_curve(self) -> "QuartileBenchmark":
        """Values must be non-negative and non-decreasing with percentile."""
        points = self.control_points()
        for pct, value in points:
            if value < 0:
                raise ValidationError(f"Benchmark p{pct} cannot be negative (got {value})")
        for (lo_pct, lo_val), (hi_pct, hi_val) in zip(points, points[1:]):
            if hi_val < lo_val:
                raise ValidationError(
                    f"Benchmark values must not decrease with percentile: "
                    f"p{lo_pct}={lo_val} > p{hi_pct}={hi_val}"
                )
        return self

    def control_points(self) -> List[Tuple[float, float]]:
        """Return the (percentile, value) pairs that are defined, ascending."""
        values = (self.p25, self.p50, self.p75, self.p90)
        return [
            (float(pct), float(value))
            for pct, value in zip(QUARTILE_PERCENTILES, values)
            if value is not None
        ]


class Benchmark(QuartileBenchmark):
    """A market benchmark for one specialty and coverage type from one survey."""

    id: Optional[str] = None
    specialty: str
    coverage_type: str = Field(..., alias="coverageType")
    source: BenchmarkSource = "Other"
    survey_year: Optional[int] = Field(None, alias="surveyYear")


class MarketBenchmarks(BaseModel):
    """Quartile benchmarks for total cash compensation, wRVUs and conversion factor."""

    model_config = ConfigDict(frozen=True)

    specialty: Optional[str] = None
    tcc: Optional[QuartileBenchmark] = None
    wrvu: Optional[QuartileBenchmark] = None
    cf: Optional[QuartileBenchmark] = None


__all__ = [
    "QUARTILE_PERCENTILES",
    "BenchmarkSource",
    "QuartileBenchmark",
    "Benchmark",
    "MarketBenchmarks",
]
