# comp_model/fmv/models.py
"""
Input and result records for fair-market-value evaluation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from comp_model.benchmarks.defaults import GENERIC_SPECIALTY
from comp_model.benchmarks.models import Benchmark
from comp_model.exceptions import ValidationError


class RiskLevel(str, Enum):
    """FMV compliance risk tier."""

    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"

    def downgraded(self) -> "RiskLevel":
        """One step lower; LOW stays LOW."""
        if self is RiskLevel.HIGH:
            return RiskLevel.MODERATE
        return RiskLevel.LOW


class EvaluationInput(BaseModel):
    """One FMV evaluation request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    specialty: str
    coverage_type: str = Field(..., alias="coverageType")
    observed_value: float = Field(..., alias="observedValue")
    burden_score: Optional[float] = Field(None, alias="burdenScore")

    @model_validator(mode="after")
    def check_burden_score(self) -> "EvaluationInput":
        if self.burden_score is not None and not 0 <= self.burden_score <= 100:
            raise ValidationError(
                f"burden_score must be between 0 and 100 (got {self.burden_score})"
            )
        return self


class FMVPolicy(BaseModel):
    """Configurable risk thresholds for FMV classification."""

    model_config = ConfigDict(frozen=True)

    moderate_above: float = Field(75.0, description="Percentile above which risk is at least MODERATE")
    high_above: float = Field(90.0, description="Percentile above which risk is HIGH")
    burden_downgrade_threshold: float = Field(
        75.0, description="Burden score at or above which risk is downgraded one step"
    )
    generic_specialty: str = GENERIC_SPECIALTY

    @model_validator(mode="after")
    def check_thresholds(self) -> "FMVPolicy":
        if self.high_above < self.moderate_above:
            raise ValidationError(
                f"high_above ({self.high_above}) must not be below moderate_above ({self.moderate_above})"
            )
        return self


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of an FMV evaluation.

    Args:
        risk_level: Final risk tier after any burden adjustment
        benchmark: Matched benchmark; None when no market reference was found
        percentile_estimate: Position of the observed value on the benchmark
        notes: Bullet-style advisory flags
        narrative: Justification paragraph citing source and percentile
    """
    risk_level: RiskLevel
    benchmark: Optional[Benchmark] = None
    percentile_estimate: Optional[float] = None
    notes: List[str] = field(default_factory=list)
    narrative: str = ""


__all__ = ["RiskLevel", "EvaluationInput", "FMVPolicy", "EvaluationResult"]
