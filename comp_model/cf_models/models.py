# comp_model/cf_models/models.py
"""
Pydantic models for conversion-factor (CF) compensation models.

A CF model is a tagged union discriminated by ``model_type``. Tier lists are
stored as N-1 bounded tiers (each with an upper threshold) plus one open-ended
``final_tier``, so a list whose last tier carries a threshold cannot be
represented. The flat ``tiers: [{threshold, cf}, ..., {cf}]`` shape used by
saved scenarios is accepted on input and split accordingly.
"""

import logging
import re
from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from comp_model.benchmarks.models import MarketBenchmarks
from comp_model.exceptions import ValidationError

logger = logging.getLogger(__name__)


class _CFBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# --- Tier records ---


class BoundedTier(_CFBase):
    """Tier paid up to ``threshold`` (wRVUs, or percent of wRVUs for percentage tiers)."""

    threshold: float
    cf: float


class PercentileTier(_CFBase):
    """Tier paid up to the market wRVU value at ``percentile_threshold``."""

    percentile_threshold: float = Field(..., alias="percentileThreshold")
    cf: float


class OpenTier(_CFBase):
    """Open-ended top tier; absorbs all remaining wRVUs."""

    cf: float


class FTETier(_CFBase):
    """CF applied when the provider FTE falls in ``[fte_min, fte_max)``."""

    fte_min: float = Field(..., alias="fteMin")
    fte_max: float = Field(..., alias="fteMax")
    cf: float


def _as_dict(item: Any) -> Dict[str, Any]:
    if isinstance(item, BaseModel):
        return item.model_dump()
    return dict(item)


def _split_tier_list(data: Any, threshold_keys: Tuple[str, ...]) -> Any:
    """Convert a flat ``tiers`` list into ``bounded_tiers`` + ``final_tier``."""
    if not isinstance(data, dict) or "tiers" not in data:
        return data
    data = dict(data)
    tiers = [_as_dict(t) for t in data.pop("tiers") or []]
    if not tiers:
        raise ValidationError("Tier list must contain at least one tier")

    def threshold_of(tier: Dict[str, Any]) -> Optional[float]:
        for key in threshold_keys:
            if tier.get(key) is not None:
                return tier[key]
        return None

    *bounded, last = tiers
    if threshold_of(last) is not None:
        raise ValidationError("The last tier must omit its threshold (open-ended top bracket)")
    for position, tier in enumerate(bounded, start=1):
        if threshold_of(tier) is None:
            raise ValidationError(f"Tier {position} is missing its threshold; only the last tier may omit it")
    data["bounded_tiers"] = bounded
    data["final_tier"] = {"cf": last.get("cf")}
    return data


def _check_rates(cfs: List[float]) -> None:
    for cf in cfs:
        if cf < 0:
            raise ValidationError(f"Conversion factor cannot be negative (got {cf})")


def _check_ascending(thresholds: List[float], label: str, upper: Optional[float] = None) -> None:
    for t in thresholds:
        if t < 0:
            raise ValidationError(f"{label} cannot be negative (got {t})")
        if upper is not None and t > upper:
            raise ValidationError(f"{label} cannot exceed {upper:g} (got {t})")
    for lo, hi in zip(thresholds, thresholds[1:]):
        if hi <= lo:
            raise ValidationError(f"{label}s must be strictly ascending (got {lo} then {hi})")


# --- Model variants ---


class SingleCFModel(_CFBase):
    model_type: Literal["single"] = "single"
    cf: float

    @model_validator(mode="after")
    def check_cf(self) -> "SingleCFModel":
        _check_rates([self.cf])
        return self


class TieredCFModel(_CFBase):
    model_type: Literal["tiered"] = "tiered"
    tier_type: Literal["threshold", "percentage"] = Field("threshold", alias="tierType")
    bounded_tiers: List[BoundedTier] = Field(default_factory=list)
    final_tier: OpenTier

    @model_validator(mode="before")
    @classmethod
    def split_tiers(cls, data: Any) -> Any:
        return _split_tier_list(data, ("threshold",))

    @model_validator(mode="after")
    def check_tiers(self) -> "TieredCFModel":
        upper = 100.0 if self.tier_type == "percentage" else None
        label = "Percentage threshold" if upper else "wRVU threshold"
        _check_ascending([t.threshold for t in self.bounded_tiers], label, upper)
        _check_rates([t.cf for t in self.bounded_tiers] + [self.final_tier.cf])
        return self


class PercentileTieredCFModel(_CFBase):
    model_type: Literal["percentile_tiered"] = "percentile_tiered"
    bounded_tiers: List[PercentileTier] = Field(default_factory=list)
    final_tier: OpenTier

    @model_validator(mode="before")
    @classmethod
    def split_tiers(cls, data: Any) -> Any:
        return _split_tier_list(data, ("percentile_threshold", "percentileThreshold"))

    @model_validator(mode="after")
    def check_tiers(self) -> "PercentileTieredCFModel":
        _check_ascending(
            [t.percentile_threshold for t in self.bounded_tiers], "Percentile threshold", 100.0
        )
        _check_rates([t.cf for t in self.bounded_tiers] + [self.final_tier.cf])
        return self


class BudgetNeutralCFModel(_CFBase):
    model_type: Literal["budget_neutral"] = "budget_neutral"
    target_tcc_percentile: float = Field(..., alias="targetTccPercentile")
    base_cf: Optional[float] = Field(None, alias="baseCF")

    @model_validator(mode="after")
    def check_target(self) -> "BudgetNeutralCFModel":
        if not 0 <= self.target_tcc_percentile <= 100:
            raise ValidationError(
                f"target_tcc_percentile must be between 0 and 100 (got {self.target_tcc_percentile})"
            )
        if self.base_cf is not None:
            _check_rates([self.base_cf])
        return self


class QualityWeightedCFModel(_CFBase):
    model_type: Literal["quality_weighted"] = "quality_weighted"
    base_cf: float = Field(..., alias="baseCF")
    quality_score: float = Field(..., alias="qualityScore")

    @model_validator(mode="after")
    def check_values(self) -> "QualityWeightedCFModel":
        _check_rates([self.base_cf])
        if self.quality_score < 0:
            raise ValidationError(f"quality_score cannot be negative (got {self.quality_score})")
        return self


class FTEAdjustedCFModel(_CFBase):
    model_type: Literal["fte_adjusted"] = "fte_adjusted"
    tiers: List[FTETier] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_tiers(self) -> "FTEAdjustedCFModel":
        for tier in self.tiers:
            if tier.fte_min < 0 or tier.fte_max <= tier.fte_min:
                raise ValidationError(
                    f"FTE tier bounds must satisfy 0 <= fte_min < fte_max "
                    f"(got {tier.fte_min}-{tier.fte_max})"
                )
        for lo, hi in zip(self.tiers, self.tiers[1:]):
            if hi.fte_min < lo.fte_max:
                raise ValidationError(
                    f"FTE tiers must be ascending and non-overlapping "
                    f"({lo.fte_min}-{lo.fte_max} overlaps {hi.fte_min}-{hi.fte_max})"
                )
        _check_rates([t.cf for t in self.tiers])
        return self


CFModel = Annotated[
    Union[
        SingleCFModel,
        TieredCFModel,
        PercentileTieredCFModel,
        BudgetNeutralCFModel,
        QualityWeightedCFModel,
        FTEAdjustedCFModel,
    ],
    Field(discriminator="model_type"),
]

CF_MODEL_TYPES = (
    "single",
    "tiered",
    "percentile_tiered",
    "budget_neutral",
    "quality_weighted",
    "fte_adjusted",
)

_cf_model_adapter = TypeAdapter(CFModel)


def normalize_model_type(raw: str) -> str:
    """Map ``percentile-tiered`` / ``percentileTiered`` spellings to ``percentile_tiered``."""
    snake = re.sub(r"(?<!^)(?=[A-Z])", "_", raw.strip()).lower()
    return snake.replace("-", "_").replace(" ", "_")


def parse_cf_model(data: Any):
    """
    Build a CF model from a mapping.

    Accepts ``model_type`` or ``modelType`` and either flat parameters or the
    saved-scenario shape ``{"modelType": ..., "parameters": {...}}``.
    """
    if isinstance(data, BaseModel):
        return data
    data = dict(data)
    params = data.pop("parameters", None) or {}
    merged = {**params, **data}
    raw_type = merged.pop("modelType", None) or merged.pop("model_type", None)
    if raw_type is None:
        raise ValidationError("CF model is missing model_type")
    model_type = normalize_model_type(raw_type)
    if model_type not in CF_MODEL_TYPES:
        raise ValidationError(f"Unknown CF model type: {raw_type!r}")
    merged["model_type"] = model_type
    return _cf_model_adapter.validate_python(merged)


# --- Evaluation context and results ---


class CFContext(BaseModel):
    """Market data and fixed pay needed by some CF variants."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    market: Optional[MarketBenchmarks] = None
    fixed_comp: float = Field(0.0, alias="fixedComp")


@dataclass(frozen=True)
class BracketAllocation:
    """wRVUs and dollars falling into one marginal bracket; ``upper`` None means open-ended."""
    lower: float
    upper: Optional[float]
    cf: float
    wrvus: float
    dollars: float


@dataclass(frozen=True)
class CFResult:
    model_type: str
    clinical_dollars: float
    effective_cf: float
    brackets: Tuple[BracketAllocation, ...] = ()


__all__ = [
    "BoundedTier",
    "PercentileTier",
    "OpenTier",
    "FTETier",
    "SingleCFModel",
    "TieredCFModel",
    "PercentileTieredCFModel",
    "BudgetNeutralCFModel",
    "QualityWeightedCFModel",
    "FTEAdjustedCFModel",
    "CFModel",
    "CF_MODEL_TYPES",
    "normalize_model_type",
    "parse_cf_model",
    "CFContext",
    "BracketAllocation",
    "CFResult",
]
