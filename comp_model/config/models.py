# comp_model/config/models.py
"""
Pydantic models for validating the structure and types of scenario files
loaded from YAML.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from comp_model.benchmarks.models import MarketBenchmarks
from comp_model.call_pay.forecast import ForecastAssumptions
from comp_model.call_pay.models import CallAssumptions, CallProgram, CallProvider, CallTier
from comp_model.cf_models.models import CFContext, parse_cf_model
from comp_model.exceptions import ValidationError
from comp_model.fmv.models import FMVPolicy

logger = logging.getLogger(__name__)


class _ConfigBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class FMVSettings(_ConfigBase):
    """FMV evaluation of the program's effective per-24h rate."""

    specialty: Optional[str] = Field(None, description="Defaults to the program specialty")
    coverage_type: Optional[str] = Field(
        None, alias="coverageType", description="Defaults to the program coverage type"
    )
    burden_score: Optional[float] = Field(None, alias="burdenScore", ge=0, le=100)
    policy: FMVPolicy = Field(default_factory=FMVPolicy)


class CFScenario(_ConfigBase):
    """A CF model evaluated at a given productivity."""

    model: Any = Field(..., description="CF model mapping with model_type / modelType")
    wrvus: float = Field(..., ge=0)
    fte: float = Field(1.0, gt=0, le=1)
    fixed_comp: float = Field(0.0, alias="fixedComp")

    @field_validator("model", mode="before")
    @classmethod
    def build_model(cls, value: Any) -> Any:
        return parse_cf_model(value)


class ScenarioConfig(_ConfigBase):
    """A complete call-pay and compensation scenario."""

    name: Optional[str] = None
    description: Optional[str] = None
    program: CallProgram
    providers: List[CallProvider] = Field(default_factory=list)
    tiers: List[CallTier] = Field(default_factory=list)
    assumptions: CallAssumptions = Field(default_factory=CallAssumptions)
    fmv: Optional[FMVSettings] = None
    market: Optional[MarketBenchmarks] = None
    cf_models: Dict[str, CFScenario] = Field(default_factory=dict, alias="cfModels")
    forecast: Optional[ForecastAssumptions] = None

    @model_validator(mode="after")
    def check_market_for_cf_models(self) -> "ScenarioConfig":
        needs_market = [
            name
            for name, scenario in self.cf_models.items()
            if scenario.model.model_type == "percentile_tiered"
        ]
        if needs_market and (self.market is None or self.market.wrvu is None):
            raise ValidationError(
                f"CF models {', '.join(needs_market)} need market wRVU benchmarks"
            )
        return self

    def cf_context(self, scenario: CFScenario) -> CFContext:
        return CFContext(market=self.market, fixed_comp=scenario.fixed_comp)


__all__ = ["FMVSettings", "CFScenario", "ScenarioConfig"]
