# comp_model/call_pay/models.py
"""
Configuration and result records for the call-pay budget and fairness engine.

Configuration records are frozen pydantic models that accept the camelCase
names used by saved scenarios (``providersOnCall``, ``rotationRatio``,
``eligibleForCall``, ...). Range checks that make a configuration
self-contradictory (FTE outside (0, 1], negative rates, rotation ratio above
the provider count) raise ``comp_model.exceptions.ValidationError`` at
construction time, before any arithmetic.
"""

from dataclasses import dataclass, field
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from comp_model.exceptions import ValidationError

PaymentMethod = Literal[
    "Daily / shift rate",
    "Hourly rate",
    "Per procedure",
    "Per wRVU",
    "Annual stipend",
    "Monthly retainer",
]

# Payment methods paid as a fixed amount per provider rather than per call
FIXED_PAYMENT_METHODS = ("Annual stipend", "Monthly retainer")
# Payment methods paid per case or callback handled during a call
VOLUME_PAYMENT_METHODS = ("Per procedure", "Per wRVU")

HOURS_PER_CALL = 24


class _CallBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class CallProgram(_CallBase):
    """The call coverage program a budget is modeled for."""

    model_year: int = Field(..., alias="modelYear")
    specialty: str
    service_line: Optional[str] = Field(None, alias="serviceLine")
    coverage_type: Optional[str] = Field(None, alias="coverageType")
    providers_on_call: int = Field(..., alias="providersOnCall")
    rotation_ratio: float = Field(..., alias="rotationRatio")

    @model_validator(mode="before")
    @classmethod
    def parse_rotation_ratio(cls, data):
        """Accept rotation ratios written as ``"1-in-4"``."""
        if not isinstance(data, dict):
            return data
        for key in ("rotation_ratio", "rotationRatio"):
            raw = data.get(key)
            if isinstance(raw, str) and "-in-" in raw:
                data = dict(data)
                try:
                    data[key] = float(raw.split("-in-", 1)[1])
                except ValueError as e:
                    raise ValidationError(f"Unrecognized rotation ratio {raw!r}; expected '1-in-N'") from e
        return data

    @model_validator(mode="after")
    def check_rotation(self) -> "CallProgram":
        errors = []
        if self.providers_on_call < 1:
            errors.append(f"Must have at least 1 provider on call (got {self.providers_on_call})")
        if self.rotation_ratio < 1:
            errors.append(f"Rotation ratio must be at least 1 (got {self.rotation_ratio:g})")
        elif self.rotation_ratio > self.providers_on_call:
            errors.append(
                f"Rotation ratio (1-in-{self.rotation_ratio:g}) exceeds providers on call "
                f"({self.providers_on_call})"
            )
        if errors:
            raise ValidationError("; ".join(errors), errors)
        return self


class CallProvider(_CallBase):
    """A provider on the call roster."""

    id: str
    name: Optional[str] = None
    fte: float
    tier_id: Optional[str] = Field(None, alias="tierId")
    eligible_for_call: bool = Field(True, alias="eligibleForCall")

    @model_validator(mode="after")
    def check_fte(self) -> "CallProvider":
        if not 0 < self.fte <= 1:
            raise ValidationError(f"Provider {self.id}: FTE must be in (0, 1] (got {self.fte})")
        return self


class CallAssumptions(_CallBase):
    """Group-level call volume: calls (or shifts) the whole service needs covered."""

    weekday_calls_per_month: float = Field(0.0, alias="weekdayCallsPerMonth")
    weekend_calls_per_month: float = Field(0.0, alias="weekendCallsPerMonth")
    holidays_per_year: float = Field(0.0, alias="holidaysPerYear")

    @model_validator(mode="after")
    def check_volumes(self) -> "CallAssumptions":
        for name in ("weekday_calls_per_month", "weekend_calls_per_month", "holidays_per_year"):
            value = getattr(self, name)
            if value < 0:
                raise ValidationError(f"{name} cannot be negative (got {value})")
        return self

    @property
    def calls_per_year(self) -> float:
        return (self.weekday_calls_per_month + self.weekend_calls_per_month) * 12 + self.holidays_per_year


class TierBurden(CallAssumptions):
    """Call volume for one tier, with the per-call workload used by volume-paid tiers."""

    avg_callbacks_per_24h: float = Field(0.0, alias="avgCallbacksPer24h")
    avg_cases_per_24h: float = Field(0.0, alias="avgCasesPer24h")

    @property
    def cases_per_call(self) -> float:
        """Average cases per call; callbacks stand in when no case volume is given."""
        return self.avg_cases_per_24h or self.avg_callbacks_per_24h


class CallTierRates(_CallBase):
    weekday: float = 0.0
    weekend: float = 0.0
    holiday: float = 0.0
    trauma_uplift_percent: float = Field(0.0, alias="traumaUpliftPercent")

    @model_validator(mode="after")
    def check_rates(self) -> "CallTierRates":
        for name in ("weekday", "weekend", "holiday", "trauma_uplift_percent"):
            value = getattr(self, name)
            if value < 0:
                raise ValidationError(f"Call rate '{name}' cannot be negative (got {value})")
        return self


class CallTier(_CallBase):
    """A payment structure for one coverage level (e.g. C1 in-house call)."""

    id: str
    name: Optional[str] = None
    coverage_type: Optional[str] = Field(None, alias="coverageType")
    payment_method: PaymentMethod = Field("Daily / shift rate", alias="paymentMethod")
    rates: CallTierRates = Field(default_factory=CallTierRates)
    burden: Optional[TierBurden] = None
    enabled: bool = True


@dataclass(frozen=True)
class ValidationReport:
    """Errors block a calculation; warnings are advisory."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def merged(self, other: "ValidationReport") -> "ValidationReport":
        return ValidationReport(
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
        )


@dataclass(frozen=True)
class TierBudget:
    """Annual pay one eligible provider earns from one enabled tier."""
    tier_id: str
    payment_method: str
    annual_pay_per_provider: float
    total_annual_pay: float
    calls_per_year: float
    effective_per_24h: float


@dataclass(frozen=True)
class ProviderCallPay:
    provider_id: str
    provider_name: Optional[str]
    fte: float
    annual_call_pay: float


@dataclass(frozen=True)
class BudgetResult:
    """Aggregate call budget for a program.

    Args:
        total_annual_call_budget: Annual call spend for all eligible providers
        call_pay_per_fte: Budget divided by total eligible FTE
        effective_per_24h: Budget divided by the calls covered per year
        per_provider: Annual pay of each eligible provider
    """
    total_annual_call_budget: float
    call_pay_per_fte: float
    effective_per_24h: float
    per_provider: List[ProviderCallPay] = field(default_factory=list)
    avg_call_pay_per_provider: float = 0.0
    effective_per_call: float = 0.0
    tiers: List[TierBudget] = field(default_factory=list)
    eligible_provider_count: int = 0
    total_eligible_fte: float = 0.0
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ProviderBurden:
    """Expected annual calls allocated to one eligible provider by FTE share."""
    provider_id: str
    provider_name: Optional[str]
    fte: float
    expected_weekday_calls: float
    expected_weekend_calls: float
    expected_holiday_calls: float
    total_expected_calls: float
    burden_index: float


@dataclass(frozen=True)
class FairnessSummary:
    group_average_calls: float
    min_calls: float
    max_calls: float
    standard_deviation: float
    fairness_score: float
    total_eligible_fte: float = 0.0
    eligible_provider_count: int = 0


@dataclass(frozen=True)
class CallPayResult:
    monthly_pay: float
    annual_pay: float
    effective_rate: float


__all__ = [
    "PaymentMethod",
    "FIXED_PAYMENT_METHODS",
    "VOLUME_PAYMENT_METHODS",
    "HOURS_PER_CALL",
    "CallProgram",
    "CallProvider",
    "CallAssumptions",
    "TierBurden",
    "CallTierRates",
    "CallTier",
    "ValidationReport",
    "TierBudget",
    "ProviderCallPay",
    "BudgetResult",
    "ProviderBurden",
    "FairnessSummary",
    "CallPayResult",
]
