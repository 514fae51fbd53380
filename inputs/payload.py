"""
Parse external (camelCase) request payloads into SimulationInput.

Two payload shapes are accepted:
  SimulationRequest — four-bucket form: allocRisk / allocStable / allocCash / allocSelf,
                      income as annualIncome or monthlyIncome
  LegacyRequest     — two-bucket form: savingsRate / riskRate with monthlyIncome

parse_payload() picks the shape by its keys.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from core.schema import SimulationInput

from .legacy import LegacyParams, to_simulation_input
from .validators import InvalidInputError

_LEGACY_KEYS = ("savingsRate", "riskRate", "savings_rate", "risk_rate")


class SimulationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    age_start: int = Field(default=25, ge=0, alias="ageStart")
    age_end: int = Field(default=65, ge=0, alias="ageEnd")
    annual_income: Optional[float] = Field(default=None, ge=0, alias="annualIncome")
    monthly_income: Optional[float] = Field(default=None, ge=0, alias="monthlyIncome")
    alloc_risk: float = Field(default=0.3, ge=0, le=1, alias="allocRisk")
    alloc_stable: float = Field(default=0.2, ge=0, le=1, alias="allocStable")
    alloc_cash: float = Field(default=0.2, ge=0, le=1, alias="allocCash")
    alloc_self: float = Field(default=0.1, ge=0, le=1, alias="allocSelf")
    goal_amount: float = Field(default=500_000, ge=0, alias="goalAmount")
    market_volatility: Optional[float] = Field(default=None, ge=0, alias="marketVolatility")

    @model_validator(mode="after")
    def _check_ages(self) -> "SimulationRequest":
        if self.age_start > self.age_end:
            raise ValueError(f"ageStart ({self.age_start}) is after ageEnd ({self.age_end})")
        return self

    @property
    def resolved_annual_income(self) -> float:
        if self.annual_income is not None:
            return self.annual_income
        if self.monthly_income is not None:
            return self.monthly_income * 12
        return 30_000.0

    def to_input(self) -> SimulationInput:
        return SimulationInput(
            age_start=self.age_start,
            age_end=self.age_end,
            annual_income=self.resolved_annual_income,
            alloc_risk=self.alloc_risk,
            alloc_stable=self.alloc_stable,
            alloc_cash=self.alloc_cash,
            alloc_self=self.alloc_self,
            goal_amount=self.goal_amount,
            market_volatility=self.market_volatility,
        )


class LegacyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    age_start: int = Field(default=25, ge=0, alias="ageStart")
    age_end: int = Field(default=65, ge=0, alias="ageEnd")
    monthly_income: float = Field(default=2_000, ge=0, alias="monthlyIncome")
    savings_rate: float = Field(default=0.1, ge=0, le=1, alias="savingsRate")
    risk_rate: float = Field(default=0.0, ge=0, le=1, alias="riskRate")
    goal_amount: float = Field(default=100_000, ge=0, alias="goalAmount")

    def to_params(self) -> LegacyParams:
        return LegacyParams(
            age_start=self.age_start,
            age_end=self.age_end,
            monthly_income=self.monthly_income,
            savings_rate=self.savings_rate,
            risk_rate=self.risk_rate,
            goal_amount=self.goal_amount,
        )


def is_legacy_payload(payload: Mapping[str, Any]) -> bool:
    return any(k in payload for k in _LEGACY_KEYS)


def parse_payload(payload: Mapping[str, Any]) -> SimulationInput:
    """
    Build a SimulationInput from a raw request dict.

    Raises InvalidInputError when the payload fails field checks.
    """
    try:
        if is_legacy_payload(payload):
            return to_simulation_input(LegacyRequest.model_validate(dict(payload)).to_params())
        return SimulationRequest.model_validate(dict(payload)).to_input()
    except ValidationError as exc:
        raise InvalidInputError(str(exc)) from exc
