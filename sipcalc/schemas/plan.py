"""Plan descriptions accepted by the calculators.

These models carry the upstream validation ranges; the engine functions
themselves trust their arguments.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sipcalc.core.compounding import coerce_amount
from sipcalc.core.rates import Category

MIN_CONTRIBUTION = 500.0
MAX_CONTRIBUTION = 1_000_000.0
MAX_TARGET_VALUE = 100_000_000.0


class _PlanBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    inflationRate: float = Field(default=0.0, ge=0, le=20)


class FixedPlan(_PlanBase):
    kind: Literal["fixed"] = "fixed"
    contributionAmount: float = Field(ge=MIN_CONTRIBUTION, le=MAX_CONTRIBUTION)
    periodCount: int = Field(ge=12, le=600)
    category: Category = Category.MID_CAP

    @field_validator("category", mode="before")
    @classmethod
    def resolve_category(cls, value: object) -> Category:
        return Category(value)


class EscalatingPlan(_PlanBase):
    kind: Literal["escalating"] = "escalating"
    initialContribution: float = Field(ge=MIN_CONTRIBUTION, le=MAX_CONTRIBUTION)
    periodCount: int = Field(ge=12, le=600)
    escalationRate: float = Field(default=10.0, ge=0, le=50)


class FreeformPlan(_PlanBase):
    """Explicit per-month schedule.

    Blank or non-numeric entries become 0. When ``periodCount`` is left out
    it is the schedule length; a longer ``periodCount`` means the trailing
    months contribute nothing.
    """

    kind: Literal["freeform"] = "freeform"
    contributions: List[float]
    periodCount: int = Field(ge=6, le=600)

    @model_validator(mode="before")
    @classmethod
    def default_period_count(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("periodCount") is None:
            contributions = data.get("contributions")
            if isinstance(contributions, (list, tuple)):
                data = {**data, "periodCount": len(contributions)}
        return data

    @field_validator("contributions", mode="before")
    @classmethod
    def coerce_entries(cls, value: object) -> object:
        if isinstance(value, (list, tuple)):
            return [coerce_amount(entry) for entry in value]
        return value

    @model_validator(mode="after")
    def ensure_schedule(self) -> "FreeformPlan":
        errors: List[str] = []
        for month, amount in enumerate(self.contributions, start=1):
            if amount < 0:
                errors.append(f"month {month}: amount cannot be negative")
            elif amount > MAX_CONTRIBUTION:
                errors.append(f"month {month}: amount too large")
        if errors:
            raise ValueError("; ".join(errors))
        if not any(amount > 0 for amount in self.contributions):
            raise ValueError("at least one contribution must be positive")
        if self.periodCount < len(self.contributions):
            raise ValueError("periodCount is shorter than the contribution schedule")
        return self


class GoalPlan(_PlanBase):
    kind: Literal["goal"] = "goal"
    targetValue: float = Field(gt=0, le=MAX_TARGET_VALUE)
    periodCount: int = Field(ge=12, le=600)
    category: Category = Category.MID_CAP

    @field_validator("category", mode="before")
    @classmethod
    def resolve_category(cls, value: object) -> Category:
        return Category(value)


PlanDescription = Annotated[
    Union[FixedPlan, EscalatingPlan, FreeformPlan, GoalPlan],
    Field(discriminator="kind"),
]


class CalculationRequest(BaseModel):
    """Envelope used by the API so any plan kind can be posted to one route."""

    model_config = ConfigDict(extra="forbid")

    plan: PlanDescription


class ComparisonRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: float = Field(ge=MIN_CONTRIBUTION, le=MAX_CONTRIBUTION)
    years: int = Field(ge=1, le=50)
    escalationRate: float = Field(default=10.0, ge=0, le=50)
    inflationRate: float = Field(default=0.0, ge=0, le=20)


class TaxRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    growth: float
    years: float = Field(ge=0)
    fundType: Literal["equity", "debt"] = "equity"
