"""Data contracts for projection results."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class PeriodSnapshot(BaseModel):
    """Cumulative position at one year boundary."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1)
    periodsElapsed: int = Field(..., ge=0)
    contributed: float
    value: float
    growth: float
    # amount in force (fixed, escalating) or invested during the year (freeform)
    periodContribution: float = 0.0


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed", "escalating", "freeform"]
    label: str
    periodCount: int
    years: float

    totalContributed: float
    finalValue: float
    growth: float
    annualRateAssumed: float = Field(..., description="Nominal annual rate, in percent.")
    effectiveAnnualRate: float = Field(..., description="Implied compound annual rate, in percent.")

    inflationRate: float = 0.0
    inflationAdjustedValue: float
    realGrowth: float

    averageContribution: float
    timeline: List[PeriodSnapshot]


class GoalResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["goal"] = "goal"
    targetValue: float
    category: str
    requiredContribution: float
    totalContributed: float
    growth: float
    effectiveAnnualRate: float
    annualRateAssumed: float
    periodCount: int
    years: float


class TaxEstimate(BaseModel):
    model_config = ConfigDict(frozen=True)

    grossGrowth: float
    taxableAmount: float
    taxRate: float = Field(..., description="Applied rate, in percent.")
    taxAmount: float
    postTaxGrowth: float
    fundType: Literal["equity", "debt"]
    isLongTerm: bool
    exemption: Optional[float] = None
