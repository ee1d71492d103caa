"""Request bodies for the storage routes."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sipcalc.schemas.plan import PlanDescription

PlanKind = Literal["fixed", "escalating", "freeform", "goal"]


class SaveCalculationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    plan: PlanDescription


class ImportedCalculation(BaseModel):
    """One entry of a history export; ids and import markers are reassigned."""

    model_config = ConfigDict(extra="ignore")

    kind: PlanKind
    timestamp: Optional[datetime] = None
    plan: Dict[str, Any] = Field(default_factory=dict)
    result: Dict[str, Any]

    @field_validator("timestamp")
    @classmethod
    def to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        # naive timestamps are taken as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class HistoryImport(BaseModel):
    model_config = ConfigDict(extra="ignore")

    calculations: List[ImportedCalculation]


class PreferencesUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    defaultPlanKind: Optional[PlanKind] = None
    defaultCategory: Optional[Literal["large", "mid", "small"]] = None
    defaultInflationRate: Optional[float] = Field(default=None, ge=0, le=20)
    showAdvancedOptions: Optional[bool] = None
    notifications: Optional[bool] = None
