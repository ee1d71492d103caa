"""Assumed annual growth rates per plan category."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Union


class Category(str, Enum):
    LARGE_CAP = "large"
    MID_CAP = "mid"
    SMALL_CAP = "small"

    @classmethod
    def _missing_(cls, value: object) -> "Category":
        # unrecognised categories fall back to mid cap
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return cls.MID_CAP

    @property
    def label(self) -> str:
        return f"{self.value.capitalize()} Cap"


ANNUAL_RATES: Dict[Category, float] = {
    Category.LARGE_CAP: 0.10,
    Category.MID_CAP: 0.12,
    Category.SMALL_CAP: 0.15,
}

# Escalating and freeform plans do not consult the table.
ESCALATING_ANNUAL_RATE = 0.15
FREEFORM_ANNUAL_RATE = 0.12

PERIODS_PER_YEAR = 12


def rate_for(category: Union[Category, str, None]) -> float:
    """Annual rate for ``category``; anything unknown gets the mid cap rate."""
    return ANNUAL_RATES[Category(category)]


def periodic_rate(annual_rate: float) -> float:
    return annual_rate / PERIODS_PER_YEAR
