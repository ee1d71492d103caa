"""Single-contribution and annuity-due compounding."""

from __future__ import annotations

import math


def value_of_contribution(amount: float, periods_remaining: int, periodic_rate: float) -> float:
    """Future value of one contribution.

    ``periods_remaining`` counts the contribution's own period, so a
    contribution made at period i of n compounds for n - i + 1 periods.
    """
    return amount * (1.0 + periodic_rate) ** periods_remaining


def annuity_due_factor(periods: int, periodic_rate: float) -> float:
    """Multiplier turning a level per-period contribution into its future value.

    FV = A * ((1 + r)^n - 1) / r * (1 + r). A zero rate collapses to the
    linear sum ``n``; zero or negative periods give 0.
    """
    if periods <= 0:
        return 0.0
    if periodic_rate == 0:
        return float(periods)
    growth = (1.0 + periodic_rate) ** periods
    return (growth - 1.0) / periodic_rate * (1.0 + periodic_rate)


def coerce_amount(value: object) -> float:
    """Read a user-entered contribution, treating anything unusable as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        amount = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount) or math.isinf(amount):
        return 0.0
    return amount
