"""Post-processing applied to every projection: inflation and effective rate."""

from __future__ import annotations

from typing import Tuple


def inflation_adjust(
    final_value: float,
    total_contributed: float,
    inflation_rate: float,
    years: float,
) -> Tuple[float, float]:
    """Return ``(inflation_adjusted_value, real_growth)``.

    ``inflation_rate`` is a percent per year. With no inflation the nominal
    figures come back unchanged.
    """
    if inflation_rate <= 0:
        return final_value, final_value - total_contributed
    adjusted = final_value / (1.0 + inflation_rate / 100.0) ** years
    return adjusted, adjusted - total_contributed


def effective_annual_rate(final_value: float, total_contributed: float, years: float) -> float:
    """Compound annual growth rate (percent) implied by the totals.

    Degenerate plans (nothing contributed, no elapsed time) report 0.
    """
    if total_contributed <= 0 or years <= 0:
        return 0.0
    return ((final_value / total_contributed) ** (1.0 / years) - 1.0) * 100.0
