from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Union

from sipcalc.core.adjustments import effective_annual_rate, inflation_adjust
from sipcalc.core.compounding import annuity_due_factor, coerce_amount, value_of_contribution
from sipcalc.core.rates import (
    ESCALATING_ANNUAL_RATE,
    FREEFORM_ANNUAL_RATE,
    PERIODS_PER_YEAR,
    Category,
    periodic_rate,
    rate_for,
)
from sipcalc.schemas.plan import EscalatingPlan, FixedPlan, FreeformPlan, GoalPlan
from sipcalc.schemas.projection import GoalResult, PeriodSnapshot, ProjectionResult

logger = logging.getLogger(__name__)


def _year_count(period_count: int) -> int:
    return math.ceil(period_count / PERIODS_PER_YEAR) if period_count > 0 else 0


def _is_year_boundary(period: int, period_count: int) -> bool:
    return period % PERIODS_PER_YEAR == 0 or period == period_count


def _snapshot(period: int, contributed: float, value: float, period_contribution: float) -> PeriodSnapshot:
    return PeriodSnapshot(
        year=_year_count(period),
        periodsElapsed=period,
        contributed=contributed,
        value=value,
        growth=value - contributed,
        periodContribution=period_contribution,
    )


def _summarise(
    kind: str,
    label: str,
    period_count: int,
    total_contributed: float,
    final_value: float,
    annual_rate: float,
    inflation_rate: float,
    timeline: List[PeriodSnapshot],
) -> ProjectionResult:
    """Attach growth, inflation and effective-rate figures to raw totals."""
    years = period_count / PERIODS_PER_YEAR
    adjusted, real_growth = inflation_adjust(final_value, total_contributed, inflation_rate, years)
    return ProjectionResult(
        kind=kind,
        label=label,
        periodCount=period_count,
        years=years,
        totalContributed=total_contributed,
        finalValue=final_value,
        growth=final_value - total_contributed,
        annualRateAssumed=annual_rate * 100,
        effectiveAnnualRate=effective_annual_rate(final_value, total_contributed, years),
        inflationRate=inflation_rate,
        inflationAdjustedValue=adjusted,
        realGrowth=real_growth,
        averageContribution=total_contributed / period_count if period_count > 0 else 0.0,
        timeline=timeline,
    )


def project_fixed(
    contribution_amount: float,
    period_count: int,
    category: Union[Category, str, None] = Category.MID_CAP,
    inflation_rate: float = 0.0,
    annual_rate: Optional[float] = None,
) -> ProjectionResult:
    """
    Level contribution every month (annuity due).

    The final value and every yearly snapshot come straight from the closed
    form at that many elapsed periods, so no entry depends on the one before
    it. ``annual_rate`` overrides the category lookup.
    """
    category = Category(category)
    rate = rate_for(category) if annual_rate is None else annual_rate
    r = periodic_rate(rate)

    final_value = contribution_amount * annuity_due_factor(period_count, r)
    total_contributed = contribution_amount * period_count

    timeline: List[PeriodSnapshot] = []
    for year in range(1, _year_count(period_count) + 1):
        elapsed = min(year * PERIODS_PER_YEAR, period_count)
        timeline.append(
            _snapshot(
                elapsed,
                contributed=contribution_amount * elapsed,
                value=contribution_amount * annuity_due_factor(elapsed, r),
                period_contribution=contribution_amount,
            )
        )

    logger.debug(
        "fixed plan: amount=%s periods=%s rate=%s final=%.2f",
        contribution_amount,
        period_count,
        rate,
        final_value,
    )
    return _summarise(
        "fixed",
        category.label,
        period_count,
        total_contributed,
        final_value,
        rate,
        inflation_rate,
        timeline,
    )


def project_escalating(
    initial_contribution: float,
    period_count: int,
    escalation_rate: float,
    inflation_rate: float = 0.0,
) -> ProjectionResult:
    """
    Monthly contribution that steps up once every 12 months.

    Simulated month by month at the fixed escalating-plan rate:
      1) Compound the current amount for the periods still remaining,
         including this one.
      2) Carry a running balance for the year-boundary snapshots.
      3) After each 12th month, if more months remain, raise the amount
         by ``escalation_rate`` percent.
    """
    r = periodic_rate(ESCALATING_ANNUAL_RATE)
    step_up = 1 + escalation_rate / 100

    amount = float(initial_contribution)
    total_contributed = 0.0
    final_value = 0.0
    balance = 0.0
    timeline: List[PeriodSnapshot] = []

    for period in range(1, period_count + 1):
        final_value += value_of_contribution(amount, period_count - period + 1, r)
        total_contributed += amount
        balance = (balance + amount) * (1 + r)

        if _is_year_boundary(period, period_count):
            timeline.append(_snapshot(period, total_contributed, balance, amount))

        if period % PERIODS_PER_YEAR == 0 and period < period_count:
            amount *= step_up

    logger.debug(
        "escalating plan: initial=%s periods=%s step=%s%% final=%.2f",
        initial_contribution,
        period_count,
        escalation_rate,
        final_value,
    )
    return _summarise(
        "escalating",
        f"{escalation_rate:g}% annual increase",
        period_count,
        total_contributed,
        final_value,
        ESCALATING_ANNUAL_RATE,
        inflation_rate,
        timeline,
    )


def project_freeform(
    contributions: Sequence[object],
    inflation_rate: float = 0.0,
    period_count: Optional[int] = None,
) -> ProjectionResult:
    """
    Arbitrary month-by-month schedule at the fixed freeform rate.

    Entries are coerced defensively: blanks, junk and non-positive amounts
    add nothing to either total. ``period_count`` longer than the schedule
    pads it with empty months.
    """
    if period_count is None:
        period_count = len(contributions)
    r = periodic_rate(FREEFORM_ANNUAL_RATE)

    total_contributed = 0.0
    final_value = 0.0
    balance = 0.0
    invested_this_year = 0.0
    timeline: List[PeriodSnapshot] = []

    for period in range(1, period_count + 1):
        amount = coerce_amount(contributions[period - 1]) if period <= len(contributions) else 0.0

        if amount > 0:
            final_value += value_of_contribution(amount, period_count - period + 1, r)
            total_contributed += amount
            invested_this_year += amount
            balance += amount
        balance *= 1 + r

        if _is_year_boundary(period, period_count):
            timeline.append(_snapshot(period, total_contributed, balance, invested_this_year))
            invested_this_year = 0.0

    logger.debug("freeform plan: periods=%s total=%.2f final=%.2f", period_count, total_contributed, final_value)
    return _summarise(
        "freeform",
        "Custom amounts",
        period_count,
        total_contributed,
        final_value,
        FREEFORM_ANNUAL_RATE,
        inflation_rate,
        timeline,
    )


def solve_goal(
    target_value: float,
    period_count: int,
    category: Union[Category, str, None] = Category.MID_CAP,
) -> GoalResult:
    """Level monthly contribution whose fixed-plan future value is ``target_value``."""
    category = Category(category)
    rate = rate_for(category)
    factor = annuity_due_factor(period_count, periodic_rate(rate))

    # no periods means nothing can be solved for
    required = target_value / factor if factor > 0 else 0.0
    total_contributed = required * period_count
    years = period_count / PERIODS_PER_YEAR

    return GoalResult(
        targetValue=target_value,
        category=category.value,
        requiredContribution=required,
        totalContributed=total_contributed,
        growth=target_value - total_contributed,
        effectiveAnnualRate=effective_annual_rate(target_value, total_contributed, years),
        annualRateAssumed=rate * 100,
        periodCount=period_count,
        years=years,
    )


def compare_plans(
    amount: float,
    years: int,
    escalation_rate: float = 10.0,
    inflation_rate: float = 0.0,
) -> List[ProjectionResult]:
    """
    Run every plan variant on the same inputs.

    Order: large, mid and small cap fixed plans, then escalating, then a
    freeform schedule repeating ``amount`` every month.
    """
    period_count = years * PERIODS_PER_YEAR
    results = [
        project_fixed(amount, period_count, category, inflation_rate)
        for category in (Category.LARGE_CAP, Category.MID_CAP, Category.SMALL_CAP)
    ]
    results.append(project_escalating(amount, period_count, escalation_rate, inflation_rate))
    results.append(project_freeform([amount] * period_count, inflation_rate))
    return results


def calculate(
    plan: Union[FixedPlan, EscalatingPlan, FreeformPlan, GoalPlan],
) -> Union[ProjectionResult, GoalResult]:
    """Route a validated plan description to its calculator."""
    if isinstance(plan, FixedPlan):
        return project_fixed(plan.contributionAmount, plan.periodCount, plan.category, plan.inflationRate)
    if isinstance(plan, EscalatingPlan):
        return project_escalating(
            plan.initialContribution,
            plan.periodCount,
            plan.escalationRate,
            plan.inflationRate,
        )
    if isinstance(plan, FreeformPlan):
        return project_freeform(plan.contributions, plan.inflationRate, plan.periodCount)
    if isinstance(plan, GoalPlan):
        return solve_goal(plan.targetValue, plan.periodCount, plan.category)
    raise TypeError(f"unsupported plan type: {type(plan).__name__}")
