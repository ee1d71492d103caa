from __future__ import annotations

from math import isclose

from sipcalc.core.projection import project_escalating, project_fixed


def test_zero_escalation_matches_fixed_plan_at_escalating_rate():
    escalating = project_escalating(1000, 120, 0)
    fixed = project_fixed(1000, 120, "small")

    assert isclose(escalating.finalValue, fixed.finalValue, rel_tol=1e-9)
    assert isclose(escalating.totalContributed, fixed.totalContributed)
    assert escalating.annualRateAssumed == fixed.annualRateAssumed


def test_amount_steps_up_after_each_year():
    result = project_escalating(1000, 36, 10)

    amounts = [snapshot.periodContribution for snapshot in result.timeline]
    assert [round(amount, 6) for amount in amounts] == [1000.0, 1100.0, 1210.0]
    assert isclose(result.totalContributed, 12 * (1000 + 1100 + 1210))


def test_final_value_compounds_each_month_for_its_remaining_periods():
    r = 0.15 / 12
    result = project_escalating(1000, 24, 10)

    expected = sum(1000 * (1 + r) ** (24 - m + 1) for m in range(1, 13))
    expected += sum(1100 * (1 + r) ** (24 - m + 1) for m in range(13, 25))
    assert isclose(result.finalValue, expected, rel_tol=1e-12)


def test_no_step_up_after_last_period():
    # 12 periods only: the amount must never be raised
    result = project_escalating(1000, 12, 50)
    assert result.totalContributed == 12_000
    assert result.timeline[-1].periodContribution == 1000


def test_timeline_ends_at_final_totals():
    result = project_escalating(2500, 60, 7.5, inflation_rate=5)

    assert len(result.timeline) == 5
    assert isclose(result.timeline[-1].contributed, result.totalContributed, rel_tol=1e-6)
    assert isclose(result.timeline[-1].value, result.finalValue, rel_tol=1e-9)
    assert isclose(result.inflationAdjustedValue, result.finalValue / 1.05**5)
    values = [snapshot.value for snapshot in result.timeline]
    assert values == sorted(values)


def test_label_names_the_step_up():
    assert project_escalating(1000, 12, 10).label == "10% annual increase"
    assert project_escalating(1000, 12, 7.5).label == "7.5% annual increase"


def test_higher_escalation_grows_more():
    low = project_escalating(1000, 120, 5)
    high = project_escalating(1000, 120, 15)
    assert high.finalValue > low.finalValue
    assert high.totalContributed > low.totalContributed
