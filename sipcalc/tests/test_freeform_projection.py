from __future__ import annotations

from math import isclose

from sipcalc.core.projection import project_fixed, project_freeform


def test_two_period_scenario():
    result = project_freeform([1000, 1000])

    assert isclose(result.finalValue, 2030.1, rel_tol=1e-12)
    assert result.totalContributed == 2000
    assert result.averageContribution == 1000
    assert len(result.timeline) == 1
    assert isclose(result.timeline[0].value, 2030.1, rel_tol=1e-12)


def test_all_zero_schedule_is_degenerate_not_an_error():
    result = project_freeform([0] * 24)

    assert result.finalValue == 0
    assert result.totalContributed == 0
    assert result.effectiveAnnualRate == 0
    assert result.averageContribution == 0
    assert len(result.timeline) == 2


def test_unusable_entries_count_as_zero():
    messy = project_freeform([1000, "", "abc", None, -500, "1000"])
    clean = project_freeform([1000, 0, 0, 0, 0, 1000])

    assert messy.totalContributed == 2000
    assert isclose(messy.finalValue, clean.finalValue)
    # average still divides by every period, not only funded ones
    assert isclose(messy.averageContribution, 2000 / 6)


def test_partial_final_year_gets_its_own_bucket():
    result = project_freeform([1000] * 18)

    assert len(result.timeline) == 2
    first, second = result.timeline
    assert (first.year, first.periodsElapsed, first.periodContribution) == (1, 12, 12_000)
    assert (second.year, second.periodsElapsed, second.periodContribution) == (2, 18, 6_000)
    assert isclose(second.contributed, 18_000)
    assert isclose(second.value, result.finalValue, rel_tol=1e-9)
    assert result.years == 1.5


def test_padding_with_empty_periods_still_compounds():
    short = project_freeform([1000] * 12)
    padded = project_freeform([1000] * 12, period_count=24)

    assert padded.totalContributed == short.totalContributed
    assert isclose(padded.finalValue, short.finalValue * 1.01**12, rel_tol=1e-9)


def test_level_schedule_matches_mid_cap_fixed_plan():
    freeform = project_freeform([3000] * 60)
    fixed = project_fixed(3000, 60, "mid")
    assert isclose(freeform.finalValue, fixed.finalValue, rel_tol=1e-9)


def test_inflation_uses_fractional_years():
    result = project_freeform([1000] * 6, inflation_rate=4)
    assert isclose(result.inflationAdjustedValue, result.finalValue / 1.04**0.5)
