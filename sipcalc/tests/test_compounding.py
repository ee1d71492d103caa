from __future__ import annotations

from math import isclose, nan

import pytest

from sipcalc.core.adjustments import effective_annual_rate, inflation_adjust
from sipcalc.core.compounding import annuity_due_factor, coerce_amount, value_of_contribution


def test_contribution_compounds_for_its_own_period():
    assert isclose(value_of_contribution(1000, 1, 0.01), 1010.0)
    assert isclose(value_of_contribution(1000, 2, 0.01), 1020.1)
    assert value_of_contribution(1000, 0, 0.01) == 1000


def test_annuity_due_factor_matches_sum_of_contributions():
    r = 0.01
    expected = sum(value_of_contribution(1.0, 24 - i + 1, r) for i in range(1, 25))
    assert isclose(annuity_due_factor(24, r), expected, rel_tol=1e-12)


def test_annuity_due_factor_zero_rate_is_linear():
    assert annuity_due_factor(120, 0.0) == 120.0


def test_annuity_due_factor_without_periods_is_zero():
    assert annuity_due_factor(0, 0.01) == 0.0
    assert annuity_due_factor(-3, 0.01) == 0.0


def test_inflation_adjustment_deflates_final_value():
    adjusted, real_growth = inflation_adjust(200_000.0, 100_000.0, 6.0, 10)
    assert isclose(adjusted, 200_000.0 / 1.06**10)
    assert isclose(real_growth, adjusted - 100_000.0)


def test_no_inflation_keeps_nominal_values():
    assert inflation_adjust(150.0, 100.0, 0.0, 5) == (150.0, 50.0)


def test_effective_rate_recovers_compound_rate():
    assert isclose(effective_annual_rate(100 * 1.08**5, 100, 5), 8.0, rel_tol=1e-9)


@pytest.mark.parametrize("total, years", [(0.0, 5), (-10.0, 5), (100.0, 0), (100.0, -1)])
def test_effective_rate_is_zero_for_degenerate_plans(total, years):
    assert effective_annual_rate(500.0, total, years) == 0.0


@pytest.mark.parametrize(
    "raw, expected",
    [
        (1000, 1000.0),
        ("2500.5", 2500.5),
        (" 300 ", 300.0),
        ("", 0.0),
        ("   ", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        (nan, 0.0),
        (float("inf"), 0.0),
        (True, 0.0),
        ([1, 2], 0.0),
        (-50, -50.0),
    ],
)
def test_coerce_amount(raw, expected):
    assert coerce_amount(raw) == expected
