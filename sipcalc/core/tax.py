"""Rough capital-gains estimate on a projection's growth."""

from __future__ import annotations

from sipcalc.schemas.projection import TaxEstimate

EQUITY_LTCG_EXEMPTION = 100_000.0
EQUITY_LTCG_RATE = 0.10
EQUITY_STCG_RATE = 0.15
# debt gains are taxed at the slab rate; assume the top slab
DEBT_RATE = 0.30


def estimate_tax(growth: float, years: float, fund_type: str = "equity") -> TaxEstimate:
    """
    Equity held over a year pays long-term tax above the exemption; shorter
    holdings pay the short-term rate on all gains. Debt gains pay the slab
    rate either way and count as long-term after three years.
    """
    exemption = None
    if fund_type == "equity":
        is_long_term = years > 1
        if is_long_term:
            exemption = EQUITY_LTCG_EXEMPTION
            taxable = growth - EQUITY_LTCG_EXEMPTION
            rate = EQUITY_LTCG_RATE
        else:
            taxable = growth
            rate = EQUITY_STCG_RATE
    elif fund_type == "debt":
        is_long_term = years > 3
        taxable = growth
        rate = DEBT_RATE
    else:
        raise ValueError(f"unknown fund type: {fund_type!r}")

    taxable = max(0.0, taxable)
    tax = taxable * rate
    return TaxEstimate(
        grossGrowth=growth,
        taxableAmount=taxable,
        taxRate=rate * 100,
        taxAmount=tax,
        postTaxGrowth=growth - tax,
        fundType=fund_type,
        isLongTerm=is_long_term,
        exemption=exemption,
    )
