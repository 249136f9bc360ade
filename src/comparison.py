"""Side-by-side comparison and ranking of mortgage offers."""

from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from .formatting import format_currency, format_percent
from .mortgage import (
    calculate_monthly_payment,
    calculate_total_cost,
    calculate_total_interest,
)
from .offers import Offer

UNNAMED_BANK = 'Unnamed bank'
REPORT_TITLE = 'Mortgage Comparison'
REPORT_RULE = '─' * 50


@dataclass
class OfferSummary:
    """Derived figures for one offer."""

    id: str
    bank_name: str
    loan_amount: float
    active_bonus: float
    effective_rate: float
    monthly_payment: float  # loan repayment only
    monthly_total: float  # repayment plus extra monthly cost
    total_cost: float
    total_interest: float
    years: int


def summarize_offer(offer: Offer) -> OfferSummary:
    """Compute loan amount, effective rate, payments and totals for an offer."""
    loan_amount = offer.loan_amount
    effective_rate = offer.effective_rate
    monthly = calculate_monthly_payment(loan_amount, effective_rate, offer.years)
    monthly_total = monthly + offer.extra_cost

    return OfferSummary(
        id=offer.id,
        bank_name=offer.bank_name or UNNAMED_BANK,
        loan_amount=loan_amount,
        active_bonus=offer.active_bonus,
        effective_rate=effective_rate,
        monthly_payment=monthly,
        monthly_total=monthly_total,
        total_cost=calculate_total_cost(monthly_total, offer.years),
        total_interest=calculate_total_interest(loan_amount, monthly, offer.years),
        years=offer.years,
    )


def summarize_offers(offers: Sequence[Offer]) -> List[OfferSummary]:
    """Summaries in input order."""
    return [summarize_offer(offer) for offer in offers]


def rank_offers(offers: Sequence[Offer]) -> Dict[str, int]:
    """Rank offers by ascending total cost.

    Returns a mapping of offer id to 1-based rank. Equal totals keep their
    input order.
    """
    summaries = summarize_offers(offers)
    totals = np.array([s.total_cost for s in summaries], dtype=float)
    order = np.argsort(totals, kind='stable')

    return {summaries[i].id: rank for rank, i in enumerate(order, start=1)}


def best_total_cost(summaries: Sequence[OfferSummary]) -> float:
    """Lowest total cost among the summaries, 0 when there are none."""
    if not summaries:
        return 0.0
    return min(s.total_cost for s in summaries)


def savings_vs_best(summaries: Sequence[OfferSummary]) -> Dict[str, float]:
    """Extra cost of each offer compared to the cheapest one."""
    best = best_total_cost(summaries)
    return {s.id: s.total_cost - best for s in summaries}


def comparison_to_dataframe(offers: Sequence[Offer]) -> pd.DataFrame:
    """Build a comparison table with one row per offer, in input order.

    Columns: id, bank_name, label, loan_amount, active_bonus, effective_rate,
    monthly_payment, monthly_total, total_cost, total_interest, years,
    rank, savings_vs_best. ``label`` is the bank name prefixed with the
    offer's position, so offers sharing a name stay apart in charts.
    """
    summaries = summarize_offers(offers)
    ranks = rank_offers(offers)
    savings = savings_vs_best(summaries)

    rows = []
    for position, s in enumerate(summaries, start=1):
        rows.append({
            'id': s.id,
            'bank_name': s.bank_name,
            'label': f"{position}. {s.bank_name}",
            'loan_amount': s.loan_amount,
            'active_bonus': s.active_bonus,
            'effective_rate': s.effective_rate,
            'monthly_payment': s.monthly_payment,
            'monthly_total': s.monthly_total,
            'total_cost': s.total_cost,
            'total_interest': s.total_interest,
            'years': s.years,
            'rank': ranks[s.id],
            'savings_vs_best': savings[s.id],
        })

    return pd.DataFrame(rows, columns=[
        'id', 'bank_name', 'label', 'loan_amount', 'active_bonus', 'effective_rate',
        'monthly_payment', 'monthly_total', 'total_cost', 'total_interest',
        'years', 'rank', 'savings_vs_best',
    ])


def comparison_text(offers: Sequence[Offer]) -> str:
    """Plain-text comparison report, one line per offer."""
    lines = [
        f"{s.bank_name}: Rate {format_percent(s.effective_rate)}"
        f" | Payment {format_currency(s.monthly_total)}"
        f" | Total {format_currency(s.total_cost)}"
        f" | Interest {format_currency(s.total_interest)}"
        for s in summarize_offers(offers)
    ]
    return '\n'.join([REPORT_TITLE, REPORT_RULE, *lines])
