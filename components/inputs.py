"""Streamlit input components for offers and bonuses."""

import streamlit as st
from dataclasses import replace
from typing import Optional

from src.config import (
    BASE_RATE_RANGE,
    BONUS_VALUE_RANGE,
    LOAN_PERCENTAGE_RANGE,
    YEARS_RANGE,
)
from src.formatting import format_price_display, parse_price_input
from src.offers import (
    Bonus,
    Offer,
    accept_bonus_input,
    add_bonus,
    clamp_offer,
    coerce_bonus_value,
    delete_bonus,
    update_bonus,
)


def bonus_input(bonus: Bonus, key_prefix: str) -> Optional[Bonus]:
    """Create inputs for one bonus.

    Returns the edited Bonus, or None if the user deleted it.
    """
    key = f"{key_prefix}_bonus_{bonus.id}"

    col1, col2, col3, col4 = st.columns([4, 2, 1, 1])

    with col1:
        label = st.text_input(
            "Bonus",
            value=bonus.label,
            placeholder="e.g. Salary deposit",
            key=f"{key}_label",
            label_visibility="collapsed",
        )

    with col2:
        raw_value = st.text_input(
            "Reduction (%)",
            value=str(bonus.value),
            key=f"{key}_value",
            label_visibility="collapsed",
            help=f"Rate reduction between {BONUS_VALUE_RANGE[0]:g} and {BONUS_VALUE_RANGE[1]:g} points",
        )

    with col3:
        active = st.toggle(
            "Active",
            value=bonus.active,
            key=f"{key}_active",
            label_visibility="collapsed",
        )

    with col4:
        if st.button("×", key=f"{key}_delete", help="Remove bonus"):
            return None

    # Text inputs commit on blur, so the value is coerced here
    if accept_bonus_input(raw_value):
        value = coerce_bonus_value(raw_value)
    else:
        st.caption(f"Ignored invalid reduction '{raw_value}'")
        value = coerce_bonus_value(bonus.value)

    with st.expander("Conditions"):
        details = st.text_area(
            "Conditions",
            value=bonus.details,
            placeholder="Write the specific conditions...",
            key=f"{key}_details",
            label_visibility="collapsed",
        )

    return replace(bonus, label=label, value=value, active=active, details=details)


def offer_input_form(offer: Offer) -> Optional[Offer]:
    """Create input form for an offer and its bonuses.

    Returns the edited Offer, or None if the user deleted it.
    """
    offer = clamp_offer(offer)
    key_prefix = f"offer_{offer.id}"

    col1, col2 = st.columns([5, 1])
    with col1:
        bank_name = st.text_input(
            "Bank Name",
            value=offer.bank_name,
            placeholder="Bank name",
            key=f"{key_prefix}_bank",
        )
    with col2:
        st.write("")
        if st.button("✕", key=f"{key_prefix}_delete", help="Remove this bank"):
            return None

    col1, col2 = st.columns(2)

    with col1:
        price_text = st.text_input(
            "House Price (€)",
            value=format_price_display(offer.house_price),
            key=f"{key_prefix}_price",
            help="Use '.' for thousands, e.g. 250.000",
        )

        base_rate = st.number_input(
            "Base Interest Rate (%)",
            min_value=BASE_RATE_RANGE[0],
            max_value=BASE_RATE_RANGE[1],
            value=float(offer.base_rate),
            step=0.05,
            format="%.2f",
            key=f"{key_prefix}_rate",
            help="Annual interest rate before bonuses",
        )

        extra_cost = st.number_input(
            "Extra Monthly Cost (€)",
            min_value=0.0,
            value=float(offer.extra_cost),
            step=5.0,
            format="%.2f",
            key=f"{key_prefix}_extra",
            help="Insurance or fees added to every monthly payment",
        )

    with col2:
        loan_percentage = st.number_input(
            "Financing (%)",
            min_value=LOAN_PERCENTAGE_RANGE[0],
            max_value=LOAN_PERCENTAGE_RANGE[1],
            value=float(offer.loan_percentage),
            step=1.0,
            format="%.0f",
            key=f"{key_prefix}_loan_pct",
            help="Share of the house price financed by the bank",
        )

        years = st.number_input(
            "Years",
            min_value=YEARS_RANGE[0],
            max_value=YEARS_RANGE[1],
            value=int(offer.years),
            step=1,
            key=f"{key_prefix}_years",
        )

    updated = replace(
        offer,
        bank_name=bank_name,
        house_price=float(max(0, parse_price_input(price_text))),
        loan_percentage=loan_percentage,
        base_rate=base_rate,
        years=int(years),
        extra_cost=extra_cost,
    )

    # Bonuses
    header_col, add_col = st.columns([3, 1])
    with header_col:
        st.markdown("**Bonuses**")
    with add_col:
        if st.button("+ Add", key=f"{key_prefix}_add_bonus"):
            updated = add_bonus(updated)

    if not updated.bonuses:
        st.caption("No bonuses. Add one to reduce the interest rate.")

    for bonus in list(updated.bonuses):
        edited = bonus_input(bonus, key_prefix)
        if edited is None:
            updated = delete_bonus(updated, bonus.id)
        else:
            updated = update_bonus(updated, edited)

    return updated
