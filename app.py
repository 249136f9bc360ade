"""Mortgage Offer Comparison - Streamlit Application."""


import json
import logging

import streamlit as st

from components.charts import (
    create_amortization_chart,
    create_total_cost_comparison_chart,
)
from components.inputs import offer_input_form
from components.tables import (
    display_amortization_table,
    display_comparison_summary,
)
from src.comparison import (
    comparison_text,
    comparison_to_dataframe,
    rank_offers,
    summarize_offer,
)
from src.config import configure_logging, get_settings
from src.formatting import format_currency, format_percent
from src.mortgage import calculate_amortization_schedule, schedule_to_dataframe
from src.offers import create_offer
from src.storage import (
    OfferRepository,
    StorageError,
    document_to_offers,
    offers_to_document,
)

CARDS_PER_ROW = 3

logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="Mortgage Offer Comparison",
    page_icon="🏠",
    layout="wide",
)

# Custom CSS
st.markdown("""
<style>
    .stMetric {
        background-color: #f0f2f6;
        padding: 10px;
        border-radius: 5px;
    }
    .stMetric label, .stMetric [data-testid="stMetricValue"], .stMetric [data-testid="stMetricDelta"] {
        color: #262730 !important;
    }
</style>
""", unsafe_allow_html=True)


def _get_repository() -> OfferRepository:
    """Get the repository for this session."""
    if 'repository' not in st.session_state:
        st.session_state['repository'] = OfferRepository.from_settings(get_settings())
    return st.session_state['repository']


def _reset_offer_widgets() -> None:
    """Drop widget state so replaced offers render their stored values."""
    for key in list(st.session_state.keys()):
        if str(key).startswith('offer_'):
            del st.session_state[key]


def _replace_offers(offers) -> None:
    _reset_offer_widgets()
    st.session_state['offers'] = offers


def _layout(offers):
    return [(o.id, [b.id for b in o.bonuses]) for o in offers]


def _persist(offers) -> None:
    """Save offers when their content changed since the last save."""
    document = offers_to_document(offers)
    if document == st.session_state.get('saved_document'):
        return

    result = _get_repository().save(offers)
    if result.ok:
        st.session_state['saved_document'] = document

    if not result.local_saved:
        st.warning("Could not save offers to the local cache.")
    if result.remote_error:
        st.warning(f"Could not save offers remotely: {result.remote_error}")


def _render_derived_values(offer, summary, rank: int, total_offers: int) -> None:
    """Render calculated figures, chart and schedule for one offer."""
    if rank == 1 and total_offers > 1:
        st.success("🏆 Best Offer")
    elif rank == total_offers and total_offers > 1:
        st.caption(f"Rank {rank} of {total_offers}")

    rate_delta = f"-{format_percent(summary.active_bonus)}" if summary.active_bonus > 0 else None

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Loan Amount", format_currency(summary.loan_amount))
        st.metric("Monthly Payment", format_currency(summary.monthly_total))
        st.metric("Total Interest", format_currency(summary.total_interest))
    with col2:
        st.metric(
            "Effective Rate",
            format_percent(summary.effective_rate),
            delta=rate_delta,
            delta_color="inverse",
        )
        st.metric("Total Cost", format_currency(summary.total_cost))
        if offer.extra_cost > 0:
            st.caption(
                f"Includes {format_currency(offer.extra_cost)}/month on top of "
                f"{format_currency(summary.monthly_payment)}"
            )

    schedule = calculate_amortization_schedule(
        summary.loan_amount, summary.effective_rate, offer.years
    )
    if schedule:
        schedule_df = schedule_to_dataframe(schedule)
        with st.expander("Amortization Schedule"):
            st.plotly_chart(
                create_amortization_chart(schedule_df),
                use_container_width=True,
                key=f"chart_{offer.id}",
            )
            display_amortization_table(schedule_df, key_prefix=f"schedule_{offer.id}")


def offers_section(offers):
    """Render one card per offer and return the edited collection."""
    if not offers:
        st.info("No offers yet. Click 'Add Bank' to start comparing mortgages.")
        return []

    edited = []
    slots = []
    for start in range(0, len(offers), CARDS_PER_ROW):
        columns = st.columns(CARDS_PER_ROW)
        for column, offer in zip(columns, offers[start:start + CARDS_PER_ROW]):
            with column:
                card = st.container(border=True)
                with card:
                    updated = offer_input_form(offer)
                if updated is not None:
                    edited.append(updated)
                    slots.append((card, updated))

    ranks = rank_offers(edited)
    for card, offer in slots:
        with card:
            _render_derived_values(offer, summarize_offer(offer), ranks[offer.id], len(edited))

    return edited


def comparison_section(offers) -> None:
    """Render the comparison summary for two or more offers."""
    if len(offers) < 2:
        return

    st.divider()
    comparison = comparison_to_dataframe(offers)

    col1, col2 = st.columns([3, 2])
    with col1:
        display_comparison_summary(comparison)
    with col2:
        st.plotly_chart(create_total_cost_comparison_chart(comparison), use_container_width=True)

    with st.expander("Copy as text"):
        st.code(comparison_text(offers), language=None)


def data_section(offers) -> None:
    """Export, import and remote sync of the offer collection."""
    st.divider()
    st.header("Data Management")

    tab1, tab2, tab3 = st.tabs(["Export Offers", "Import Offers", "Sync"])

    with tab1:
        json_str = json.dumps(offers_to_document(offers), indent=2)
        st.download_button(
            "Download JSON",
            json_str,
            "mortgage_offers.json",
            "application/json",
        )

    with tab2:
        uploaded_file = st.file_uploader("Choose a JSON file", type="json")

        if uploaded_file is not None:
            try:
                imported = document_to_offers(json.load(uploaded_file))
            except (ValueError, KeyError, TypeError) as e:
                logger.warning("Rejected imported offers: %s", e)
                st.error(f"Invalid offers file: {e}")
            else:
                st.success(f"Found {len(imported)} offers")
                if st.button("Apply Import"):
                    _replace_offers(imported)
                    st.rerun()

    with tab3:
        repository = _get_repository()
        if repository.remote is None:
            st.caption(
                "Remote storage is disabled. Set MORTGAGE_COMPARE_REMOTE_URL and "
                "MORTGAGE_COMPARE_REMOTE_KEY to share offers between devices."
            )
        elif st.button("Pull Remote Changes"):
            try:
                incoming = repository.remote.load()
            except StorageError as e:
                st.error(str(e))
            else:
                if incoming is None:
                    st.info("No remote offers saved yet.")
                else:
                    merged = repository.reconcile(offers, incoming)
                    if merged is offers:
                        st.info("Already up to date.")
                    else:
                        _replace_offers(merged)
                        st.session_state['saved_document'] = offers_to_document(merged)
                        st.rerun()


def main():
    """Main application entry point."""
    configure_logging()

    if 'offers' not in st.session_state:
        offers = _get_repository().load()
        st.session_state['offers'] = offers
        st.session_state['saved_document'] = offers_to_document(offers)

    header_col, button_col = st.columns([4, 1])
    with header_col:
        st.title("🏠 Mortgage Offer Comparison")
        st.markdown("*Compare offers from different banks and find the best option*")
    with button_col:
        st.write("")
        if st.button("+ Add Bank", type="primary"):
            st.session_state['offers'] = [*st.session_state['offers'], create_offer()]

    offers = st.session_state['offers']
    edited = offers_section(offers)
    st.session_state['offers'] = edited

    comparison_section(edited)
    data_section(edited)

    _persist(edited)

    # Removed cards and bonuses still rendered their widgets during this run
    if _layout(edited) != _layout(offers):
        st.rerun()


if __name__ == "__main__":
    main()
