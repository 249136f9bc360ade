"""Streamlit table display components."""


import pandas as pd
import streamlit as st

from src.formatting import format_currency, format_percent


def display_amortization_table(
    schedule: pd.DataFrame,
    key_prefix: str = "schedule",
) -> None:
    """Display a yearly amortization schedule with a CSV download.

    Args:
        schedule: DataFrame from ``schedule_to_dataframe``
        key_prefix: Unique key prefix for Streamlit widgets
    """
    display_df = schedule.rename(columns={
        'year': 'Year',
        'payment': 'Paid',
        'principal_paid': 'Principal',
        'interest_paid': 'Interest',
        'remaining_balance': 'Balance',
    })[['Year', 'Paid', 'Principal', 'Interest', 'Balance']]

    # Format currency
    for col in ['Paid', 'Principal', 'Interest', 'Balance']:
        display_df[col] = display_df[col].apply(format_currency)

    st.dataframe(
        display_df,
        use_container_width=True,
        hide_index=True,
    )

    csv = schedule.to_csv(index=False)
    st.download_button(
        "Download Schedule (CSV)",
        csv,
        "amortization_schedule.csv",
        "text/csv",
        key=f"{key_prefix}_csv",
    )


def display_comparison_summary(comparison: pd.DataFrame) -> None:
    """Display the offer comparison sorted by rank.

    Args:
        comparison: DataFrame from ``comparison_to_dataframe``
    """
    st.subheader("Comparison Summary")

    display_df = comparison.sort_values('rank', kind='stable').copy()

    display_df['Bank'] = [
        f"🏆 {name}" if rank == 1 else name
        for name, rank in zip(display_df['bank_name'], display_df['rank'])
    ]
    display_df['vs Best'] = display_df['savings_vs_best'].apply(
        lambda x: f"+{format_currency(x)}" if x > 0 else "-"
    )

    display_df = display_df.rename(columns={
        'rank': 'Rank',
        'effective_rate': 'Rate',
        'monthly_total': 'Monthly',
        'total_cost': 'Total Cost',
        'total_interest': 'Interest',
    })

    display_df['Rate'] = display_df['Rate'].apply(format_percent)
    for col in ['Monthly', 'Total Cost', 'Interest']:
        display_df[col] = display_df[col].apply(format_currency)

    st.dataframe(
        display_df[['Rank', 'Bank', 'Rate', 'Monthly', 'Total Cost', 'Interest', 'vs Best']],
        use_container_width=True,
        hide_index=True,
    )
