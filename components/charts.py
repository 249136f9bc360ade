"""Plotly chart components for offer visualization."""

import plotly.graph_objects as go
import pandas as pd

PRINCIPAL_COLOR = '#0891b2'
INTEREST_COLOR = '#ef4444'
BALANCE_COLOR = '#1f77b4'
BEST_COLOR = '#2ca02c'
OTHER_COLOR = '#7f7f7f'


def create_amortization_chart(schedule: pd.DataFrame) -> go.Figure:
    """Create stacked bar chart of principal vs interest paid each year,
    with the remaining balance as a line on a secondary axis."""
    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=schedule['year'],
        y=schedule['principal_paid'],
        name='Principal',
        marker_color=PRINCIPAL_COLOR,
        hovertemplate='Year %{x}<br>Principal: %{y:,.2f} €<extra></extra>',
    ))

    fig.add_trace(go.Bar(
        x=schedule['year'],
        y=schedule['interest_paid'],
        name='Interest',
        marker_color=INTEREST_COLOR,
        hovertemplate='Year %{x}<br>Interest: %{y:,.2f} €<extra></extra>',
    ))

    fig.add_trace(go.Scatter(
        x=schedule['year'],
        y=schedule['remaining_balance'],
        name='Remaining Balance',
        yaxis='y2',
        line=dict(color=BALANCE_COLOR, width=2),
        hovertemplate='Year %{x}<br>Balance: %{y:,.0f} €<extra></extra>',
    ))

    fig.update_layout(
        title='Amortization by Year',
        xaxis_title='Year',
        yaxis_title='Paid per Year (€)',
        barmode='stack',
        hovermode='x unified',
        yaxis=dict(tickformat=',.0f', ticksuffix=' €'),
        yaxis2=dict(
            title='Balance (€)',
            overlaying='y',
            side='right',
            tickformat=',.0f',
            ticksuffix=' €',
            showgrid=False,
        ),
        legend=dict(
            orientation='h',
            yanchor='bottom',
            y=1.02,
            xanchor='right',
            x=1,
        ),
    )

    return fig


def create_total_cost_comparison_chart(comparison: pd.DataFrame) -> go.Figure:
    """Create bar chart of total cost per offer, highlighting the cheapest."""
    colors = [BEST_COLOR if rank == 1 else OTHER_COLOR for rank in comparison['rank']]

    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=comparison['label'],
        y=comparison['total_cost'],
        marker_color=colors,
        customdata=comparison[['rank', 'savings_vs_best']].values,
        hovertemplate=(
            '%{x}<br>Total: %{y:,.2f} €'
            '<br>Rank: %{customdata[0]}'
            '<br>vs best: +%{customdata[1]:,.2f} €<extra></extra>'
        ),
        name='Total Cost',
    ))

    fig.add_trace(go.Bar(
        x=comparison['label'],
        y=comparison['total_interest'],
        marker_color=INTEREST_COLOR,
        opacity=0.6,
        hovertemplate='%{x}<br>Interest: %{y:,.2f} €<extra></extra>',
        name='Total Interest',
    ))

    fig.update_layout(
        title='Total Cost by Offer',
        xaxis_title='Bank',
        yaxis_title='Amount (€)',
        barmode='group',
        yaxis=dict(tickformat=',.0f', ticksuffix=' €'),
    )

    return fig
