"""
Item Yield Chart Component

Horizontal Plotly bar chart of the expected item quantities for the active
set, with hover tooltips showing per-kill and per-session numbers.
"""

import plotly.graph_objects as go
from typing import List

from mage_farm.core import ItemYield


def create_item_yield_chart(
    items: List[ItemYield],
    session_size: float,
    max_items: int = 15,
    height: int = 400,
) -> go.Figure:
    """
    Create a bar chart of the top expected items for a session.

    Args:
        items: SessionSummary.items (already sorted by expected quantity)
        session_size: Number of kills, shown in the title
        max_items: Number of bars to show
        height: Figure height in pixels

    Returns:
        Plotly Figure object ready for display with st.plotly_chart()
    """
    top = items[:max_items]
    # Largest bar on top
    top = list(reversed(top))

    hover_texts = [
        f"<b>{it.name}</b><br>"
        f"Share: <b>{it.percent:.2f}%</b><br>"
        f"Per kill: {it.qty_per_kill:.4f}<br>"
        f"Per session: {it.qty_for_set:.2f}"
        for it in top
    ]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[it.qty_for_set for it in top],
        y=[it.name for it in top],
        orientation='h',
        marker=dict(color='rgba(99, 102, 241, 0.8)'),
        hovertemplate='%{customdata}<extra></extra>',
        customdata=hover_texts,
        showlegend=False,
    ))

    fig.update_layout(
        title=dict(
            text=f"Expected items over {session_size:,.0f} kills",
            font=dict(size=14),
        ),
        xaxis=dict(
            title="Expected quantity",
            gridcolor='rgba(128, 128, 128, 0.2)',
        ),
        yaxis=dict(automargin=True),
        height=height,
        margin=dict(l=20, r=20, t=50, b=40),
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
    )

    return fig
