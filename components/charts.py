"""Plotly chart builders for the Housing Ballot Allocator."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import List


def capacity_vs_occupancy_bar(
    buildings: List[dict],
    title: str = "Capacity vs Occupancy by Building",
) -> go.Figure:
    """Bar chart comparing total capacity and occupancy by building."""
    df = pd.DataFrame(buildings)
    fig = px.bar(
        df, x="building", y=["capacity", "occupancy"],
        barmode="group",
        labels={"value": "Places", "building": "Building", "variable": ""},
        title=title,
        color_discrete_map={"capacity": "#4A90D9", "occupancy": "#E8734A"},
    )
    fig.update_layout(legend_title_text="", height=400)
    return fig


def utilization_donut(used: int, total: int, title: str = "Overall Occupancy") -> go.Figure:
    """Donut chart showing overall place utilization."""
    available = max(0, total - used)
    fig = go.Figure(data=[go.Pie(
        labels=["Occupied", "Available"],
        values=[used, available],
        hole=0.6,
        marker_colors=["#E8734A", "#4A90D9"],
        textinfo="percent+label",
    )])
    fig.update_layout(
        title=title,
        height=350,
        showlegend=True,
        annotations=[dict(text=f"{used}/{total}", x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig


def household_occupancy_bar(
    utilization_data: List[dict],
    building_filter: str = None,
) -> go.Figure:
    """Horizontal bars of household utilization, optionally for one building."""
    df = pd.DataFrame(utilization_data)
    if building_filter:
        df = df[df["building"] == building_filter]

    fig = px.bar(
        df, x="utilization_pct", y="household",
        orientation="h",
        title=f"Household Occupancy{' — ' + building_filter if building_filter else ''}",
        labels={"utilization_pct": "Occupancy %", "household": "Household"},
        color="utilization_pct",
        color_continuous_scale=["#4A90D9", "#F5C542", "#E8734A"],
        range_color=[0, 1],
    )
    fig.update_layout(height=max(300, len(df) * 35), yaxis_type="category")
    fig.update_traces(texttemplate="%{x:.0%}", textposition="auto")
    return fig


def tier_breakdown_bar(tier_summary: List[dict]) -> go.Figure:
    """Groups per placement tier."""
    df = pd.DataFrame(tier_summary)
    fig = px.bar(
        df, x="label", y="groups",
        text="people",
        labels={"label": "Tier", "groups": "Groups"},
        title="Placements by Tier",
        color="label",
        color_discrete_sequence=["#4A90D9", "#F5C542", "#E8734A"],
    )
    fig.update_traces(texttemplate="%{text} people", textposition="outside")
    fig.update_layout(showlegend=False, height=350)
    return fig


def round_comparison_bar(comparison_df: pd.DataFrame) -> go.Figure:
    """Bar chart comparing household occupancy across two rounds."""
    fig = go.Figure()

    cols = [c for c in comparison_df.columns if "Occupancy" in c and "Change" not in c]
    colors = ["#4A90D9", "#E8734A"]

    for i, col in enumerate(cols[:2]):
        fig.add_trace(go.Bar(
            name=col,
            x=comparison_df["Household"],
            y=comparison_df[col],
            marker_color=colors[i % 2],
        ))

    fig.update_layout(
        barmode="group",
        title="Round Occupancy Comparison",
        xaxis_title="Household",
        yaxis_title="Occupants",
        height=400,
    )
    return fig
