"""KPI metric cards and alert banners for ballot summaries."""

import streamlit as st


def render_metric_row(metrics: list[dict]):
    """Render a row of metric cards.

    Each metric dict should have: label, value, and optionally delta, delta_color.
    """
    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        with col:
            st.metric(
                label=m["label"],
                value=m["value"],
                delta=m.get("delta"),
                delta_color=m.get("delta_color", "normal"),
            )


def render_unplaced_banner(unplaced_groups: int, unplaced_people: int):
    """Headline banner for the residual of an allocation run."""
    if unplaced_groups == 0:
        st.success("Every group was placed.", icon="🟢")
    else:
        st.warning(
            f"{unplaced_groups} group{'s' if unplaced_groups != 1 else ''} "
            f"({unplaced_people} people) could not be placed.",
            icon="🟡",
        )
