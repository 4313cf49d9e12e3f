"""Tabular export of an allocated ballot — CSV / Excel."""

import logging
from typing import List, Optional

import pandas as pd

from models.allocation import AllocationResult
from models.ballot import Ballot
from models.group import Group
from config.defaults import EXPORT_COLUMNS, TIER_LABELS

logger = logging.getLogger(__name__)


def ballot_to_dataframe(ballot: Ballot) -> pd.DataFrame:
    """One row per household. Occupants reads like 'Alice [10], Bob [20]'."""
    rows = []
    for h in ballot.accommodation:
        rows.append({
            "Household name": h.name,
            "Building": h.building,
            "Size": h.capacity,
            "Occupancy": h.occupancy,
            "Occupants": h.roster,
        })
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def unplaced_to_dataframe(groups: List[Group]) -> pd.DataFrame:
    rows = []
    for g in groups:
        rows.append({
            "Group": g.label,
            "Size": g.size,
            "Average score": round(g.average_score, 2),
            "Members": g.roster,
        })
    return pd.DataFrame(rows, columns=["Group", "Size", "Average score", "Members"])


def placements_to_dataframe(result: AllocationResult) -> pd.DataFrame:
    """One row per group in processing order."""
    rows = []
    for order, p in enumerate(result.placements, start=1):
        rows.append({
            "Order": order,
            "Group": p.group.label,
            "Size": p.group.size,
            "Average score": round(p.group.average_score, 2),
            "Tier": TIER_LABELS.get(p.tier, p.tier),
            "Household": p.household_name or "",
            "Building": p.building or "",
            "Attempts": p.attempts,
        })
    return pd.DataFrame(rows, columns=[
        "Order", "Group", "Size", "Average score", "Tier", "Household", "Building", "Attempts",
    ])


def export_csv(ballot: Ballot, path: str) -> pd.DataFrame:
    df = ballot_to_dataframe(ballot)
    df.to_csv(path, index=False)
    logger.info("Wrote %d households to %s", len(df), path)
    return df


def export_excel(ballot: Ballot, path: str, result: Optional[AllocationResult] = None):
    """Write households, unplaced groups and (if given) placements as separate sheets."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        ballot_to_dataframe(ballot).to_excel(writer, sheet_name="Households", index=False)
        unplaced_to_dataframe(ballot.pending_groups).to_excel(writer, sheet_name="Unplaced", index=False)
        if result is not None:
            placements_to_dataframe(result).to_excel(writer, sheet_name="Placements", index=False)
    logger.info("Wrote allocation workbook to %s", path)
