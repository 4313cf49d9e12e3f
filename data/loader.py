"""File upload parsing — CSV/XLSX into a pending Ballot."""

import logging
from typing import List, Optional, Tuple

import pandas as pd

from models.ballot import Ballot
from models.group import Group
from models.household import Household
from models.person import Person
from config.defaults import PREFERENCE_SEPARATOR

logger = logging.getLogger(__name__)


def cell_text(value) -> str:
    """Cell as text. Integral floats lose their '.0', since pandas reads an
    integer column with blanks as float."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def whole_number(value, label: str) -> int:
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"{label} must be a whole number, got {value!r}")
    return int(number)


def parse_household_preferences(value) -> List[Optional[str]]:
    """'H1;;H3' -> ['H1', None, 'H3']. An empty cell means no household preferences."""
    text = cell_text(value)
    if not text:
        return []
    return [part.strip() or None for part in text.split(PREFERENCE_SEPARATOR)]


def parse_building_preferences(value) -> Optional[List[str]]:
    """'MGA;Wolfson' -> ['MGA', 'Wolfson']. An empty cell means use the default order."""
    text = cell_text(value)
    if not text:
        return None
    return [part.strip() for part in text.split(PREFERENCE_SEPARATOR) if part.strip()]


def parse_buildings(df: pd.DataFrame) -> Tuple[List[str], List[str]]:
    """Return (declared building names, default building order by rank)."""
    names = [cell_text(n) for n in df["Building Name"]]
    if "Default Rank" not in df.columns:
        return names, list(names)

    ranked = sorted(
        zip(names, df["Default Rank"]),
        key=lambda pair: float(pair[1]) if pd.notna(pair[1]) else float("inf"),
    )
    return names, [name for name, _ in ranked]


def parse_households(df: pd.DataFrame) -> List[Household]:
    """Convert a households DataFrame into Household objects."""
    households = []
    for _, row in df.iterrows():
        households.append(Household(
            name=cell_text(row["Household Name"]),
            capacity=whole_number(row["Capacity"], f"Capacity of household {row['Household Name']}"),
            building=cell_text(row["Building"]),
        ))
    return households


def parse_groups(df: pd.DataFrame) -> List[Group]:
    """Convert a one-row-per-member groups DataFrame into Group objects.

    Rows are grouped by "Group ID" in order of first appearance. Preferences
    are read from the first row of each group.
    """
    df = df.copy()
    df["Group ID"] = df["Group ID"].map(cell_text)

    groups = []
    for group_id, rows in df.groupby("Group ID", sort=False):
        members = [
            Person(
                name=cell_text(r["Member Name"]),
                score=whole_number(r["Score"], f"Score of {r['Member Name']}"),
            )
            for _, r in rows.iterrows()
        ]
        first = rows.iloc[0]
        household_prefs = []
        if "Household Preferences" in df.columns:
            household_prefs = parse_household_preferences(first["Household Preferences"])
        building_prefs = None
        if "Building Preferences" in df.columns:
            building_prefs = parse_building_preferences(first["Building Preferences"])

        groups.append(Group(
            members=members,
            household_preferences=household_prefs,
            building_preferences=building_prefs,
            group_id=group_id,
        ))
    return groups


def parse_ballot(
    buildings_df: pd.DataFrame,
    households_df: pd.DataFrame,
    groups_df: pd.DataFrame,
) -> Tuple[Ballot, List[str]]:
    """Build a pending Ballot and its default building order from the three tables."""
    buildings, default_order = parse_buildings(buildings_df)
    ballot = Ballot(
        buildings=buildings,
        accommodation=parse_households(households_df),
        pending_groups=parse_groups(groups_df),
    )
    logger.info(
        "Loaded ballot: %d buildings, %d households, %d groups",
        len(buildings), len(ballot.accommodation), len(ballot.pending_groups),
    )
    return ballot, default_order


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


# Expected sheet names for multi-tab Excel (case-insensitive matching)
SHEET_ALIASES = {
    "buildings": ["buildings", "building", "building list", "building order"],
    "households": ["households", "household", "accommodation", "rooms", "housing"],
    "groups": ["groups", "group", "applicants", "members", "ballot groups"],
}


def _match_sheet(sheet_names: List[str], category: str) -> str:
    """Find a sheet name matching the given category. Returns the matched name or raises."""
    aliases = SHEET_ALIASES[category]
    lower_map = {s.lower().strip(): s for s in sheet_names}
    for alias in aliases:
        if alias in lower_map:
            return lower_map[alias]
    raise ValueError(
        f"Could not find a sheet for '{category}'. "
        f"Expected one of: {aliases}. "
        f"Found sheets: {sheet_names}"
    )


def load_multi_sheet_excel(uploaded_file) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """Load a single Excel file with 3 tabs: Buildings, Households, Groups.

    Sheet names are matched case-insensitively. Accepted names include:
    - Buildings: 'Buildings', 'Building Order', etc.
    - Households: 'Households', 'Accommodation', 'Rooms', etc.
    - Groups: 'Groups', 'Applicants', 'Members', etc.

    Returns (buildings_df, households_df, groups_df).
    """
    xl = pd.ExcelFile(uploaded_file, engine="openpyxl")
    sheet_names = xl.sheet_names

    buildings_df = pd.read_excel(xl, sheet_name=_match_sheet(sheet_names, "buildings"))
    households_df = pd.read_excel(xl, sheet_name=_match_sheet(sheet_names, "households"))
    groups_df = pd.read_excel(xl, sheet_name=_match_sheet(sheet_names, "groups"))

    return buildings_df, households_df, groups_df
