"""Schema validation for uploaded data files."""

from dataclasses import dataclass, field
from typing import List

import pandas as pd

from data.loader import cell_text, parse_household_preferences, parse_building_preferences


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


BUILDING_REQUIRED_COLUMNS = [
    "Building Name",
]

HOUSEHOLD_REQUIRED_COLUMNS = [
    "Household Name",
    "Building",
    "Capacity",
]

GROUP_REQUIRED_COLUMNS = [
    "Group ID",
    "Member Name",
    "Score",
]


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: File contains no data rows.")
    return result


def validate_buildings(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, BUILDING_REQUIRED_COLUMNS, "Buildings")
    if not result.is_valid:
        return result

    names = df["Building Name"].map(cell_text)
    dupes = names.duplicated(keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(f"Buildings: Duplicate building names: {names[dupes].unique().tolist()}")

    if "Default Rank" in df.columns:
        ranks = df["Default Rank"].dropna()
        if ranks.duplicated().any():
            result.is_valid = False
            result.errors.append("Buildings: Default Rank values must be unique.")
        if len(ranks) < len(df):
            result.warnings.append("Buildings: Buildings without a Default Rank are placed last.")
    else:
        result.warnings.append("Buildings: No Default Rank column; table order is the default order.")

    return result


def validate_households(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, HOUSEHOLD_REQUIRED_COLUMNS, "Households")
    if not result.is_valid:
        return result

    capacity = pd.to_numeric(df["Capacity"], errors="coerce")
    if capacity.isna().any():
        result.is_valid = False
        result.errors.append("Households: Capacity must be a whole number.")
    elif (capacity % 1 != 0).any():
        result.is_valid = False
        result.errors.append("Households: Capacity must be a whole number.")
    elif (capacity < 0).any():
        result.is_valid = False
        result.errors.append("Households: Capacity cannot be negative.")

    names = df["Household Name"].map(cell_text)
    dupes = names.duplicated(keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(f"Households: Duplicate household names: {names[dupes].unique().tolist()}")

    return result


def validate_groups(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, GROUP_REQUIRED_COLUMNS, "Groups")
    if not result.is_valid:
        return result

    if df["Group ID"].isna().any() or (df["Group ID"].astype(str).str.strip() == "").any():
        result.is_valid = False
        result.errors.append("Groups: Every member row needs a Group ID.")

    if df["Member Name"].isna().any():
        result.is_valid = False
        result.errors.append("Groups: Every member row needs a Member Name.")

    score = pd.to_numeric(df["Score"], errors="coerce")
    if score.isna().any():
        result.is_valid = False
        result.errors.append("Groups: Score must be a whole number.")
    elif (score % 1 != 0).any():
        result.is_valid = False
        result.errors.append("Groups: Score must be a whole number.")
    elif (score < 0).any():
        result.is_valid = False
        result.errors.append("Groups: Score cannot be negative.")

    return result


def validate_cross_file(
    buildings_df: pd.DataFrame,
    households_df: pd.DataFrame,
    groups_df: pd.DataFrame,
) -> ValidationResult:
    """Check that building and household references match across files."""
    result = ValidationResult()
    buildings = set(buildings_df["Building Name"].map(cell_text))
    households = set(households_df["Household Name"].map(cell_text))

    household_buildings = set(households_df["Building"].map(cell_text))
    unknown = household_buildings - buildings
    if unknown:
        result.is_valid = False
        result.errors.append(
            f"Households in undeclared buildings: {', '.join(sorted(unknown))}."
        )

    unused = buildings - household_buildings
    if unused:
        result.warnings.append(
            f"Buildings with no households: {', '.join(sorted(unused))}. "
            "Groups sent there will fall through to the next building."
        )

    for group_id, rows in groups_df.groupby(groups_df["Group ID"].map(cell_text), sort=False):
        if "Household Preferences" in rows.columns:
            prefs = parse_household_preferences(rows["Household Preferences"].iloc[0])
            missing = sorted({p for p in prefs if p is not None} - households)
            if missing:
                result.is_valid = False
                result.errors.append(f"Group {group_id}: Unknown household preferences: {', '.join(missing)}.")
            if rows["Household Preferences"].map(cell_text).nunique() > 1:
                result.warnings.append(
                    f"Group {group_id}: Member rows disagree on household preferences; the first row is used."
                )

        if "Building Preferences" in rows.columns:
            prefs = parse_building_preferences(rows["Building Preferences"].iloc[0]) or []
            missing = sorted(set(prefs) - buildings)
            if missing:
                result.is_valid = False
                result.errors.append(f"Group {group_id}: Unknown building preferences: {', '.join(missing)}.")
            if rows["Building Preferences"].map(cell_text).nunique() > 1:
                result.warnings.append(
                    f"Group {group_id}: Member rows disagree on building preferences; the first row is used."
                )

    return result


def validate_all(
    buildings_df: pd.DataFrame,
    households_df: pd.DataFrame,
    groups_df: pd.DataFrame,
) -> ValidationResult:
    """Per-file checks, then cross-file checks when every file passed."""
    combined = ValidationResult()
    for r in [validate_buildings(buildings_df), validate_households(households_df), validate_groups(groups_df)]:
        combined.errors.extend(r.errors)
        combined.warnings.extend(r.warnings)

    if not combined.errors:
        cross = validate_cross_file(buildings_df, households_df, groups_df)
        combined.errors.extend(cross.errors)
        combined.warnings.extend(cross.warnings)

    combined.is_valid = not combined.errors
    return combined
