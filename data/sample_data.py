"""Generate synthetic ballot datasets for the Housing Ballot Allocator."""

import os
import random
from typing import List, Tuple

import pandas as pd

from models.ballot import Ballot
from data.loader import parse_ballot
from config.defaults import (
    SAMPLE_BUILDINGS, DEFAULT_GROUP_COUNT, DEFAULT_HOUSEHOLD_COUNT, DEFAULT_BUILDING_COUNT,
    DEFAULT_SAMPLE_SEED, SAMPLE_CAPACITY_RANGE, SAMPLE_GROUP_SIZE_RANGE, SAMPLE_SCORE_RANGE,
    SAMPLE_HOUSEHOLD_PREFERENCE_RATE, SAMPLE_BUILDING_PREFERENCE_RATE, PREFERENCE_SEPARATOR,
)


def sample_building_names(building_count: int) -> List[str]:
    """Named sample buildings first, then 'Building 7', 'Building 8', ..."""
    names = SAMPLE_BUILDINGS[:building_count]
    for i in range(len(names) + 1, building_count + 1):
        names.append(f"Building {i}")
    return names


def generate_buildings_df(building_count: int = DEFAULT_BUILDING_COUNT) -> pd.DataFrame:
    """Generate the building list; the default order follows the listing order."""
    rows = []
    for rank, name in enumerate(sample_building_names(building_count), start=1):
        rows.append({"Building Name": name, "Default Rank": rank})
    return pd.DataFrame(rows, columns=["Building Name", "Default Rank"])


def generate_households_df(
    household_count: int,
    building_names: List[str],
    seed: int = DEFAULT_SAMPLE_SEED,
) -> pd.DataFrame:
    """Generate households with random capacities spread over the given buildings."""
    if household_count > 0 and not building_names:
        raise ValueError("Cannot place households without at least one building")

    rng = random.Random(seed)
    rows = []
    for i in range(1, household_count + 1):
        # First pass covers every building once, the rest are random
        if i <= len(building_names):
            building = building_names[i - 1]
        else:
            building = rng.choice(building_names)
        rows.append({
            "Household Name": f"Household {i}",
            "Building": building,
            "Capacity": rng.randint(*SAMPLE_CAPACITY_RANGE),
        })
    return pd.DataFrame(rows, columns=["Household Name", "Building", "Capacity"])


def generate_groups_df(
    group_count: int,
    household_names: List[str],
    building_names: List[str],
    seed: int = DEFAULT_SAMPLE_SEED,
) -> pd.DataFrame:
    """Generate one row per group member; preferences repeat on every row of a group."""
    rng = random.Random(seed + 1)
    rows = []
    for i in range(1, group_count + 1):
        group_id = f"G{i:02d}"

        household_prefs = ""
        if household_names and rng.random() < SAMPLE_HOUSEHOLD_PREFERENCE_RATE:
            picks = rng.sample(household_names, k=min(2, len(household_names)))
            if len(picks) > 1 and rng.random() < 0.25:
                picks.insert(1, "")  # a rank left blank
            household_prefs = PREFERENCE_SEPARATOR.join(picks)

        building_prefs = ""
        if building_names and rng.random() < SAMPLE_BUILDING_PREFERENCE_RATE:
            picks = rng.sample(building_names, k=rng.randint(1, len(building_names)))
            building_prefs = PREFERENCE_SEPARATOR.join(picks)

        for j in range(1, rng.randint(*SAMPLE_GROUP_SIZE_RANGE) + 1):
            rows.append({
                "Group ID": group_id,
                "Member Name": f"Person {j} in group {i}",
                "Score": rng.randint(*SAMPLE_SCORE_RANGE),
                "Household Preferences": household_prefs,
                "Building Preferences": building_prefs,
            })
    return pd.DataFrame(rows, columns=[
        "Group ID", "Member Name", "Score", "Household Preferences", "Building Preferences",
    ])


def generate_sample_tables(
    group_count: int = DEFAULT_GROUP_COUNT,
    household_count: int = DEFAULT_HOUSEHOLD_COUNT,
    building_count: int = DEFAULT_BUILDING_COUNT,
    seed: int = DEFAULT_SAMPLE_SEED,
) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """Returns (buildings_df, households_df, groups_df)."""
    if min(group_count, household_count, building_count) < 0:
        raise ValueError("Group, household and building counts cannot be negative")

    buildings_df = generate_buildings_df(building_count)
    building_names = buildings_df["Building Name"].tolist()
    households_df = generate_households_df(household_count, building_names, seed)
    groups_df = generate_groups_df(group_count, households_df["Household Name"].tolist(), building_names, seed)
    return buildings_df, households_df, groups_df


def generate_sample_ballot(
    group_count: int = DEFAULT_GROUP_COUNT,
    household_count: int = DEFAULT_HOUSEHOLD_COUNT,
    building_count: int = DEFAULT_BUILDING_COUNT,
    seed: int = DEFAULT_SAMPLE_SEED,
) -> Tuple[Ballot, List[str]]:
    """Pending sample ballot plus its default building order."""
    return parse_ballot(*generate_sample_tables(group_count, household_count, building_count, seed))


def generate_sample_csvs(output_dir: str, **params):
    """Write sample CSV files to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    buildings_df, households_df, groups_df = generate_sample_tables(**params)
    buildings_df.to_csv(os.path.join(output_dir, "buildings.csv"), index=False)
    households_df.to_csv(os.path.join(output_dir, "households.csv"), index=False)
    groups_df.to_csv(os.path.join(output_dir, "groups.csv"), index=False)


def generate_sample_excel(output_dir: str, **params):
    """Write a single multi-tab Excel file with all three datasets."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, "sample_ballot.xlsx")
    buildings_df, households_df, groups_df = generate_sample_tables(**params)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        buildings_df.to_excel(writer, sheet_name="Buildings", index=False)
        households_df.to_excel(writer, sheet_name="Households", index=False)
        groups_df.to_excel(writer, sheet_name="Groups", index=False)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csvs(out)
    generate_sample_excel(out)
    print("Sample CSV and Excel files generated in sample_files/")
