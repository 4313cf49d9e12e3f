#!/usr/bin/env python3
"""Run one housing ballot from the console.

Either generates a sample ballot from the three generation parameters or
loads a workbook with Buildings / Households / Groups sheets, allocates it,
prints a summary and writes the household table.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from data.exporter import export_csv, export_excel
from data.loader import load_multi_sheet_excel, parse_ballot
from data.sample_data import generate_sample_ballot
from data.validator import validate_all
from engine.allocation_engine import allocate_rooms
from engine.utilization import get_building_utilization, get_tier_summary, get_unplaced_summary
from models.errors import BallotError
from config.defaults import (
    DEFAULT_GROUP_COUNT, DEFAULT_HOUSEHOLD_COUNT, DEFAULT_BUILDING_COUNT, DEFAULT_SAMPLE_SEED,
)

logger = logging.getLogger("housing_ballot")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Allocate groups to households", formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    ap.add_argument("--groups", type=int, default=DEFAULT_GROUP_COUNT, help="Number of sample groups to generate")
    ap.add_argument("--households", type=int, default=DEFAULT_HOUSEHOLD_COUNT, help="Number of sample households to generate")
    ap.add_argument("--buildings", type=int, default=DEFAULT_BUILDING_COUNT, help="Number of sample buildings to generate")
    ap.add_argument("--seed", type=int, default=DEFAULT_SAMPLE_SEED, help="Random seed for the sample generator")
    ap.add_argument("--workbook", type=Path, default=None, help="Excel workbook to allocate instead of generating a sample")
    ap.add_argument("--out", type=Path, default=Path("allocation.csv"), help="Where to write the household table")
    ap.add_argument("--excel", type=Path, default=None, help="Optional Excel workbook with households, unplaced groups and placements")
    ap.add_argument("--verbose", action="store_true", help="Log every placement")
    return ap.parse_args(argv)


def load_ballot(args: argparse.Namespace):
    if args.workbook is None:
        return generate_sample_ballot(args.groups, args.households, args.buildings, args.seed)

    buildings_df, households_df, groups_df = load_multi_sheet_excel(args.workbook)
    validation = validate_all(buildings_df, households_df, groups_df)
    for w in validation.warnings:
        logger.warning(w)
    if not validation.is_valid:
        raise ValueError("; ".join(validation.errors))
    return parse_ballot(buildings_df, households_df, groups_df)


def print_summary(ballot, result) -> None:
    print(f"\nDefault building order: {' > '.join(result.default_building_order) or '(none)'}")
    print(f"Groups processed: {len(result.processing_order)}")
    for row in get_tier_summary(result):
        print(f"  {row['label']:<22} {row['groups']:>4} groups {row['people']:>5} people")

    print("\nBuildings:")
    for row in get_building_utilization(ballot):
        print(
            f"  {row['building']:<20} {row['occupancy']:>4}/{row['capacity']:<4} "
            f"({row['utilization_pct']:.0%}) across {row['household_count']} households"
        )

    unplaced = get_unplaced_summary(result)
    if unplaced:
        print("\nUnplaced groups:")
        for row in unplaced:
            print(f"  {row['group']:<10} size {row['size']:<3} avg {row['average_score']:.1f}  {row['reason']}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        ballot, default_order = load_ballot(args)
        result = allocate_rooms(ballot, default_order)
    except (BallotError, ValueError) as e:
        print(f"Allocation aborted: {e}", file=sys.stderr)
        return 1

    print_summary(ballot, result)

    if args.out.parent and not args.out.parent.exists():
        args.out.parent.mkdir(parents=True, exist_ok=True)
    export_csv(ballot, str(args.out))
    print(f"\nWrote: {args.out.resolve()}")

    if args.excel is not None:
        export_excel(ballot, str(args.excel), result)
        print(f"Wrote: {args.excel.resolve()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
