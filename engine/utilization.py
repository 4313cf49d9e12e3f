"""Household and building utilization, tier breakdowns and residual summaries."""

from typing import List

from models.allocation import AllocationResult
from models.ballot import Ballot
from models.household import Household
from config.defaults import (
    PLACEMENT_TIERS, TIER_LABELS,
    HOUSEHOLD_FULL_THRESHOLD, HOUSEHOLD_UNDERUSED_THRESHOLD,
)


def household_status(household: Household) -> str:
    if household.capacity == 0:
        return "Closed"
    pct = household.occupancy / household.capacity
    if pct >= HOUSEHOLD_FULL_THRESHOLD:
        return "Full"
    if pct < HOUSEHOLD_UNDERUSED_THRESHOLD:
        return "Spare Capacity"
    return "Partly Filled"


def get_household_utilization(ballot: Ballot) -> List[dict]:
    """Compute utilization stats per household, in stored order."""
    results = []
    for h in ballot.accommodation:
        results.append({
            "household": h.name,
            "building": h.building,
            "capacity": h.capacity,
            "occupancy": h.occupancy,
            "available": h.remaining_capacity,
            "utilization_pct": h.occupancy / h.capacity if h.capacity > 0 else 0,
            "group_count": len(h.placed_groups),
            "roster": h.roster,
            "status": household_status(h),
        })
    return results


def get_building_utilization(ballot: Ballot) -> List[dict]:
    """Aggregate household stats per building, in declared building order."""
    usage = {b: {"households": 0, "capacity": 0, "occupancy": 0, "groups": 0} for b in ballot.buildings}
    for h in ballot.accommodation:
        if h.building not in usage:
            continue
        usage[h.building]["households"] += 1
        usage[h.building]["capacity"] += h.capacity
        usage[h.building]["occupancy"] += h.occupancy
        usage[h.building]["groups"] += len(h.placed_groups)

    results = []
    for building, u in usage.items():
        results.append({
            "building": building,
            "household_count": u["households"],
            "capacity": u["capacity"],
            "occupancy": u["occupancy"],
            "available": u["capacity"] - u["occupancy"],
            "utilization_pct": u["occupancy"] / u["capacity"] if u["capacity"] > 0 else 0,
            "group_count": u["groups"],
        })
    return results


def get_tier_summary(result: AllocationResult) -> List[dict]:
    """Groups and people per placement tier, in tier order."""
    rows = []
    for tier in PLACEMENT_TIERS:
        placements = [p for p in result.placements if p.tier == tier]
        rows.append({
            "tier": tier,
            "label": TIER_LABELS[tier],
            "groups": len(placements),
            "people": sum(p.group.size for p in placements),
        })
    return rows


def get_unplaced_summary(result: AllocationResult) -> List[dict]:
    """Residual groups with the reason they were left over, in processing order."""
    rows = []
    for group in result.unplaced:
        placement = result.placement_for(group)
        asked_for_households = any(n is not None for n in group.household_preferences)
        if group.building_preferences == []:
            # Empty building list: tier 2 was never tried
            if asked_for_households:
                reason = "Preferred households full, no acceptable building"
            else:
                reason = "No acceptable building"
        elif asked_for_households:
            reason = "Preferred households and buildings full"
        else:
            reason = "No building had room"
        rows.append({
            "group": group.label,
            "size": group.size,
            "average_score": group.average_score,
            "attempts": placement.attempts if placement else 0,
            "reason": reason,
            "members": group.roster,
        })
    return rows
