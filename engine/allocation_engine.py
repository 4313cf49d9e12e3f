"""Priority-ordered, preference-driven household allocation — the core business engine."""

import logging
from typing import Dict, List, Sequence

from models.allocation import AllocationResult, Placement
from models.ballot import Ballot
from models.errors import BallotAlreadyAllocated, CapacityExceeded
from models.group import Group
from models.household import Household
from engine.consistency import validate_ballot, resolve_building_order
from engine.explainer import explain_household_tier, explain_building_tier, explain_unplaced
from config.defaults import TIER_HOUSEHOLD_PREFERENCE, TIER_BUILDING_PREFERENCE, TIER_UNPLACED

logger = logging.getLogger(__name__)


def order_groups_by_priority(groups: Sequence[Group]) -> List[Group]:
    """Lowest average score is served first. sorted() is stable, so ties keep queue order."""
    return sorted(groups, key=lambda g: g.average_score)


def _place_group(
    group: Group,
    ballot: Ballot,
    households: Dict[str, Household],
    default_building_order: Sequence[str],
) -> Placement:
    """Run the three tiers for one group, stopping at the first admission."""
    attempts = 0

    # Tier 1: ranked household preferences
    rejected = []
    for rank, name in enumerate(group.household_preferences, start=1):
        if name is None:
            continue
        household = households[name]
        attempts += 1
        try:
            household.attempt_admit(group)
        except CapacityExceeded:
            rejected.append(name)
            continue
        return Placement(
            group=group,
            tier=TIER_HOUSEHOLD_PREFERENCE,
            household_name=household.name,
            building=household.building,
            rank=rank,
            attempts=attempts,
            explanation_steps=explain_household_tier(group, rejected, household.name, household.building),
        )
    steps = explain_household_tier(group, rejected, None, None)

    # Tier 2: building order, households scanned in stored order
    order = resolve_building_order(group, default_building_order, ballot.buildings)
    used_default = group.building_preferences is None
    full_buildings = []
    for rank, building in enumerate(order, start=1):
        for household in ballot.households_in(building):
            attempts += 1
            try:
                household.attempt_admit(group)
            except CapacityExceeded:
                continue
            steps += explain_building_tier(order, used_default, full_buildings, household.name, building)
            return Placement(
                group=group,
                tier=TIER_BUILDING_PREFERENCE,
                household_name=household.name,
                building=building,
                rank=rank,
                attempts=attempts,
                explanation_steps=steps,
            )
        full_buildings.append(building)

    # Tier 3: nobody could take the group
    steps += explain_building_tier(order, used_default, full_buildings, None, None)
    steps += explain_unplaced(group, attempts)
    return Placement(group=group, tier=TIER_UNPLACED, attempts=attempts, explanation_steps=steps)


def allocate_rooms(ballot: Ballot, default_building_order: Sequence[str]) -> AllocationResult:
    """Allocate every pending group of a fresh ballot in one greedy pass.

    Households are filled in place and ``ballot.pending_groups`` is replaced by
    the groups nobody could take, in processing order. Consistency problems
    raise ConfigurationInconsistency before any household is touched.
    """
    if ballot.allocated:
        raise BallotAlreadyAllocated(
            "Ballot has already been allocated; load a fresh pending ballot to allocate again"
        )

    validate_ballot(ballot, default_building_order)

    order = order_groups_by_priority(ballot.pending_groups)
    logger.debug("Processing order: %s", [f"{g.label} ({g.average_score:.2f})" for g in order])

    households = ballot.household_map
    result = AllocationResult(
        default_building_order=list(default_building_order),
        processing_order=order,
    )

    for group in order:
        placement = _place_group(group, ballot, households, default_building_order)
        result.placements.append(placement)
        if placement.is_placed:
            logger.debug(
                "Placed %s (size %d) in %s via %s",
                group.label, group.size, placement.household_name, placement.tier,
            )
        else:
            result.unplaced.append(group)
            logger.debug("Could not place %s (size %d)", group.label, group.size)

    ballot.pending_groups = list(result.unplaced)
    ballot.allocated = True

    logger.info(
        "Allocation complete: %d of %d groups placed, %d unplaced",
        result.placed_count, len(order), len(result.unplaced),
    )
    return result
