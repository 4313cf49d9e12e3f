"""Allocation rounds — clone the pending ballot, allocate the copy, compare outcomes."""

import copy
from datetime import datetime
from typing import List

from models.ballot import Ballot
from models.errors import BallotAlreadyAllocated
from models.round import AllocationRound
from engine.allocation_engine import allocate_rooms


def clone_ballot(ballot: Ballot) -> Ballot:
    """Deep copy of a pending ballot; shares no Household or Group instances with the source."""
    if ballot.allocated:
        raise BallotAlreadyAllocated("Only pending ballots can be cloned for a new round")
    return copy.deepcopy(ballot)


def run_round(allocation_round: AllocationRound, base_ballot: Ballot) -> AllocationRound:
    """Allocate a copy of the base ballot with the round's default order. The base stays pending."""
    ballot = clone_ballot(base_ballot)
    result = allocate_rooms(ballot, allocation_round.default_building_order)

    allocation_round.ballot = ballot
    allocation_round.result = result
    allocation_round.last_run_at = datetime.now()
    return allocation_round


def reset_round(allocation_round: AllocationRound) -> AllocationRound:
    allocation_round.ballot = None
    allocation_round.result = None
    allocation_round.last_run_at = None
    return allocation_round


def compare_rounds(
    round_a: AllocationRound,
    round_b: AllocationRound,
) -> List[dict]:
    """Compare two rounds and return per-household occupancy differences."""
    a_map = round_a.ballot.household_map if round_a.ballot else {}
    b_map = round_b.ballot.household_map if round_b.ballot else {}

    all_households = sorted(set(list(a_map.keys()) + list(b_map.keys())))
    diffs = []
    for name in all_households:
        a = a_map.get(name)
        b = b_map.get(name)
        building = (a or b).building
        diffs.append({
            "Household": name,
            "Building": building,
            f"{round_a.name} Occupancy": a.occupancy if a else 0,
            f"{round_b.name} Occupancy": b.occupancy if b else 0,
            "Occupancy Change": (b.occupancy if b else 0) - (a.occupancy if a else 0),
            f"{round_a.name} Groups": len(a.placed_groups) if a else 0,
            f"{round_b.name} Groups": len(b.placed_groups) if b else 0,
        })
    return diffs


def round_totals(allocation_round: AllocationRound) -> dict:
    result = allocation_round.result
    if result is None:
        return {"Round": allocation_round.name, "Placed Groups": 0, "Unplaced Groups": 0,
                "Placed People": 0, "Unplaced People": 0}
    return {
        "Round": allocation_round.name,
        "Placed Groups": result.placed_count,
        "Unplaced Groups": len(result.unplaced),
        "Placed People": result.placed_people,
        "Unplaced People": result.unplaced_people,
    }
