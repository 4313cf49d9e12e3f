"""Pre-flight consistency checks between buildings, households and preferences."""

import logging
from collections import Counter
from typing import List, Sequence

from models.ballot import Ballot
from models.errors import ConfigurationInconsistency
from models.group import Group
from models.household import Household

logger = logging.getLogger(__name__)


def _fail(message: str):
    logger.error(message)
    raise ConfigurationInconsistency(message)


def check_default_order(buildings: Sequence[str], default_order: Sequence[str]) -> None:
    """The default order must name every declared building exactly once."""
    repeated = sorted(b for b, n in Counter(default_order).items() if n > 1)
    if repeated:
        _fail(f"Default building order repeats building(s) {repeated}: {list(default_order)}")

    missing = sorted(set(buildings) - set(default_order))
    unknown = sorted(set(default_order) - set(buildings))
    if missing or unknown:
        _fail(
            f"Default building order {list(default_order)} is not a permutation of the "
            f"ballot buildings {list(buildings)} (missing: {missing}, undeclared: {unknown})"
        )


def check_household_buildings(ballot: Ballot) -> None:
    declared = set(ballot.buildings)
    for h in ballot.accommodation:
        if h.building not in declared:
            _fail(
                f"Household '{h.name}' is listed in building '{h.building}', "
                f"which is not in the ballot building list {ballot.buildings}"
            )


def resolve_building_order(
    group: Group,
    default_order: Sequence[str],
    buildings: Sequence[str],
) -> List[str]:
    """Effective building order for a group; its own preferences must be declared buildings."""
    if group.building_preferences is None:
        return list(default_order)

    declared = set(buildings)
    for building in group.building_preferences:
        if building not in declared:
            _fail(
                f"Group '{group.label}' prefers building '{building}', "
                f"which is not in the ballot building list {list(buildings)}"
            )
    return list(group.building_preferences)


def resolve_household_preferences(group: Group, ballot: Ballot) -> List[Household]:
    """Ranked households a group asked for, skipping empty ranks."""
    lookup = ballot.household_map
    resolved = []
    for name in group.household_preferences:
        if name is None:
            continue
        household = lookup.get(name)
        if household is None:
            _fail(f"Group '{group.label}' prefers household '{name}', which is not in the ballot")
        resolved.append(household)
    return resolved


def validate_ballot(ballot: Ballot, default_order: Sequence[str]) -> None:
    """Run every check. Raises ConfigurationInconsistency before anything is mutated."""
    check_default_order(ballot.buildings, default_order)
    check_household_buildings(ballot)
    for group in ballot.pending_groups:
        resolve_household_preferences(group, ballot)
        resolve_building_order(group, default_order, ballot.buildings)
