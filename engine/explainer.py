"""Generates human-readable explanations for placement decisions."""

from typing import List, Optional

from models.group import Group


def explain_household_tier(
    group: Group,
    rejected: List[str],
    household_name: Optional[str],
    building: Optional[str],
) -> List[str]:
    """Steps for the household-preference tier."""
    if not group.household_preferences:
        return ["Step 1 - Household preferences: none given"]

    steps = []
    if rejected:
        steps.append(
            f"Step 1 - Household preferences: full or too small for {group.size} "
            f"=> {', '.join(rejected)}"
        )
    if household_name is not None:
        steps.append(
            f"Step 1 - Household preferences: placed in {household_name} ({building})"
        )
    elif not rejected:
        steps.append("Step 1 - Household preferences: only empty ranks given")
    return steps


def explain_building_tier(
    order: List[str],
    used_default: bool,
    rejected: List[str],
    household_name: Optional[str],
    building: Optional[str],
) -> List[str]:
    """Steps for the building-preference tier."""
    source = "default order" if used_default else "group preference"
    steps = [f"Step 2 - Building order ({source}): {' > '.join(order) if order else 'empty'}"]

    if rejected:
        steps.append(f"Step 2 - Buildings tried: no room in {', '.join(rejected)}")

    if household_name is not None:
        steps.append(f"Step 2 - Placed in {household_name} ({building})")
    return steps


def explain_unplaced(group: Group, attempts: int) -> List[str]:
    return [
        f"Step 3 - Unplaced: no household could take {group.size} "
        f"member{'s' if group.size != 1 else ''} after {attempts} attempt{'s' if attempts != 1 else ''}"
    ]
