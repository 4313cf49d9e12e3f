"""Tests for the pre-flight consistency checks."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models import Person, Group, Household, Ballot, ConfigurationInconsistency
from engine.allocation_engine import allocate_rooms
from engine.consistency import (
    check_default_order,
    check_household_buildings,
    resolve_building_order,
    resolve_household_preferences,
)


def make_group(*scores, name="G", household_prefs=None, building_prefs=None):
    members = [Person(f"{name}-{i}", s) for i, s in enumerate(scores, start=1)]
    return Group(members, list(household_prefs or []), building_prefs, group_id=name)


def assert_untouched(ballot, queued):
    assert all(h.occupancy == 0 for h in ballot.accommodation)
    assert ballot.pending_groups == queued
    assert not ballot.allocated


class TestDefaultOrder:
    def test_permutation_accepted(self):
        check_default_order(["A", "B", "C"], ["C", "A", "B"])

    def test_unknown_building_rejected(self):
        with pytest.raises(ConfigurationInconsistency, match="not a permutation"):
            check_default_order(["A", "B"], ["A", "C"])

    def test_missing_building_rejected(self):
        with pytest.raises(ConfigurationInconsistency):
            check_default_order(["A", "B"], ["A"])

    def test_duplicates_rejected(self):
        with pytest.raises(ConfigurationInconsistency, match="repeats"):
            check_default_order(["A", "B"], ["A", "B", "A"])

    def test_allocation_aborts_without_mutation(self):
        h1 = Household("H1", 3, "A")
        queued = [make_group(1, 2)]
        ballot = Ballot(["A", "B"], [h1, Household("H2", 3, "B")], list(queued))

        with pytest.raises(ConfigurationInconsistency):
            allocate_rooms(ballot, ["A", "C"])
        assert_untouched(ballot, queued)


class TestHouseholdBuildings:
    def test_undeclared_building_rejected(self):
        ballot = Ballot(["A"], [Household("H1", 3, "A"), Household("H9", 3, "Z")])
        with pytest.raises(ConfigurationInconsistency, match="H9"):
            check_household_buildings(ballot)

    def test_allocation_aborts_without_mutation(self):
        queued = [make_group(1)]
        ballot = Ballot(["A"], [Household("H1", 3, "A"), Household("H9", 3, "Z")], list(queued))
        with pytest.raises(ConfigurationInconsistency):
            allocate_rooms(ballot, ["A"])
        assert_untouched(ballot, queued)


class TestGroupPreferences:
    def test_no_preferences_uses_default(self):
        group = make_group(1)
        assert resolve_building_order(group, ["B", "A"], ["A", "B"]) == ["B", "A"]

    def test_own_preferences_used(self):
        group = make_group(1, building_prefs=["A"])
        assert resolve_building_order(group, ["B", "A"], ["A", "B"]) == ["A"]

    def test_undeclared_building_preference_rejected(self):
        group = make_group(1, name="late", building_prefs=["A", "Q"])
        with pytest.raises(ConfigurationInconsistency, match="'Q'"):
            resolve_building_order(group, ["A"], ["A"])

    def test_bad_preference_aborts_whole_run(self):
        # The valid group is served first, but nothing may be placed.
        good = make_group(1, name="good")
        bad = make_group(50, name="bad", building_prefs=["Q"])
        ballot = Ballot(["A"], [Household("H1", 5, "A")], [good, bad])

        with pytest.raises(ConfigurationInconsistency):
            allocate_rooms(ballot, ["A"])
        assert_untouched(ballot, [good, bad])

    def test_household_preferences_resolved_in_rank_order(self):
        h1, h2 = Household("H1", 3, "A"), Household("H2", 3, "A")
        ballot = Ballot(["A"], [h1, h2])
        group = make_group(1, household_prefs=["H2", None, "H1"])
        assert resolve_household_preferences(group, ballot) == [h2, h1]

    def test_unknown_household_preference_rejected(self):
        queued = [make_group(1, household_prefs=["H404"])]
        ballot = Ballot(["A"], [Household("H1", 3, "A")], list(queued))
        with pytest.raises(ConfigurationInconsistency, match="H404"):
            allocate_rooms(ballot, ["A"])
        assert_untouched(ballot, queued)


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
