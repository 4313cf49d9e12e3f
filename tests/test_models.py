"""Tests for the entity model and capacity admission."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models import (
    Person, Group, Household, Ballot,
    CapacityExceeded, ConfigurationInconsistency, DegenerateGroupError,
)


def make_group(*scores, name="G"):
    members = [Person(f"{name}-{i}", s) for i, s in enumerate(scores, start=1)]
    return Group(members, group_id=name)


def make_household(name="H1", capacity=4, building="A"):
    return Household(name, capacity, building)


class TestPerson:
    def test_label(self):
        assert Person("Alice", 10).label == "Alice [10]"

    def test_negative_score_rejected(self):
        with pytest.raises(ValueError):
            Person("Alice", -1)

    def test_immutable(self):
        p = Person("Alice", 10)
        with pytest.raises(AttributeError):
            p.score = 5


class TestGroup:
    def test_derived_metrics(self):
        g = make_group(10, 20, 30)
        assert g.size == 3
        assert g.total_score == 60
        assert g.average_score == 20.0

    def test_fractional_average(self):
        assert make_group(5, 10).average_score == 7.5

    def test_zero_members_rejected(self):
        with pytest.raises(DegenerateGroupError):
            Group(members=[])

    def test_degenerate_group_is_value_error(self):
        with pytest.raises(ValueError):
            Group(members=[], group_id="empty")

    def test_roster_and_label(self):
        g = Group([Person("Alice", 10), Person("Bob", 20)])
        assert g.roster == "Alice [10], Bob [20]"
        assert g.label == g.roster
        assert make_group(1, name="G7").label == "G7"

    def test_default_preferences(self):
        g = make_group(1)
        assert g.household_preferences == []
        assert g.building_preferences is None


class TestCapacityAdmission:
    def test_can_fit_is_inclusive(self):
        h = make_household(capacity=2)
        assert h.can_fit(make_group(1, 2))
        assert not h.can_fit(make_group(1, 2, 3))

    def test_can_fit_has_no_side_effects(self):
        h = make_household(capacity=2)
        h.can_fit(make_group(1))
        assert h.occupancy == 0
        assert h.placed_groups == []

    def test_exact_fit_boundary(self):
        h = make_household(capacity=4)
        h.attempt_admit(make_group(1, 2, name="first"))
        assert h.occupancy == 2

        h.attempt_admit(make_group(3, 4, name="second"))
        assert h.occupancy == 4
        assert h.is_full

    def test_rejection_leaves_state_unchanged(self):
        h = make_household(capacity=3)
        first = make_group(1, 2)
        h.attempt_admit(first)

        with pytest.raises(CapacityExceeded) as exc:
            h.attempt_admit(make_group(1, 2, name="too-big"))
        assert h.occupancy == 2
        assert h.placed_groups == [first]
        assert exc.value.household_name == "H1"
        assert exc.value.requested == 2
        assert exc.value.available == 1

    def test_occupancy_never_exceeds_capacity(self):
        h = make_household(capacity=5)
        for size in [3, 3, 1, 2, 1, 4]:
            try:
                h.attempt_admit(make_group(*range(size)))
            except CapacityExceeded:
                pass
            assert h.occupancy <= h.capacity
        assert h.occupancy == 5

    def test_zero_capacity_household(self):
        h = make_household(capacity=0)
        with pytest.raises(CapacityExceeded):
            h.attempt_admit(make_group(1))

    def test_negative_capacity_rejected(self):
        with pytest.raises(ValueError):
            make_household(capacity=-1)

    def test_roster_keeps_arrival_order(self):
        h = make_household(capacity=4)
        h.attempt_admit(Group([Person("Carol", 5)]))
        h.attempt_admit(Group([Person("Alice", 10), Person("Bob", 20)]))
        assert h.roster == "Carol [5], Alice [10], Bob [20]"
        assert [p.name for p in h.occupants] == ["Carol", "Alice", "Bob"]


class TestBallot:
    def test_household_lookup(self):
        h1, h2 = make_household("H1"), make_household("H2", building="B")
        ballot = Ballot(["A", "B"], [h1, h2])
        assert ballot.get_household("H2") is h2
        assert ballot.get_household("missing") is None
        assert ballot.household_names == ["H1", "H2"]

    def test_households_in_building_keep_stored_order(self):
        hs = [make_household("H3", building="A"), make_household("H1", building="B"),
              make_household("H2", building="A")]
        ballot = Ballot(["A", "B"], hs)
        assert [h.name for h in ballot.households_in("A")] == ["H3", "H2"]

    def test_duplicate_buildings_rejected(self):
        with pytest.raises(ConfigurationInconsistency):
            Ballot(["A", "B", "A"])

    def test_duplicate_household_names_rejected(self):
        with pytest.raises(ConfigurationInconsistency):
            Ballot(["A"], [make_household("H1"), make_household("H1")])

    def test_same_group_queued_twice_rejected(self):
        g = make_group(1)
        with pytest.raises(ConfigurationInconsistency):
            Ballot(["A"], [make_household()], [g, g])

    def test_totals(self):
        h1, h2 = make_household("H1", capacity=3), make_household("H2", capacity=5)
        h1.attempt_admit(make_group(1, 2))
        ballot = Ballot(["A"], [h1, h2])
        assert ballot.total_capacity == 8
        assert ballot.total_occupancy == 2
        assert not ballot.allocated


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
