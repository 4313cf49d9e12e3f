"""Tests for the round engine."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models import (
    Person, Group, Household, Ballot, AllocationRound,
    BallotAlreadyAllocated, ConfigurationInconsistency,
)
from engine.allocation_engine import allocate_rooms
from engine.round_engine import clone_ballot, run_round, reset_round, compare_rounds, round_totals


def make_ballot():
    households = [Household("H_A", 2, "A"), Household("H_B", 2, "B")]
    groups = [Group([Person("Alice", 10), Person("Bob", 20)], group_id="G1")]
    return Ballot(["A", "B"], households, groups)


def make_round(round_id="r", order=("A", "B")):
    return AllocationRound(round_id, round_id.upper(), "", list(order))


class TestCloneBallot:
    def test_clone_shares_no_instances(self):
        base = make_ballot()
        clone = clone_ballot(base)

        base_ids = {id(h) for h in base.accommodation} | {id(g) for g in base.pending_groups}
        clone_ids = {id(h) for h in clone.accommodation} | {id(g) for g in clone.pending_groups}
        assert not base_ids & clone_ids
        assert clone.household_names == base.household_names

    def test_allocated_ballot_cannot_be_cloned(self):
        base = make_ballot()
        allocate_rooms(base, ["A", "B"])
        with pytest.raises(BallotAlreadyAllocated):
            clone_ballot(base)


class TestRunRound:
    def test_base_ballot_stays_pending(self):
        base = make_ballot()
        r = run_round(make_round(), base)

        assert not base.allocated
        assert all(h.occupancy == 0 for h in base.accommodation)
        assert len(base.pending_groups) == 1
        assert r.ballot.allocated
        assert r.ballot.get_household("H_A").occupancy == 2
        assert r.last_run_at is not None

    def test_order_changes_outcome(self):
        base = make_ballot()
        first = run_round(make_round("a_first", ("A", "B")), base)
        second = run_round(make_round("b_first", ("B", "A")), base)

        assert first.result.placements[0].household_name == "H_A"
        assert second.result.placements[0].household_name == "H_B"

    def test_bad_order_leaves_round_empty(self):
        base = make_ballot()
        r = make_round(order=("A", "C"))
        with pytest.raises(ConfigurationInconsistency):
            run_round(r, base)
        assert r.result is None
        assert not r.has_run

    def test_reset_round(self):
        r = run_round(make_round(), make_ballot())
        reset_round(r)
        assert r.ballot is None and r.result is None and r.last_run_at is None


class TestCompareRounds:
    def test_occupancy_diff(self):
        base = make_ballot()
        a = run_round(make_round("a", ("A", "B")), base)
        b = run_round(make_round("b", ("B", "A")), base)

        diffs = compare_rounds(a, b)
        assert [d["Household"] for d in diffs] == ["H_A", "H_B"]
        assert diffs[0]["Occupancy Change"] == -2
        assert diffs[1]["Occupancy Change"] == 2
        assert diffs[0]["A Occupancy"] == 2

    def test_totals(self):
        r = run_round(make_round(), make_ballot())
        totals = round_totals(r)
        assert totals["Placed Groups"] == 1
        assert totals["Unplaced People"] == 0

    def test_totals_before_run(self):
        assert round_totals(make_round())["Placed Groups"] == 0


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
