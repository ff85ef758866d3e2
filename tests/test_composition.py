"""
Tests for the grape composition editor.

Adding or removing a grape always resets to an even floor split; manual
percentage edits touch exactly one entry.
"""

import pytest

from cellarbook import composition as grapes
from cellarbook.error_handling import FormValidationError


def as_dict(state):
    return {e.grape_variety_id: e.percentage for e in state}


class TestRebalancing:
    """Even split on add and remove."""

    def test_three_grape_scenario(self, cache):
        """Empty -> G1 -> G2 -> G3 gives 100, 50/50, then 33/33/33."""
        state = grapes.add((), cache, "cab")
        assert as_dict(state) == {"cab": 100}

        state = grapes.add(state, cache, "merlot")
        assert as_dict(state) == {"cab": 50, "merlot": 50}

        state = grapes.add(state, cache, "cab-franc")
        assert as_dict(state) == {"cab": 33, "merlot": 33, "cab-franc": 33}
        assert grapes.total(state) == 99

    def test_every_add_remove_sequence_stays_even(self, cache):
        """After any add/remove the split is floor(100 / n)."""
        ops = [
            ("add", "cab"), ("add", "merlot"), ("add", "chardonnay"),
            ("remove", "merlot"), ("add", "cab-franc"), ("add", "merlot"),
            ("remove", "cab"), ("remove", "chardonnay"),
        ]
        state = ()
        for op, variety in ops:
            if op == "add":
                state = grapes.add(state, cache, variety)
            else:
                state = grapes.remove(state, variety)
            expected = 100 // len(state)
            assert all(e.percentage == expected for e in state)

    def test_add_after_manual_edit_rebalances_everything(self, cache):
        """Adding a grape discards manual percentages."""
        state = grapes.from_variety_ids(["cab", "merlot"], cache)
        state = grapes.set_percentage(state, "cab", 80)
        state = grapes.add(state, cache, "cab-franc")
        assert as_dict(state) == {"cab": 33, "merlot": 33, "cab-franc": 33}

    def test_remove_last_entry_empties(self, cache):
        """Removing the only grape leaves an empty blend."""
        state = grapes.add((), cache, "cab")
        assert grapes.remove(state, "cab") == ()

    def test_order_is_insertion_order(self, cache):
        """Entries keep the order they were added in."""
        state = grapes.from_variety_ids(["merlot", "cab"], cache)
        assert [e.grape_variety_id for e in state] == ["merlot", "cab"]


class TestNoOps:
    """Adds and removes that change nothing."""

    def test_duplicate_add_is_ignored(self, cache):
        """Adding a grape twice returns the same blend."""
        state = grapes.add((), cache, "cab")
        assert grapes.add(state, cache, "cab") is state

    def test_unknown_variety_is_ignored(self, cache):
        """Ids missing from master data are not added."""
        state = grapes.add((), cache, "cab")
        assert grapes.add(state, cache, "zinfandel") is state

    def test_remove_absent_variety_keeps_manual_edits(self, cache):
        """Removing a grape not in the blend changes nothing."""
        state = grapes.from_variety_ids(["cab", "merlot"], cache)
        state = grapes.set_percentage(state, "cab", 70)
        assert grapes.remove(state, "chardonnay") is state


class TestSetPercentage:
    """Manual edits."""

    def test_only_target_changes(self, cache):
        """Only the edited grape changes and totals are not normalized."""
        state = grapes.from_variety_ids(["cab", "merlot", "cab-franc"], cache)
        edited = grapes.set_percentage(state, "merlot", 60)
        assert as_dict(edited) == {"cab": 33, "merlot": 60, "cab-franc": 33}
        assert grapes.total(edited) == 126

    @pytest.mark.parametrize("value", [-1, 101])
    def test_out_of_range_rejected(self, cache, value):
        """Percentages outside 0 to 100 are rejected."""
        state = grapes.add((), cache, "cab")
        with pytest.raises(FormValidationError) as exc_info:
            grapes.set_percentage(state, "cab", value)
        assert exc_info.value.fields == ["percentage"]

    def test_bounds_accepted(self, cache):
        """0 and 100 are allowed."""
        state = grapes.from_variety_ids(["cab", "merlot"], cache)
        state = grapes.set_percentage(state, "cab", 0)
        state = grapes.set_percentage(state, "merlot", 100)
        assert as_dict(state) == {"cab": 0, "merlot": 100}


class TestToRows:
    """Test conversion to composition rows."""

    def test_rows_carry_wine_id(self, cache):
        """Each grape becomes a row for the wine."""
        state = grapes.from_variety_ids(["cab", "merlot"], cache)
        rows = grapes.to_rows(state, "w1")
        assert [r.to_row() for r in rows] == [
            {"wine_id": "w1", "grape_variety_id": "cab", "percentage": 50},
            {"wine_id": "w1", "grape_variety_id": "merlot", "percentage": 50},
        ]
