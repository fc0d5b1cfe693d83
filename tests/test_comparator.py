"""Tests for observational equality and interactable enumeration."""

import pytest

from plotgraph.explorer.accumulator import VisitedStates
from plotgraph.explorer.comparator import observably_equal, snapshot_key
from plotgraph.explorer.enumerator import interactables
from plotgraph.models import INVENTORY, WorldState


def _make_state(**overrides) -> WorldState:
    fields = dict(
        location="Home",
        item_locations={"Umbrella": "Home", "Book": "Home", "Coin": INVENTORY, "Key": "Street"},
        character_locations={"Cat": "Home"},
        discovered_locations=frozenset(["Street", "Home"]),
        scene="morning",
    )
    fields.update(overrides)
    return WorldState(**fields)


class TestObservablyEqual:
    def test_identical_states(self):
        assert observably_equal(_make_state(), _make_state())
        assert snapshot_key(_make_state()) == snapshot_key(_make_state())

    @pytest.mark.parametrize("overrides", [
        {"location": "Street"},
        {"item_locations": {"Umbrella": INVENTORY, "Book": "Home", "Coin": INVENTORY}},
        {"item_locations": {"Umbrella": "Home", "Book": "Home"}},
        {"discovered_locations": frozenset(["Home"])},
        {"character_locations": {}},
        {"scene": "evening"},
        {"ending": "Done"},
    ])
    def test_each_projection_distinguishes(self, overrides):
        a = _make_state()
        b = _make_state(**overrides)
        assert not observably_equal(a, b)
        assert snapshot_key(a) != snapshot_key(b)

    def test_unobserved_placement_does_not_distinguish(self):
        # Where an item lies elsewhere is not one of the projections
        a = _make_state()
        b = _make_state(item_locations={
            "Umbrella": "Home", "Book": "Home", "Coin": INVENTORY, "Key": "Park",
        })
        assert observably_equal(a, b)
        assert snapshot_key(a) == snapshot_key(b)


class TestVisitedStates:
    def test_membership_by_observation(self):
        visited = VisitedStates()
        assert visited.add(_make_state())
        assert _make_state() in visited
        assert not visited.add(_make_state())
        assert len(visited) == 1

    def test_only_grows(self):
        visited = VisitedStates()
        visited.add(_make_state())
        visited.add(_make_state(scene="evening"))
        assert len(visited) == 2
        assert _make_state(scene="evening") in visited

    def test_membership_agrees_with_equality(self):
        visited = VisitedStates()
        visited.add(_make_state())
        for candidate in (_make_state(), _make_state(location="Street"), _make_state(ending="Done")):
            assert (candidate in visited) == observably_equal(candidate, _make_state())


class TestInteractables:
    def test_grouped_and_sorted(self):
        assert interactables(_make_state()) == [
            "Cat",
            "Book", "Umbrella",
            "Coin",
            "Home", "Street",
        ]

    def test_stable(self):
        assert interactables(_make_state()) == interactables(_make_state())

    def test_empty_location(self):
        state = WorldState(location="Void", discovered_locations=frozenset(["Void"]))
        assert interactables(state) == ["Void"]
