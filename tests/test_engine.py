"""Tests for the reference rule engine."""

from plotgraph.engine.rules import RuleEngine
from plotgraph.models import (
    INVENTORY,
    Condition,
    ConditionKind,
    Effect,
    EffectKind,
    Manifest,
    Rule,
    Trigger,
)


def _make_manifest() -> Manifest:
    return Manifest(
        items=["Umbrella", "Key"],
        locations=["Home", "Street", "Park"],
        characters=["Neighbour"],
        start_location="Home",
        item_placement={"Umbrella": "Home", "Key": "Street"},
        character_placement={"Neighbour": "Street"},
        start_scene="morning",
    )


def _rule(summary, entity, preconditions=None, effects=None, priority=0) -> Rule:
    return Rule(
        summary=summary,
        trigger=Trigger(entity=entity),
        preconditions=preconditions or [],
        effects=effects or [],
        priority=priority,
    )


class TestInitialState:
    def test_seeded_from_manifest(self):
        engine = RuleEngine(_make_manifest(), [])
        state = engine.initial_state()
        assert state.current_location == "Home"
        assert state.discovered == frozenset(["Home"])
        assert state.location_items == frozenset(["Umbrella"])
        assert state.current_scene == "morning"
        assert state.current_ending is None


class TestRuleMatching:
    def test_matching_rule_fires(self):
        rule = _rule(
            "TakeUmbrella", "Umbrella",
            effects=[Effect(kind=EffectKind.MOVE_ITEM_TO_INVENTORY, subject="Umbrella")],
        )
        engine = RuleEngine(_make_manifest(), [rule])
        result = engine.attempt("Umbrella", engine.initial_state())
        assert result.rule_id is not None
        assert result.rule_id == "TakeUmbrella"
        assert result.next_state.inventory == frozenset(["Umbrella"])

    def test_failed_precondition_skips_rule(self):
        rule = _rule(
            "GreetNeighbour", "Neighbour",
            preconditions=[Condition(kind=ConditionKind.PLAYER_AT, subject="Street")],
        )
        engine = RuleEngine(_make_manifest(), [rule])
        result = engine.attempt("Neighbour", engine.initial_state())
        assert result.rule_id is None

    def test_higher_priority_wins(self):
        low = _rule("Low", "Umbrella", priority=1)
        high = _rule("High", "Umbrella", priority=5)
        engine = RuleEngine(_make_manifest(), [low, high])
        assert engine.attempt("Umbrella", engine.initial_state()).rule_id == "High"

    def test_equal_priority_keeps_catalog_order(self):
        first = _rule("First", "Umbrella")
        second = _rule("Second", "Umbrella")
        engine = RuleEngine(_make_manifest(), [first, second])
        assert engine.attempt("Umbrella", engine.initial_state()).rule_id == "First"

    def test_attempt_does_not_mutate_input(self):
        rule = _rule(
            "Leave", "Umbrella",
            effects=[
                Effect(kind=EffectKind.MOVE_PLAYER_TO, subject="Street"),
                Effect(kind=EffectKind.MOVE_ITEM_TO_INVENTORY, subject="Umbrella"),
            ],
        )
        engine = RuleEngine(_make_manifest(), [rule])
        start = engine.initial_state()
        engine.attempt("Umbrella", start)
        assert start.current_location == "Home"
        assert start.item_locations["Umbrella"] == "Home"
        assert start.discovered == frozenset(["Home"])

    def test_attempt_is_deterministic(self):
        rule = _rule(
            "TakeUmbrella", "Umbrella",
            effects=[Effect(kind=EffectKind.MOVE_ITEM_TO_INVENTORY, subject="Umbrella")],
        )
        engine = RuleEngine(_make_manifest(), [rule])
        start = engine.initial_state()
        a = engine.attempt("Umbrella", start)
        b = engine.attempt("Umbrella", start)
        assert a.rule_id == b.rule_id
        assert a.next_state == b.next_state


class TestEffects:
    def test_every_effect_kind(self):
        rule = _rule(
            "BigMoment", "Umbrella",
            effects=[
                Effect(kind=EffectKind.MOVE_ITEM_TO, subject="Umbrella", target="Park"),
                Effect(kind=EffectKind.REMOVE_ITEM, subject="Key"),
                Effect(kind=EffectKind.MOVE_CHARACTER_TO, subject="Neighbour", target="Park"),
                Effect(kind=EffectKind.DISCOVER_LOCATION, subject="Street"),
                Effect(kind=EffectKind.MOVE_PLAYER_TO, subject="Park"),
                Effect(kind=EffectKind.SET_SCENE, subject="evening"),
                Effect(kind=EffectKind.SET_ENDING, subject="Finale"),
            ],
        )
        engine = RuleEngine(_make_manifest(), [rule])
        state = engine.attempt("Umbrella", engine.initial_state()).next_state

        assert state.current_location == "Park"
        assert state.discovered == frozenset(["Home", "Street", "Park"])
        assert state.location_items == frozenset(["Umbrella"])
        assert "Key" not in state.item_locations
        assert state.location_characters == frozenset(["Neighbour"])
        assert state.current_scene == "evening"
        assert state.current_ending == "Finale"

    def test_remove_character(self):
        rule = _rule(
            "Vanish", "Umbrella",
            effects=[Effect(kind=EffectKind.REMOVE_CHARACTER, subject="Neighbour")],
        )
        engine = RuleEngine(_make_manifest(), [rule])
        state = engine.attempt("Umbrella", engine.initial_state()).next_state
        assert "Neighbour" not in state.character_locations


class TestConditions:
    def test_item_and_location_conditions(self):
        rule = _rule(
            "Check", "Umbrella",
            preconditions=[
                Condition(kind=ConditionKind.ITEM_AT, subject="Umbrella", target="Home"),
                Condition(kind=ConditionKind.ITEM_NOT_IN_INVENTORY, subject="Umbrella"),
                Condition(kind=ConditionKind.CHARACTER_AT, subject="Neighbour", target="Street"),
                Condition(kind=ConditionKind.LOCATION_DISCOVERED, subject="Home"),
                Condition(kind=ConditionKind.LOCATION_UNDISCOVERED, subject="Park"),
                Condition(kind=ConditionKind.SCENE_IS, subject="morning"),
            ],
        )
        engine = RuleEngine(_make_manifest(), [rule])
        assert engine.attempt("Umbrella", engine.initial_state()).rule_id == "Check"

    def test_item_in_inventory(self):
        rule = _rule(
            "Open", "Umbrella",
            preconditions=[Condition(kind=ConditionKind.ITEM_IN_INVENTORY, subject="Umbrella")],
        )
        engine = RuleEngine(_make_manifest(), [rule])
        start = engine.initial_state()
        assert engine.attempt("Umbrella", start).rule_id is None

        carried = start.model_copy(update={"item_locations": {"Umbrella": INVENTORY}})
        assert engine.attempt("Umbrella", carried).rule_id == "Open"


class TestDefaultInteractions:
    def test_take_item_here(self):
        engine = RuleEngine(_make_manifest(), [])
        result = engine.attempt("Umbrella", engine.initial_state())
        assert result.rule_id is None
        assert result.next_state.inventory == frozenset(["Umbrella"])

    def test_travel_to_discovered_location(self):
        engine = RuleEngine(_make_manifest(), [])
        start = engine.initial_state().model_copy(
            update={"discovered_locations": frozenset(["Home", "Street"])}
        )
        result = engine.attempt("Street", start)
        assert result.rule_id is None
        assert result.next_state.current_location == "Street"

    def test_undiscovered_location_is_unreachable(self):
        engine = RuleEngine(_make_manifest(), [])
        start = engine.initial_state()
        assert engine.attempt("Park", start).next_state == start

    def test_current_location_and_carried_items_are_no_ops(self):
        engine = RuleEngine(_make_manifest(), [])
        start = engine.initial_state()
        assert engine.attempt("Home", start).next_state == start

        carried = engine.attempt("Umbrella", start).next_state
        assert engine.attempt("Umbrella", carried).next_state == carried

    def test_ending_refuses_interactions(self):
        rule = _rule(
            "End", "Umbrella",
            effects=[Effect(kind=EffectKind.SET_ENDING, subject="Done")],
        )
        engine = RuleEngine(_make_manifest(), [rule])
        ended = engine.attempt("Umbrella", engine.initial_state()).next_state
        result = engine.attempt("Umbrella", ended)
        assert result.rule_id is None
        assert result.next_state == ended
