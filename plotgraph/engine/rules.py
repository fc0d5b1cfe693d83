"""
Rule Engine — deterministic reference implementation of the narrative engine.

Resolves a player interaction against the rule catalog and returns the
resulting world state together with the rule that fired, if any.

Behavioral Contract:
- Pure: the same (entity, state) pair always yields the same result
- Never mutates the state it is given; every result is a fresh snapshot
- The highest-priority matching rule wins; ties keep catalog order
- Without a matching rule, falls back to default take / travel behaviour
- Once an ending is set, every interaction is refused
"""

from typing import Callable, Dict, List, Optional

from plotgraph.models.manifest import Manifest
from plotgraph.models.rules import Condition, ConditionKind, Effect, EffectKind, Rule
from plotgraph.models.world import INVENTORY, WorldState


class InteractionResult:
    """Outcome of one attempted interaction."""

    def __init__(self, next_state: WorldState, rule_id: Optional[str] = None):
        self.next_state = next_state
        self.rule_id = rule_id


class RuleEngine:
    """
    Matches interactions to rules and applies their effects.
    Conditions and effects are dispatched through handler tables keyed by kind.
    """

    def __init__(self, manifest: Manifest, rules: List[Rule]):
        self.manifest = manifest
        self.rules = list(rules)
        self._conditions: Dict[ConditionKind, Callable] = {}
        self._effects: Dict[EffectKind, Callable] = {}
        self._register_default_handlers()

        # Stable sort keeps catalog order among equal priorities
        self._ordered = sorted(self.rules, key=lambda r: -r.priority)

    def _register_default_handlers(self) -> None:
        """Register the built-in condition checks and effect appliers."""
        self._conditions[ConditionKind.PLAYER_AT] = self._check_player_at
        self._conditions[ConditionKind.ITEM_IN_INVENTORY] = self._check_item_in_inventory
        self._conditions[ConditionKind.ITEM_NOT_IN_INVENTORY] = self._check_item_not_in_inventory
        self._conditions[ConditionKind.ITEM_AT] = self._check_item_at
        self._conditions[ConditionKind.CHARACTER_AT] = self._check_character_at
        self._conditions[ConditionKind.LOCATION_DISCOVERED] = self._check_location_discovered
        self._conditions[ConditionKind.LOCATION_UNDISCOVERED] = self._check_location_undiscovered
        self._conditions[ConditionKind.SCENE_IS] = self._check_scene_is

        self._effects[EffectKind.MOVE_ITEM_TO_INVENTORY] = self._move_item_to_inventory
        self._effects[EffectKind.MOVE_ITEM_TO] = self._move_item_to
        self._effects[EffectKind.REMOVE_ITEM] = self._remove_item
        self._effects[EffectKind.MOVE_CHARACTER_TO] = self._move_character_to
        self._effects[EffectKind.REMOVE_CHARACTER] = self._remove_character
        self._effects[EffectKind.MOVE_PLAYER_TO] = self._move_player_to
        self._effects[EffectKind.DISCOVER_LOCATION] = self._discover_location
        self._effects[EffectKind.SET_SCENE] = self._set_scene
        self._effects[EffectKind.SET_ENDING] = self._set_ending

    def initial_state(self) -> WorldState:
        """Build the starting world state from the manifest."""
        m = self.manifest
        return WorldState(
            location=m.start_location,
            item_locations=dict(m.item_placement),
            character_locations=dict(m.character_placement),
            discovered_locations=frozenset([m.start_location]),
            scene=m.start_scene,
        )

    def attempt(self, entity_id: str, state: WorldState) -> InteractionResult:
        """Attempt an interaction with `entity_id` from `state`."""
        if state.ending is not None:
            return InteractionResult(state)

        rule = self.match(entity_id, state)
        if rule is not None:
            return InteractionResult(self.apply(rule, state), rule.summary)

        return InteractionResult(self._default_interaction(entity_id, state))

    def match(self, entity_id: str, state: WorldState) -> Optional[Rule]:
        """Find the rule that fires for this interaction, if any."""
        for rule in self._ordered:
            if rule.trigger.entity != entity_id:
                continue
            if all(self._holds(c, state) for c in rule.preconditions):
                return rule
        return None

    def apply(self, rule: Rule, state: WorldState) -> WorldState:
        """Apply every effect of a rule, in order."""
        fields = {
            "location": state.location,
            "item_locations": dict(state.item_locations),
            "character_locations": dict(state.character_locations),
            "discovered_locations": set(state.discovered_locations),
            "scene": state.scene,
            "ending": state.ending,
        }
        for effect in rule.effects:
            self._effects[effect.kind](effect, fields)

        fields["discovered_locations"] = frozenset(fields["discovered_locations"])
        return WorldState(**fields)

    def _holds(self, condition: Condition, state: WorldState) -> bool:
        return self._conditions[condition.kind](condition, state)

    def _default_interaction(self, entity_id: str, state: WorldState) -> WorldState:
        """Take an item lying here, or travel to a discovered location."""
        if entity_id in state.location_items:
            items = dict(state.item_locations)
            items[entity_id] = INVENTORY
            return state.model_copy(update={"item_locations": items})

        if entity_id in state.discovered and entity_id != state.location:
            return state.model_copy(update={"location": entity_id})

        return state

    # --- Condition checks ---

    def _check_player_at(self, c: Condition, state: WorldState) -> bool:
        return state.location == c.subject

    def _check_item_in_inventory(self, c: Condition, state: WorldState) -> bool:
        return state.item_locations.get(c.subject) == INVENTORY

    def _check_item_not_in_inventory(self, c: Condition, state: WorldState) -> bool:
        return state.item_locations.get(c.subject) != INVENTORY

    def _check_item_at(self, c: Condition, state: WorldState) -> bool:
        return state.item_locations.get(c.subject) == c.target

    def _check_character_at(self, c: Condition, state: WorldState) -> bool:
        return state.character_locations.get(c.subject) == c.target

    def _check_location_discovered(self, c: Condition, state: WorldState) -> bool:
        return c.subject in state.discovered_locations

    def _check_location_undiscovered(self, c: Condition, state: WorldState) -> bool:
        return c.subject not in state.discovered_locations

    def _check_scene_is(self, c: Condition, state: WorldState) -> bool:
        return state.scene == c.subject

    # --- Effects ---

    def _move_item_to_inventory(self, e: Effect, fields: dict) -> None:
        fields["item_locations"][e.subject] = INVENTORY

    def _move_item_to(self, e: Effect, fields: dict) -> None:
        fields["item_locations"][e.subject] = e.target

    def _remove_item(self, e: Effect, fields: dict) -> None:
        fields["item_locations"].pop(e.subject, None)

    def _move_character_to(self, e: Effect, fields: dict) -> None:
        fields["character_locations"][e.subject] = e.target

    def _remove_character(self, e: Effect, fields: dict) -> None:
        fields["character_locations"].pop(e.subject, None)

    def _move_player_to(self, e: Effect, fields: dict) -> None:
        fields["location"] = e.subject
        fields["discovered_locations"].add(e.subject)

    def _discover_location(self, e: Effect, fields: dict) -> None:
        fields["discovered_locations"].add(e.subject)

    def _set_scene(self, e: Effect, fields: dict) -> None:
        fields["scene"] = e.subject

    def _set_ending(self, e: Effect, fields: dict) -> None:
        fields["ending"] = e.subject
