"""
Story Catalog — loads and validates story documents.

A story document is JSON with a `manifest` (entity ids and starting
placement) and a `rules` list. Loading fails loudly on anything the rule
engine could not resolve: unknown entity references, duplicate rule
summaries, or a rule claiming the reserved root id.
"""

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Optional, Set, Union

from pydantic import ValidationError

from plotgraph.models.config import ROOT_RULE_ID
from plotgraph.models.manifest import Manifest
from plotgraph.models.rules import ConditionKind, EffectKind, Rule
from plotgraph.models.story import Story
from plotgraph.models.world import INVENTORY

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when a story document is malformed or inconsistent."""
    pass


# Which manifest section each reference must resolve against.
# (subject kind, target kind); None means free-form or unused.
_CONDITION_REFS: Dict[ConditionKind, tuple] = {
    ConditionKind.PLAYER_AT: ("location", None),
    ConditionKind.ITEM_IN_INVENTORY: ("item", None),
    ConditionKind.ITEM_NOT_IN_INVENTORY: ("item", None),
    ConditionKind.ITEM_AT: ("item", "location"),
    ConditionKind.CHARACTER_AT: ("character", "location"),
    ConditionKind.LOCATION_DISCOVERED: ("location", None),
    ConditionKind.LOCATION_UNDISCOVERED: ("location", None),
    ConditionKind.SCENE_IS: (None, None),
}

_EFFECT_REFS: Dict[EffectKind, tuple] = {
    EffectKind.MOVE_ITEM_TO_INVENTORY: ("item", None),
    EffectKind.MOVE_ITEM_TO: ("item", "location"),
    EffectKind.REMOVE_ITEM: ("item", None),
    EffectKind.MOVE_CHARACTER_TO: ("character", "location"),
    EffectKind.REMOVE_CHARACTER: ("character", None),
    EffectKind.MOVE_PLAYER_TO: ("location", None),
    EffectKind.DISCOVER_LOCATION: ("location", None),
    EffectKind.SET_SCENE: (None, None),
    EffectKind.SET_ENDING: (None, None),
}


def load_story(data: dict, root_rule_id: str = ROOT_RULE_ID) -> Story:
    """Build and validate a Story from a parsed story document."""
    try:
        story = Story.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Malformed story document: {e}") from e

    validate_story(story, root_rule_id=root_rule_id)
    logger.info(
        "Loaded story %r: %d rules, %d entities",
        story.title, len(story.rules), len(story.manifest.entity_ids),
    )
    return story


def load_story_file(path: Union[str, Path], root_rule_id: str = ROOT_RULE_ID) -> Story:
    """Read a JSON story document from disk."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CatalogError(f"{path}: invalid JSON: {e}") from e
    return load_story(data, root_rule_id=root_rule_id)


def validate_story(story: Story, root_rule_id: str = ROOT_RULE_ID) -> None:
    """Check manifest and rule references. Raises CatalogError on the first problem."""
    manifest = story.manifest
    _validate_manifest(manifest)

    index = _entity_index(manifest)
    counts = Counter(r.summary for r in story.rules)
    duplicates = sorted(s for s, n in counts.items() if n > 1)
    if duplicates:
        raise CatalogError(f"Duplicate rule summaries: {', '.join(duplicates)}")

    for rule in story.rules:
        _validate_rule(rule, index, root_rule_id)


def _entity_index(manifest: Manifest) -> Dict[str, Set[str]]:
    return {
        "item": set(manifest.items),
        "location": set(manifest.locations),
        "character": set(manifest.characters),
    }


def _validate_manifest(manifest: Manifest) -> None:
    ids = manifest.entity_ids
    clashes = sorted(i for i, n in Counter(ids).items() if n > 1)
    if clashes:
        raise CatalogError(f"Entity ids must be unique across kinds: {', '.join(clashes)}")

    if manifest.start_location not in manifest.locations:
        raise CatalogError(f"Unknown start location: {manifest.start_location}")

    locations = set(manifest.locations)
    for item, where in manifest.item_placement.items():
        if item not in manifest.items:
            raise CatalogError(f"Placement for unknown item: {item}")
        if where != INVENTORY and where not in locations:
            raise CatalogError(f"Item {item} placed in unknown location: {where}")

    for character, where in manifest.character_placement.items():
        if character not in manifest.characters:
            raise CatalogError(f"Placement for unknown character: {character}")
        if where not in locations:
            raise CatalogError(f"Character {character} placed in unknown location: {where}")


def _validate_rule(rule: Rule, index: Dict[str, Set[str]], root_rule_id: str) -> None:
    if rule.summary == root_rule_id:
        raise CatalogError(f"Rule summary {root_rule_id!r} is reserved for the graph root")

    known = set().union(*index.values())
    if rule.trigger.entity not in known:
        raise CatalogError(
            f"Rule {rule.summary!r}: trigger names unknown entity {rule.trigger.entity!r}"
        )

    for condition in rule.preconditions:
        subject_kind, target_kind = _CONDITION_REFS[condition.kind]
        _check_ref(rule, condition.kind.value, condition.subject, subject_kind, index)
        _check_ref(rule, condition.kind.value, condition.target, target_kind, index)

    for effect in rule.effects:
        subject_kind, target_kind = _EFFECT_REFS[effect.kind]
        _check_ref(rule, effect.kind.value, effect.subject, subject_kind, index)
        _check_ref(rule, effect.kind.value, effect.target, target_kind, index)


def _check_ref(
    rule: Rule,
    clause: str,
    ref: Optional[str],
    kind: Optional[str],
    index: Dict[str, Set[str]],
) -> None:
    if kind is None:
        return
    if ref is None:
        raise CatalogError(f"Rule {rule.summary!r}: {clause} is missing its {kind}")
    if ref not in index[kind]:
        raise CatalogError(f"Rule {rule.summary!r}: {clause} names unknown {kind} {ref!r}")

