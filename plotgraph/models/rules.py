"""Rule catalog entries — trigger, preconditions and effects."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class ConditionKind(str, Enum):
    PLAYER_AT = "player_at"                 # subject: location id
    ITEM_IN_INVENTORY = "item_in_inventory" # subject: item id
    ITEM_NOT_IN_INVENTORY = "item_not_in_inventory"
    ITEM_AT = "item_at"                     # subject: item id, target: location id
    CHARACTER_AT = "character_at"           # subject: character id, target: location id
    LOCATION_DISCOVERED = "location_discovered"
    LOCATION_UNDISCOVERED = "location_undiscovered"
    SCENE_IS = "scene_is"                   # subject: scene id


class EffectKind(str, Enum):
    MOVE_ITEM_TO_INVENTORY = "move_item_to_inventory"   # subject: item id
    MOVE_ITEM_TO = "move_item_to"                       # subject: item id, target: location id
    REMOVE_ITEM = "remove_item"                         # subject: item id
    MOVE_CHARACTER_TO = "move_character_to"             # subject: character id, target: location id
    REMOVE_CHARACTER = "remove_character"               # subject: character id
    MOVE_PLAYER_TO = "move_player_to"                   # subject: location id
    DISCOVER_LOCATION = "discover_location"             # subject: location id
    SET_SCENE = "set_scene"                             # subject: scene id
    SET_ENDING = "set_ending"                           # subject: ending id


class Trigger(BaseModel):
    """What the player interacts with to fire a rule."""

    entity: str                             # item, location or character id


class Condition(BaseModel):
    kind: ConditionKind
    subject: str
    target: Optional[str] = None


class Effect(BaseModel):
    kind: EffectKind
    subject: str
    target: Optional[str] = None


class Rule(BaseModel):
    """A single narrative rule. `summary` is its unique identifier."""

    summary: str
    trigger: Trigger
    preconditions: List[Condition] = []
    effects: List[Effect] = []
    priority: int = 0                       # Higher wins; ties keep catalog order
