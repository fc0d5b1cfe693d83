"""World State — one snapshot of the narrative world."""

from typing import Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict

INVENTORY = "__inventory__"                 # Pseudo-location for carried items


class WorldState(BaseModel):
    """
    Immutable snapshot of the story world.

    The explorer never looks at the fields directly; it reads the seven
    projections exposed as properties below.
    """

    model_config = ConfigDict(frozen=True)

    location: str                                   # Where the player stands
    item_locations: Dict[str, str] = {}             # item id -> location id or INVENTORY
    character_locations: Dict[str, str] = {}        # character id -> location id
    discovered_locations: FrozenSet[str] = frozenset()
    scene: str = "start"
    ending: Optional[str] = None

    @property
    def current_location(self) -> str:
        return self.location

    @property
    def location_items(self) -> FrozenSet[str]:
        return frozenset(
            item for item, where in self.item_locations.items()
            if where == self.location
        )

    @property
    def inventory(self) -> FrozenSet[str]:
        return frozenset(
            item for item, where in self.item_locations.items()
            if where == INVENTORY
        )

    @property
    def discovered(self) -> FrozenSet[str]:
        return self.discovered_locations

    @property
    def location_characters(self) -> FrozenSet[str]:
        return frozenset(
            character for character, where in self.character_locations.items()
            if where == self.location
        )

    @property
    def current_scene(self) -> str:
        return self.scene

    @property
    def current_ending(self) -> Optional[str]:
        return self.ending
