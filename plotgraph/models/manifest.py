"""Entity Manifest — the static catalog of story entities."""

from typing import Dict, List

from pydantic import BaseModel


class Manifest(BaseModel):
    """Identifiers of every item, location and character, plus starting placement."""

    items: List[str] = []
    locations: List[str]
    characters: List[str] = []
    start_location: str
    item_placement: Dict[str, str] = {}         # item id -> location id or INVENTORY
    character_placement: Dict[str, str] = {}    # character id -> location id
    start_scene: str = "start"

    @property
    def entity_ids(self) -> List[str]:
        return self.items + self.locations + self.characters
