"""Interactable Enumerator — everything the player could try to touch."""

from typing import List

from plotgraph.explorer.comparator import WorldStateView


def interactables(state: WorldStateView) -> List[str]:
    """
    Characters here, items here, carried items, then discovered locations.
    Each group is sorted so the walk order, and with it the first completed
    path, is stable across runs.
    """
    entities: List[str] = []
    entities.extend(sorted(state.location_characters))
    entities.extend(sorted(state.location_items))
    entities.extend(sorted(state.inventory))
    entities.extend(sorted(state.discovered))
    return entities
