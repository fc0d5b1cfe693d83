"""
World-State Snapshot Comparator.

Two world states are observationally equal when all seven projections
match. `snapshot_key` is the single definition of that equality:
`observably_equal` compares keys, and the visited set looks states up by
key. Engine-internal fields that no projection exposes never distinguish
two states.
"""

from __future__ import annotations

from typing import AbstractSet, Hashable, Optional, Protocol, Tuple


class WorldStateView(Protocol):
    """The read-only projections the explorer is allowed to see."""

    @property
    def current_location(self) -> str: ...

    @property
    def location_items(self) -> AbstractSet[str]: ...

    @property
    def inventory(self) -> AbstractSet[str]: ...

    @property
    def discovered(self) -> AbstractSet[str]: ...

    @property
    def location_characters(self) -> AbstractSet[str]: ...

    @property
    def current_scene(self) -> str: ...

    @property
    def current_ending(self) -> Optional[str]: ...


SnapshotKey = Tuple[Hashable, ...]


def snapshot_key(state: WorldStateView) -> SnapshotKey:
    """Hashable key over the seven projections; equal keys iff observationally equal."""
    return (
        state.current_location,
        frozenset(state.location_items),
        frozenset(state.inventory),
        frozenset(state.discovered),
        frozenset(state.location_characters),
        state.current_scene,
        state.current_ending,
    )


def observably_equal(a: WorldStateView, b: WorldStateView) -> bool:
    """True when every projection of `a` matches the same projection of `b`."""
    return snapshot_key(a) == snapshot_key(b)
