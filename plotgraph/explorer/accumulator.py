"""
Exploration Accumulator — the single record threaded through a graph build.

Created fresh per build, grown monotonically by the walk, and handed to
the path selector once the walk ends. Nothing is ever removed.
"""

from typing import Dict, List, Tuple

from plotgraph.explorer.comparator import SnapshotKey, WorldStateView, snapshot_key
from plotgraph.models.graph import Edge, Node


class VisitedStates:
    """
    Insertion-ordered record of every world state seen so far.
    Membership is observational equality, looked up through snapshot keys.
    """

    def __init__(self):
        self._states: List[WorldStateView] = []
        self._keys: set = set()

    def __contains__(self, state: WorldStateView) -> bool:
        return snapshot_key(state) in self._keys

    def __len__(self) -> int:
        return len(self._states)

    def add(self, state: WorldStateView) -> bool:
        """Record a state. Returns False if an equal state was already present."""
        key: SnapshotKey = snapshot_key(state)
        if key in self._keys:
            return False
        self._keys.add(key)
        self._states.append(state)
        return True


class ExplorationAccumulator:
    """Visited states, discovered nodes and edges, and completed playthroughs."""

    def __init__(self, start: WorldStateView, root_rule_id: str):
        self.root_rule_id = root_rule_id
        self.visited = VisitedStates()
        self.visited.add(start)
        self._nodes: Dict[str, Node] = {root_rule_id: Node(rule_id=root_rule_id)}
        self._edges: Dict[Tuple[str, str], Edge] = {}
        self.completed_paths: List[List[Edge]] = []

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    def has_node(self, rule_id: str) -> bool:
        return rule_id in self._nodes

    def add_node(self, rule_id: str) -> None:
        self._nodes.setdefault(rule_id, Node(rule_id=rule_id))

    def add_edge(self, edge: Edge) -> None:
        """Add an edge and its target node. A repeated (source, target) pair is ignored."""
        self._edges.setdefault(edge.key, edge)
        self.add_node(edge.target)

    def complete_path(self, path: List[Edge]) -> None:
        self.completed_paths.append(list(path))

    def summary(self) -> dict:
        return {
            "states_visited": len(self.visited),
            "nodes": len(self._nodes),
            "edges": len(self._edges),
            "completed_paths": len(self.completed_paths),
        }
