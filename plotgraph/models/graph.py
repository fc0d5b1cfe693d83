"""Graph output — nodes, edges and the assembled result."""

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict


class Node(BaseModel):
    """Wraps a RuleId. Two nodes are the same node when their ids match."""

    model_config = ConfigDict(frozen=True)

    rule_id: str


class Edge(BaseModel):
    """Rule-to-rule transition. Identity is the (source, target) pair; color is render-only."""

    source: str
    target: str
    color: str = "black"

    @property
    def key(self) -> Tuple[str, str]:
        return (self.source, self.target)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def recolored(self, color: str) -> "Edge":
        return Edge(source=self.source, target=self.target, color=color)


class GraphResult(BaseModel):
    """A finished graph build, colors resolved, ready for a renderer."""

    nodes: List[Node]
    edges: List[Edge]
    completed_paths: List[List[Edge]] = []
    example_path: List[Edge] = []
    states_visited: int = 0
