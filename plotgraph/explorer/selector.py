"""Path Selector & Highlighter — picks the example playthrough and colors it."""

from typing import List, Optional

from plotgraph.explorer.accumulator import ExplorationAccumulator
from plotgraph.models.config import ExplorerConfig
from plotgraph.models.graph import Edge, GraphResult


def select_example_path(
    accumulator: ExplorationAccumulator,
    config: Optional[ExplorerConfig] = None,
) -> GraphResult:
    """
    Take the first completed path as the example playthrough. Its edges get
    the highlight color, every other edge the default color. With no
    completed path, nothing is highlighted.
    """
    config = config or ExplorerConfig()
    example: List[Edge] = accumulator.completed_paths[0] if accumulator.completed_paths else []
    on_path = {e.key for e in example}

    edges = [
        e.recolored(config.highlight_color if e.key in on_path else config.default_color)
        for e in accumulator.edges
    ]

    return GraphResult(
        nodes=accumulator.nodes,
        edges=edges,
        completed_paths=[list(p) for p in accumulator.completed_paths],
        example_path=[e.recolored(config.highlight_color) for e in example],
        states_visited=len(accumulator.visited),
    )
