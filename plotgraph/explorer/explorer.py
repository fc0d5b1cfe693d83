"""
Exhaustive Explorer — depth-first walk over every reachable world state.

For each state, every interactable is attempted in enumeration order and
the classified result is folded into one accumulator. The walk continues
only through PROGRESS and DEFAULT_PROGRESS steps, which always add a new
state to the visited set; with a finite set of observable states the walk
therefore ends.

Limitation: an engine that keeps producing new observable states (a
counter that never stops growing, say) makes the walk run forever. There
is no step budget or depth limit.

The walk is iterative over an explicit stack of frames so large stories do
not hit the interpreter's recursion limit. Each frame holds its own
iterator of interactables, which reproduces the left-to-right order of the
recursive formulation exactly: a child branch is exhausted before the
parent moves on to its next interactable.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from plotgraph.explorer.accumulator import ExplorationAccumulator
from plotgraph.explorer.classifier import Frame, InteractionEngine, StepClassifier
from plotgraph.explorer.comparator import WorldStateView
from plotgraph.explorer.enumerator import interactables
from plotgraph.explorer.selector import select_example_path
from plotgraph.models.config import ExplorerConfig
from plotgraph.models.graph import Edge, GraphResult

logger = logging.getLogger(__name__)


class GraphExplorer:
    """Drives the enumerator, the engine and the classifier over the whole state space."""

    def __init__(self, engine: InteractionEngine, config: Optional[ExplorerConfig] = None):
        self.engine = engine
        self.config = config or ExplorerConfig()
        self.classifier = StepClassifier(engine, self.config)

    def build(self, start: WorldStateView) -> ExplorationAccumulator:
        """Run a complete exploration from `start` with a fresh accumulator."""
        accumulator = ExplorationAccumulator(start, self.config.root_rule_id)
        self.explore([], start, self.config.root_rule_id, accumulator)
        logger.info("Exploration finished: %s", accumulator.summary())
        return accumulator

    def explore(
        self,
        path: List[Edge],
        state: WorldStateView,
        last_rule_id: str,
        accumulator: ExplorationAccumulator,
    ) -> ExplorationAccumulator:
        """Explore everything reachable from `state`, folding results into `accumulator`."""
        stack: List[Tuple[Frame, Iterator[str]]] = []
        self._push(stack, Frame(list(path), state, last_rule_id))

        while stack:
            frame, pending = stack[-1]
            entity_id = next(pending, None)
            if entity_id is None:
                stack.pop()
                continue

            step = self.classifier.classify(frame, entity_id, accumulator)
            child = self.classifier.apply(step, accumulator)
            if child is not None:
                self._push(stack, child)

        return accumulator

    def _push(self, stack: List[Tuple[Frame, Iterator[str]]], frame: Frame) -> None:
        stack.append((frame, iter(interactables(frame.state))))


def build_graph(
    engine: InteractionEngine,
    start: WorldStateView,
    config: Optional[ExplorerConfig] = None,
) -> GraphResult:
    """Explore from `start` and return the finished graph with the example path highlighted."""
    config = config or ExplorerConfig()
    accumulator = GraphExplorer(engine, config).build(start)
    return select_example_path(accumulator, config)
