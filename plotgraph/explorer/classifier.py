"""
Step Classifier — decides what one attempted interaction means for the graph.

Every attempt resolves to exactly one StepKind, checked in this order:

  ENDING            rule fired and the story ended      -> edge + completed path, stop
  FLAVOR_LOOP       rule fired, state already seen      -> optional leaf edge, stop
  PROGRESS          rule fired, state is new            -> edge, continue from new state
  DEFAULT_LOOP      no rule, state already seen         -> nothing, stop
  DEFAULT_PROGRESS  no rule, state is new               -> continue, graph untouched

Only ENDING and PROGRESS always grow the graph. DEFAULT_LOOP is what stops
the walk from cycling through plain take / travel actions forever.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Protocol

from plotgraph.explorer.accumulator import ExplorationAccumulator
from plotgraph.explorer.comparator import WorldStateView
from plotgraph.models.config import ExplorerConfig
from plotgraph.models.graph import Edge

logger = logging.getLogger(__name__)


class AttemptOutcome(Protocol):
    next_state: WorldStateView
    rule_id: Optional[str]


class InteractionEngine(Protocol):
    """Protocol for the narrative engine — the explorer's only view of it."""

    def attempt(self, entity_id: str, state: WorldStateView) -> AttemptOutcome: ...


class StepKind(str, Enum):
    ENDING = "ending"
    FLAVOR_LOOP = "flavor_loop"
    PROGRESS = "progress"
    DEFAULT_LOOP = "default_loop"
    DEFAULT_PROGRESS = "default_progress"


class Frame:
    """A point the walk continues from: the path so far, the state, the last rule."""

    def __init__(self, path: List[Edge], state: WorldStateView, last_rule_id: str):
        self.path = path
        self.state = state
        self.last_rule_id = last_rule_id


class Step:
    """One classified interaction attempt."""

    def __init__(
        self,
        kind: StepKind,
        frame: Frame,
        entity_id: str,
        next_state: WorldStateView,
        rule_id: Optional[str] = None,
        edge: Optional[Edge] = None,
    ):
        self.kind = kind
        self.frame = frame
        self.entity_id = entity_id
        self.next_state = next_state
        self.rule_id = rule_id
        self.edge = edge

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "entity_id": self.entity_id,
            "last_rule_id": self.frame.last_rule_id,
            "rule_id": self.rule_id,
        }


class StepClassifier:
    """Runs one interaction through the engine and folds the result into the accumulator."""

    def __init__(self, engine: InteractionEngine, config: Optional[ExplorerConfig] = None):
        self.engine = engine
        self.config = config or ExplorerConfig()

    def classify(
        self, frame: Frame, entity_id: str, accumulator: ExplorationAccumulator
    ) -> Step:
        """Attempt `entity_id` from the frame's state and decide which outcome applies."""
        outcome = self.engine.attempt(entity_id, frame.state)
        next_state = outcome.next_state
        rule_id = outcome.rule_id
        seen = next_state in accumulator.visited

        if rule_id is not None:
            edge = Edge(
                source=frame.last_rule_id,
                target=rule_id,
                color=self.config.default_color,
            )
            if next_state.current_ending:
                kind = StepKind.ENDING
            elif seen:
                kind = StepKind.FLAVOR_LOOP
            else:
                kind = StepKind.PROGRESS
            return Step(kind, frame, entity_id, next_state, rule_id, edge)

        kind = StepKind.DEFAULT_LOOP if seen else StepKind.DEFAULT_PROGRESS
        return Step(kind, frame, entity_id, next_state)

    def apply(self, step: Step, accumulator: ExplorationAccumulator) -> Optional[Frame]:
        """
        Fold a classified step into the accumulator.
        Returns the frame to continue from, or None when this branch ends here.
        """
        logger.debug("step %s", step.to_dict())

        if step.kind == StepKind.ENDING:
            accumulator.add_edge(step.edge)
            accumulator.complete_path(step.frame.path + [step.edge])
            return None

        if step.kind == StepKind.FLAVOR_LOOP:
            if (
                self.config.include_non_progressing_rules
                and not accumulator.has_node(step.rule_id)
            ):
                accumulator.add_edge(step.edge)
            return None

        if step.kind == StepKind.PROGRESS:
            accumulator.add_edge(step.edge)
            accumulator.visited.add(step.next_state)
            return Frame(step.frame.path + [step.edge], step.next_state, step.rule_id)

        if step.kind == StepKind.DEFAULT_LOOP:
            return None

        # DEFAULT_PROGRESS
        accumulator.visited.add(step.next_state)
        return Frame(step.frame.path, step.next_state, step.frame.last_rule_id)
