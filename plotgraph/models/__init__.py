"""plotgraph data models."""

from plotgraph.models.config import ROOT_RULE_ID, ExplorerConfig
from plotgraph.models.graph import Edge, GraphResult, Node
from plotgraph.models.manifest import Manifest
from plotgraph.models.rules import (
    Condition,
    ConditionKind,
    Effect,
    EffectKind,
    Rule,
    Trigger,
)
from plotgraph.models.story import Story
from plotgraph.models.world import INVENTORY, WorldState

__all__ = [
    "Condition",
    "ConditionKind",
    "Edge",
    "Effect",
    "EffectKind",
    "ExplorerConfig",
    "GraphResult",
    "INVENTORY",
    "Manifest",
    "Node",
    "ROOT_RULE_ID",
    "Rule",
    "Story",
    "Trigger",
    "WorldState",
]
