"""DOT text for a finished graph. Drawing and layout belong to the renderer."""

from typing import List

from plotgraph.models.graph import GraphResult


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def to_dot(result: GraphResult, name: str = "story") -> str:
    """One statement per node, one `source -> target [color=...]` per edge."""
    lines: List[str] = [f"digraph {_quote(name)} {{"]
    for node in result.nodes:
        lines.append(f"    {_quote(node.rule_id)};")
    for edge in result.edges:
        lines.append(
            f"    {_quote(edge.source)} -> {_quote(edge.target)} [color={_quote(edge.color)}];"
        )
    lines.append("}")
    return "\n".join(lines) + "\n"
