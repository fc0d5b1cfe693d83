"""Explorer configuration."""

from pydantic import BaseModel

ROOT_RULE_ID = "Begining"


class ExplorerConfig(BaseModel):
    """Configuration for a graph build."""

    include_non_progressing_rules: bool = False  # Keep flavor rules as leaf nodes
    default_color: str = "black"
    highlight_color: str = "red"
    root_rule_id: str = ROOT_RULE_ID
