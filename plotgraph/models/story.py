"""Story — a manifest together with its rule catalog."""

from typing import List

from pydantic import BaseModel

from plotgraph.models.manifest import Manifest
from plotgraph.models.rules import Rule


class Story(BaseModel):
    title: str = ""
    manifest: Manifest
    rules: List[Rule] = []
