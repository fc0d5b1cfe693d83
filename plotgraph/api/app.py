"""
plotgraph API — FastAPI endpoints for the host shell.

Exposes the finished playthrough graph for:
- Graph inspection (JSON and DOT)
- Ad-hoc graph builds for posted story documents
- Explorer configuration
- The loading indicator and its one-shot render-complete signal
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from plotgraph.catalog.loader import (
    CatalogError,
    load_story,
    load_story_file,
    validate_story,
)
from plotgraph.engine.rules import RuleEngine
from plotgraph.explorer.explorer import build_graph
from plotgraph.models.config import ExplorerConfig
from plotgraph.models.graph import GraphResult
from plotgraph.models.story import Story
from plotgraph.render.dot import to_dot

logger = logging.getLogger(__name__)

STORY_PATH_ENV = "PLOTGRAPH_STORY"           # Story file served by the default app


# --- Request/Response Models ---

class GraphBuildRequest(BaseModel):
    story: dict
    include_non_progressing_rules: Optional[bool] = None


class StatusResponse(BaseModel):
    loading: bool
    story: Optional[str] = None
    nodes: int = 0
    edges: int = 0
    completed_paths: int = 0


def build_story_graph(story: Story, config: ExplorerConfig) -> GraphResult:
    """Run the reference engine over a story and return its graph."""
    engine = RuleEngine(story.manifest, story.rules)
    return build_graph(engine, engine.initial_state(), config)


# --- Application Factory ---

def create_app(
    story: Optional[Story] = None,
    config: Optional[ExplorerConfig] = None,
    story_path: Optional[Union[str, Path]] = None,
) -> FastAPI:
    """
    Create the application. The configured story's graph is built once, here.
    A story file given by `story_path` is loaded when no `story` is passed.
    """
    config = config or ExplorerConfig()
    if story is None and story_path:
        story = load_story_file(story_path, root_rule_id=config.root_rule_id)
    elif story is not None:
        validate_story(story, root_rule_id=config.root_rule_id)

    app = FastAPI(
        title="plotgraph API",
        description="Every playthrough of an interactive story, as a rule graph",
        version="0.1.0",
    )

    app.state.story = story
    app.state.config = config
    app.state.graph = None
    app.state.loading = False

    def rebuild() -> None:
        if app.state.story is None:
            app.state.graph = None
            app.state.loading = False
            return
        app.state.graph = build_story_graph(app.state.story, app.state.config)
        app.state.loading = True
        logger.info(
            "Graph ready for %r: %d nodes, %d edges",
            app.state.story.title, len(app.state.graph.nodes), len(app.state.graph.edges),
        )

    rebuild()

    def current_graph() -> GraphResult:
        if app.state.graph is None:
            raise HTTPException(404, "No story configured")
        return app.state.graph

    # === GRAPH ===

    @app.get("/graph")
    def get_graph():
        """The finished graph with the example path highlighted."""
        return current_graph().model_dump(mode="json")

    @app.get("/graph/dot", response_class=PlainTextResponse)
    def get_graph_dot():
        """The finished graph as DOT text."""
        graph = current_graph()
        return to_dot(graph, name=app.state.story.title or "story")

    @app.post("/graph/build")
    def build_posted_graph(req: GraphBuildRequest):
        """Build a graph for a posted story document without touching the configured one."""
        try:
            posted = load_story(req.story, root_rule_id=app.state.config.root_rule_id)
        except CatalogError as e:
            raise HTTPException(422, str(e))

        build_config = app.state.config
        if req.include_non_progressing_rules is not None:
            build_config = build_config.model_copy(
                update={"include_non_progressing_rules": req.include_non_progressing_rules}
            )
        return build_story_graph(posted, build_config).model_dump(mode="json")

    # === CONFIGURATION ===

    @app.get("/config")
    def get_config():
        """Current explorer configuration."""
        return app.state.config.model_dump()

    @app.put("/config")
    def update_config(new_config: ExplorerConfig):
        """Replace the configuration and rebuild the configured story's graph."""
        if app.state.story is not None:
            try:
                validate_story(app.state.story, root_rule_id=new_config.root_rule_id)
            except CatalogError as e:
                raise HTTPException(422, str(e))
        app.state.config = new_config
        rebuild()
        return new_config.model_dump()

    # === HOST SHELL ===

    @app.get("/status", response_model=StatusResponse)
    def get_status():
        """Loading indicator plus a short summary of the current graph."""
        graph = app.state.graph
        if graph is None:
            return StatusResponse(loading=app.state.loading)
        return StatusResponse(
            loading=app.state.loading,
            story=app.state.story.title,
            nodes=len(graph.nodes),
            edges=len(graph.edges),
            completed_paths=len(graph.completed_paths),
        )

    @app.post("/render-complete")
    def render_complete():
        """One-shot signal from the renderer; clears the loading indicator."""
        current_graph()
        app.state.loading = False
        return {"loading": False}

    return app


# Default application instance
app = create_app(story_path=os.environ.get(STORY_PATH_ENV))
