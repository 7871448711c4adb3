"""The visualization area as an explicit context object.

``GraphViewer`` owns one scene, one viewport and one creature animator, and
moves between three states:

    EMPTY        initial instructions, also reached through clear()
    PLACEHOLDER  a single message (no nodes, open failure, analysis error)
    GRAPH        a rendered GraphModel

Nothing here touches a GUI toolkit; ``app.py`` paints ``viewer.scene``
through ``viewer.viewport`` after each call.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from .analysis import Failure, Success
from .config import DEFAULT_CREATURE_BOUNDS, INITIAL_MESSAGE, NO_NODES_MESSAGE, OPEN_FAILED_MESSAGE
from .creatures import CreatureAnimator
from .dot_parser import parse_dot_text
from .geometry import Rect
from .graph_model import GraphModel, build_model
from .layout import layout
from .scene import Scene, SceneRenderer
from .viewport import ViewportController

log = logging.getLogger("hedgehog_viewer.viewer")


class ViewState(Enum):
    EMPTY = "empty"
    PLACEHOLDER = "placeholder"
    GRAPH = "graph"


class GraphViewer:
    def __init__(self, width: float = 0, height: float = 0, rng=None):
        self.scene = Scene()
        self.renderer = SceneRenderer(self.scene)
        self.viewport = ViewportController(width, height)
        self.animator = CreatureAnimator(rng)
        # the scene draws the animator's creatures but never owns them
        self.scene.sprites = self.animator.creatures
        self.model: Optional[GraphModel] = None
        self.message: Optional[str] = None
        self.state = ViewState.EMPTY
        self._show_message(INITIAL_MESSAGE, ViewState.EMPTY)

    # =================================================================
    #  Graph content
    # =================================================================
    def load_text(self, text: str) -> ViewState:
        nodes, edges = parse_dot_text(text)
        model = build_model(nodes, edges)
        if model.is_empty():
            self.model = None
            self._show_message(NO_NODES_MESSAGE, ViewState.PLACEHOLDER)
            return self.state
        positions = layout(model)
        self.renderer.render(model, positions)
        self.model = model
        self.message = None
        self.state = ViewState.GRAPH
        bounds = self.scene.content_bounds()
        self.viewport.fit_to_content(bounds)
        self.animator.set_bounds(bounds)
        log.info("Loaded graph with %d nodes and %d edges", len(model), len(model.edges))
        return self.state

    def load_file(self, path) -> ViewState:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Could not read %s: %s", path, e)
            return self.show_error(OPEN_FAILED_MESSAGE + str(path))
        return self.load_text(text)

    def show_error(self, message: str) -> ViewState:
        self.model = None
        self._show_message(message, ViewState.PLACEHOLDER)
        return self.state

    def clear(self) -> ViewState:
        self.model = None
        self._show_message(INITIAL_MESSAGE, ViewState.EMPTY)
        return self.state

    def handle_analysis_result(self, result) -> ViewState:
        """Consume the tagged outcome of an analysis run."""
        if isinstance(result, Success):
            return self.load_text(result.text)
        if isinstance(result, Failure):
            return self.show_error(result.message)
        raise TypeError(f"unexpected analysis result: {result!r}")

    def _show_message(self, message: str, state: ViewState) -> None:
        self.renderer.render_placeholder(message)
        self.message = message
        self.state = state
        self.viewport.set_scene_rect(self.scene.rect)
        self.viewport.reset()
        self.animator.set_bounds(self.scene.rect)
        log.info("View is now %s", state.value)

    # =================================================================
    #  Navigation
    # =================================================================
    def resize(self, width: float, height: float) -> None:
        self.viewport.resize(width, height)
        visible = self.viewport.visible_scene_rect()
        if visible.is_valid():
            self.animator.set_bounds(visible)

    def wheel_zoom(self, delta, cursor=None) -> None:
        self.viewport.wheel(delta, cursor)

    def zoom_in(self) -> None:
        self.viewport.zoom_in()

    def zoom_out(self) -> None:
        self.viewport.zoom_out()

    def pan(self, dx, dy) -> None:
        self.viewport.pan(dx, dy)

    def reset_view(self) -> None:
        if self.state is ViewState.GRAPH:
            self.viewport.fit_to_content(self.scene.content_bounds())
        else:
            self.viewport.reset()

    # =================================================================
    #  Creatures
    # =================================================================
    def spawn_creatures(self, count: int):
        if self.animator.bounds is None:
            rect = self.scene.rect if self.scene.rect is not None else Rect(*DEFAULT_CREATURE_BOUNDS)
            self.animator.set_bounds(rect)
        return self.animator.spawn(count)

    def tick(self) -> None:
        self.animator.tick()
