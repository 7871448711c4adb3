"""Mr. Hedgehog call graph viewer."""

from .config import APP_VERSION as __version__
from .dot_parser import parse_dot_text
from .graph_model import Edge, GraphModel, Node, build_model
from .layout import grid_positions, layout
from .scene import Scene, SceneRenderer, arrowhead, truncate_label
from .viewer import GraphViewer, ViewState
from .viewport import ViewportController, grid_lines

__all__ = [
    "Edge", "GraphModel", "GraphViewer", "Node", "Scene", "SceneRenderer",
    "ViewState", "ViewportController", "arrowhead", "build_model", "grid_lines",
    "grid_positions", "layout", "parse_dot_text", "truncate_label",
]
