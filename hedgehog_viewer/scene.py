"""Turns a laid-out GraphModel into drawable primitives.

The scene is toolkit-neutral: ``app.CanvasPainter`` maps each primitive to
tkinter canvas items. Graph drawables and the placeholder text are owned by
the scene; creature sprites are only referenced and survive every clear.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import (
    ARROW_ANGLE, ARROW_SIZE, CHAR_WIDTH_RATIO, COLOR_PALETTE, ELLIPSIS, FIT_MARGIN,
    FONT_SIZE, LABEL_MAX_CHARS, LINE_HEIGHT_RATIO, NO_NODES_MESSAGE,
    NODE_RADIUS, PLACEHOLDER_FONT_SIZE, PLACEHOLDER_MARGIN,
)
from .geometry import Rect, bounding_rect
from .graph_model import GraphModel
from .layout import apply_layout

log = logging.getLogger("hedgehog_viewer.scene")

Z_EDGE = -1
Z_NODE = 0
Z_LABEL = 1


# =====================================================================
#  Drawable primitives
# =====================================================================
@dataclass
class RoundedRect:
    x: float
    y: float
    w: float
    h: float
    radius: float = NODE_RADIUS
    fill: str = COLOR_PALETTE["node"]["fill"]
    outline: str = COLOR_PALETTE["node"]["border"]
    width: float = 2
    tags: Tuple[str, ...] = ()
    z: int = Z_NODE

    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.w, self.h)


@dataclass
class Text:
    x: float
    y: float
    text: str
    color: str = COLOR_PALETTE["label"]
    size: int = FONT_SIZE
    tags: Tuple[str, ...] = ()
    z: int = Z_LABEL

    def bounds(self) -> Rect:
        w, h = text_extent(self.text, self.size)
        return Rect(self.x - w / 2, self.y - h / 2, w, h)


@dataclass
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str = COLOR_PALETTE["edge"]
    width: float = 1.5
    tags: Tuple[str, ...] = ()
    z: int = Z_EDGE

    def bounds(self) -> Rect:
        return Rect.from_points([(self.x1, self.y1), (self.x2, self.y2)])


@dataclass
class Polygon:
    points: List[Tuple[float, float]]
    fill: str = COLOR_PALETTE["edge"]
    outline: str = COLOR_PALETTE["edge"]
    tags: Tuple[str, ...] = ()
    z: int = Z_EDGE

    def bounds(self) -> Rect:
        return Rect.from_points(self.points)


def text_extent(text: str, size: int):
    """Approximate (width, height) of a block of text at the given point size."""
    lines = text.split("\n")
    longest = max(len(line) for line in lines)
    return longest * size * CHAR_WIDTH_RATIO, len(lines) * size * LINE_HEIGHT_RATIO


def truncate_label(label: str, limit: int = LABEL_MAX_CHARS) -> str:
    """Keep the tail of long labels: the end of a qualified name is the useful part."""
    if len(label) > limit:
        return ELLIPSIS + label[-limit:]
    return label


def arrowhead(tip, tail, size: float = ARROW_SIZE, spread: float = ARROW_ANGLE):
    """Triangle with its point at ``tip`` aligned along the tail -> tip direction."""
    tip_x, tip_y = tip
    angle = math.atan2(tip_y - tail[1], tip_x - tail[0])
    p1 = (tip_x - math.cos(angle - spread) * size, tip_y - math.sin(angle - spread) * size)
    p2 = (tip_x - math.cos(angle + spread) * size, tip_y - math.sin(angle + spread) * size)
    return [(tip_x, tip_y), p1, p2]


# =====================================================================
#  Scene
# =====================================================================
@dataclass
class Scene:
    items: list = field(default_factory=list)
    placeholder: Optional[Text] = None
    sprites: list = field(default_factory=list)
    rect: Optional[Rect] = None

    def clear(self) -> None:
        """Drop graph drawables and the placeholder; sprites are left alone."""
        self.items = []
        self.placeholder = None
        self.rect = None

    def drawables(self):
        """Graph drawables plus placeholder in paint order (lowest z first)."""
        items = list(self.items)
        if self.placeholder is not None:
            items.append(self.placeholder)
        return sorted(items, key=lambda item: item.z)

    def tagged(self, tag: str):
        return [item for item in self.items if tag in item.tags]

    def content_bounds(self) -> Optional[Rect]:
        return bounding_rect(item.bounds() for item in self.drawables())


class SceneRenderer:
    def __init__(self, scene: Optional[Scene] = None):
        self.scene = scene if scene is not None else Scene()

    def clear(self) -> Scene:
        self.scene.clear()
        return self.scene

    def render(self, model: GraphModel, positions=None) -> Scene:
        if model.is_empty():
            return self.render_placeholder(NO_NODES_MESSAGE)
        self.scene.clear()
        if positions is not None:
            apply_layout(model, positions)
        drawn = 0
        for edge in model.edges:
            src = model.get(edge.source)
            dst = model.get(edge.target)
            if src is None or dst is None:
                continue
            self._add_edge(src, dst)
            drawn += 1
        for node in model.nodes.values():
            self._add_node(node)
        bounds = self.scene.content_bounds()
        self.scene.rect = bounds.padded(FIT_MARGIN)
        log.debug("Rendered %d nodes and %d of %d edges", len(model), drawn, len(model.edges))
        return self.scene

    def render_placeholder(self, message: str) -> Scene:
        self.scene.clear()
        self.scene.placeholder = Text(0, 0, message, color=COLOR_PALETTE["placeholder"],
                                      size=PLACEHOLDER_FONT_SIZE, tags=("placeholder",))
        self.scene.rect = self.scene.placeholder.bounds().padded(PLACEHOLDER_MARGIN)
        return self.scene

    def _add_node(self, node) -> None:
        tag = f"node__{node.id}"
        self.scene.items.append(RoundedRect(node.x, node.y, node.w, node.h, tags=("node", tag)))
        cx, cy = node.x + node.w / 2, node.y + node.h / 2
        self.scene.items.append(Text(cx, cy, truncate_label(node.label), tags=("label", tag)))

    def _add_edge(self, src, dst) -> None:
        tag = f"edge__{src.id}__{dst.id}"
        start = src.bottom_center
        end = dst.top_center
        self.scene.items.append(Line(start[0], start[1], end[0], end[1], tags=("edge", tag)))
        self.scene.items.append(Polygon(arrowhead(end, start), tags=("arrow", tag)))
