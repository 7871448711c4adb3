"""Pan/zoom transform between scene coordinates and view pixels.

view = scene * scale + (tx, ty)
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .config import FIT_MARGIN, FIT_SHRINK, GRID_SIZE, ZOOM_STEP
from .geometry import Rect

log = logging.getLogger("hedgehog_viewer.viewport")


@dataclass
class ViewportState:
    scene_rect: Optional[Rect] = None
    scale: float = 1.0
    tx: float = 0.0
    ty: float = 0.0


class ViewportController:
    def __init__(self, width: float = 0, height: float = 0):
        self.width = width
        self.height = height
        self.state = ViewportState()

    # --- mapping -----------------------------------------------------
    @property
    def scale(self) -> float:
        return self.state.scale

    def to_view(self, x, y):
        s = self.state
        return x * s.scale + s.tx, y * s.scale + s.ty

    def to_scene(self, vx, vy):
        s = self.state
        return (vx - s.tx) / s.scale, (vy - s.ty) / s.scale

    def visible_scene_rect(self) -> Rect:
        left, top = self.to_scene(0, 0)
        right, bottom = self.to_scene(self.width, self.height)
        return Rect.from_edges(left, top, right, bottom)

    # --- operations --------------------------------------------------
    def set_scene_rect(self, rect: Optional[Rect]) -> None:
        self.state.scene_rect = rect

    def center_on(self, x, y) -> None:
        s = self.state
        s.tx = self.width / 2 - x * s.scale
        s.ty = self.height / 2 - y * s.scale

    def reset(self) -> None:
        """Unit scale, centred on the scene rect (or the origin)."""
        self.state.scale = 1.0
        rect = self.state.scene_rect
        self.center_on(*(rect.center if rect is not None else (0, 0)))

    def fit_to_content(self, bounds: Optional[Rect], margin: float = FIT_MARGIN,
                       shrink: float = FIT_SHRINK) -> None:
        """Frame ``bounds`` (plus margin) in the view, then step back by ``shrink``."""
        if bounds is None:
            return
        target = bounds.padded(margin)
        self.state.scene_rect = target
        if self.width <= 0 or self.height <= 0 or not target.is_valid():
            # no usable view yet; keep the scale and just centre the content
            self.center_on(*target.center)
            return
        self.state.scale = min(self.width / target.w, self.height / target.h)
        self.center_on(*target.center)
        self.zoom(shrink, (self.width / 2, self.height / 2))
        log.debug("Fitted %s at scale %.3f", target, self.state.scale)

    def zoom(self, factor: float, anchor=None) -> None:
        """Scale by ``factor`` keeping the scene point under ``anchor`` (view coords) fixed."""
        if factor <= 0:
            raise ValueError("zoom factor must be positive")
        if anchor is None:
            anchor = (self.width / 2, self.height / 2)
        ax, ay = anchor
        s = self.state
        s.tx = ax - (ax - s.tx) * factor
        s.ty = ay - (ay - s.ty) * factor
        s.scale *= factor

    def zoom_in(self, anchor=None) -> None:
        self.zoom(ZOOM_STEP, anchor)

    def zoom_out(self, anchor=None) -> None:
        self.zoom(1 / ZOOM_STEP, anchor)

    def wheel(self, delta, anchor=None) -> None:
        if delta > 0:
            self.zoom_in(anchor)
        elif delta < 0:
            self.zoom_out(anchor)

    def pan(self, dx, dy) -> None:
        self.state.tx += dx
        self.state.ty += dy

    def resize(self, width, height) -> None:
        # keep whatever was in the middle of the view in the middle
        cx, cy = self.to_scene(self.width / 2, self.height / 2)
        self.width, self.height = width, height
        self.center_on(cx, cy)


def grid_lines(rect: Rect, spacing: float = GRID_SIZE):
    """Background grid segments inside ``rect`` at multiples of ``spacing``.

    Returns ``(vertical, horizontal)`` lists of (x1, y1, x2, y2) in scene units.
    """
    vertical = []
    horizontal = []
    x = math.ceil(rect.left / spacing) * spacing
    while x < rect.right:
        vertical.append((x, rect.top, x, rect.bottom))
        x += spacing
    y = math.ceil(rect.top / spacing) * spacing
    while y < rect.bottom:
        horizontal.append((rect.left, y, rect.right, y))
        y += spacing
    return vertical, horizontal
