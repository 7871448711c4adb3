"""Axis-aligned rectangles in scene coordinates."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    @classmethod
    def from_points(cls, points):
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return cls(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    @classmethod
    def from_edges(cls, left, top, right, bottom):
        return cls(left, top, right - left, bottom - top)

    @property
    def left(self):
        return self.x

    @property
    def top(self):
        return self.y

    @property
    def right(self):
        return self.x + self.w

    @property
    def bottom(self):
        return self.y + self.h

    @property
    def center(self):
        return self.x + self.w / 2, self.y + self.h / 2

    def is_valid(self) -> bool:
        return self.w > 0 and self.h > 0

    def adjusted(self, dx1, dy1, dx2, dy2) -> "Rect":
        return Rect.from_edges(self.left + dx1, self.top + dy1,
                               self.right + dx2, self.bottom + dy2)

    def padded(self, margin) -> "Rect":
        return self.adjusted(-margin, -margin, margin, margin)

    def united(self, other: "Rect") -> "Rect":
        return Rect.from_edges(min(self.left, other.left), min(self.top, other.top),
                               max(self.right, other.right), max(self.bottom, other.bottom))


def bounding_rect(rects):
    """Union of the given rects, or None when there are none."""
    result = None
    for r in rects:
        result = r if result is None else result.united(r)
    return result
