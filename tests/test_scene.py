"""Tests for the scene renderer."""

import math

import pytest

from hedgehog_viewer.config import (
    ARROW_SIZE, FIT_MARGIN, NO_NODES_MESSAGE, NODE_HEIGHT, NODE_SPACING_X, NODE_WIDTH,
)
from hedgehog_viewer.dot_parser import parse_dot_text
from hedgehog_viewer.graph_model import GraphModel, build_model
from hedgehog_viewer.layout import grid_positions, layout
from hedgehog_viewer.scene import (
    Line, Polygon, RoundedRect, Scene, SceneRenderer, Text, arrowhead, truncate_label,
)


def _render(text):
    model = build_model(*parse_dot_text(text))
    return SceneRenderer().render(model, grid_positions(model))


# ===================================================================
# Labels
# ===================================================================

class TestTruncateLabel:
    def test_long_label_keeps_tail(self):
        label = "abcde" + "0123456789" * 2
        assert len(label) == 25
        assert truncate_label(label) == "..." + label[-20:]

    def test_exactly_twenty_unchanged(self):
        label = "x" * 20
        assert truncate_label(label) == label

    def test_short_unchanged(self):
        assert truncate_label("main") == "main"

    def test_rendered_label_is_truncated(self):
        scene = _render('"a" [label="crate::module::very_long_function"]')
        text = [t for t in scene.tagged("label")][0]
        assert text.text == "...::very_long_function"


# ===================================================================
# Arrowheads
# ===================================================================

class TestArrowhead:
    def test_downward_arrow(self):
        tip, p1, p2 = arrowhead((0, 100), (0, 0))
        assert tip == (0, 100)
        # both back corners sit ARROW_SIZE away from the tip, 30 degrees either side
        for p in (p1, p2):
            assert math.hypot(p[0], p[1] - 100) == pytest.approx(ARROW_SIZE)
            assert p[1] == pytest.approx(100 - ARROW_SIZE * math.cos(math.pi / 6))
        assert p1[0] == pytest.approx(-p2[0])

    def test_rightward_arrow(self):
        tip, p1, p2 = arrowhead((50, 0), (0, 0), size=10)
        assert p1 == pytest.approx((50 - 10 * math.cos(math.pi / 6), 10 * math.sin(math.pi / 6)))
        assert p2 == pytest.approx((50 - 10 * math.cos(math.pi / 6), -10 * math.sin(math.pi / 6)))


# ===================================================================
# Graph rendering
# ===================================================================

class TestRender:
    def test_nodes_and_labels(self):
        scene = _render('"A" [label="a"]\n"B" [label="b"]')
        rects = [i for i in scene.items if isinstance(i, RoundedRect)]
        assert len(rects) == 2
        assert (rects[1].x, rects[1].y) == (NODE_SPACING_X, 0)
        assert (rects[1].w, rects[1].h) == (NODE_WIDTH, NODE_HEIGHT)
        label = scene.tagged("node__B")[1]
        assert isinstance(label, Text)
        assert (label.x, label.y) == (NODE_SPACING_X + NODE_WIDTH / 2, NODE_HEIGHT / 2)

    def test_edge_connects_bottom_to_top(self):
        scene = _render('"A" [label="a"]\n"B" [label="b"]\n"A" -> "B"')
        line = scene.tagged("edge")[0]
        assert isinstance(line, Line)
        assert (line.x1, line.y1) == (NODE_WIDTH / 2, NODE_HEIGHT)
        assert (line.x2, line.y2) == (NODE_SPACING_X + NODE_WIDTH / 2, 0)
        arrow = scene.tagged("arrow")[0]
        assert isinstance(arrow, Polygon)
        assert arrow.points[0] == (line.x2, line.y2)

    def test_dangling_edge_dropped(self):
        scene = _render('"A" [label="a"]\n"B" [label="b"]\n"A" -> "C"')
        assert scene.tagged("edge") == []
        assert scene.tagged("arrow") == []

    def test_duplicate_edges_and_self_loops_drawn(self):
        scene = _render('"A" [label="a"]\n"A" -> "A"\n"A" -> "A"')
        assert len(scene.tagged("edge")) == 2

    def test_edges_below_nodes(self):
        scene = _render('"A" [label="a"]\n"B" [label="b"]\n"A" -> "B"')
        order = scene.drawables()
        last_edge = max(i for i, item in enumerate(order) if isinstance(item, (Line, Polygon)))
        first_node = min(i for i, item in enumerate(order) if isinstance(item, RoundedRect))
        assert last_edge < first_node

    def test_scene_rect_padded(self):
        scene = _render('"A" [label="a"]')
        assert scene.rect == scene.content_bounds().padded(FIT_MARGIN)

    def test_positions_optional(self):
        model = build_model([("A", "a")], [])
        layout(model)
        scene = SceneRenderer().render(model)
        assert scene.tagged("node")[0].x == 0

    def test_empty_model_renders_placeholder(self):
        scene = SceneRenderer().render(GraphModel())
        assert scene.items == []
        assert scene.placeholder.text == NO_NODES_MESSAGE


# ===================================================================
# Placeholder and sprites
# ===================================================================

class TestPlaceholder:
    def test_placeholder_replaces_graph(self):
        renderer = SceneRenderer()
        model = build_model([("A", "a")], [])
        renderer.render(model, grid_positions(model))
        scene = renderer.render_placeholder("Analysis failed:\nboom")
        assert scene.items == []
        assert scene.drawables() == [scene.placeholder]
        assert scene.placeholder.text == "Analysis failed:\nboom"

    def test_placeholder_centred_on_origin(self):
        scene = SceneRenderer().render_placeholder("hello")
        assert scene.placeholder.bounds().center == pytest.approx((0, 0))

    def test_sprites_survive_transitions(self):
        sprites = [object(), object()]
        renderer = SceneRenderer(Scene(sprites=sprites))
        model = build_model([("A", "a")], [])
        renderer.render(model, grid_positions(model))
        renderer.render_placeholder("msg")
        renderer.clear()
        assert renderer.scene.sprites is sprites
        assert len(renderer.scene.sprites) == 2
        assert renderer.scene.drawables() == []
