"""Tests for the grid layout."""

import pytest

from hedgehog_viewer.config import MAX_COLUMNS, NODE_SPACING_X, NODE_SPACING_Y
from hedgehog_viewer.graph_model import build_model
from hedgehog_viewer.layout import grid_positions, layout


def _model(n):
    return build_model([(f"n{i}", f"label {i}") for i in range(n)], [])


class TestGridPositions:
    @pytest.mark.parametrize("n", [0, 1, 5, 6, 13])
    def test_row_major_fill(self, n):
        positions = grid_positions(_model(n))
        assert len(positions) == n
        for i, node_id in enumerate(positions):
            assert node_id == f"n{i}"
            assert positions[node_id] == ((i % 5) * NODE_SPACING_X, (i // 5) * NODE_SPACING_Y)

    def test_five_columns(self):
        assert MAX_COLUMNS == 5
        positions = grid_positions(_model(6))
        assert positions["n4"] == (4 * NODE_SPACING_X, 0)
        assert positions["n5"] == (0, NODE_SPACING_Y)

    def test_deterministic(self):
        assert grid_positions(_model(13)) == grid_positions(_model(13))

    def test_custom_columns(self):
        positions = grid_positions(_model(3), columns=2, spacing_x=10, spacing_y=20)
        assert positions == {"n0": (0, 0), "n1": (10, 0), "n2": (0, 20)}


class TestLayout:
    def test_positions_written_to_nodes(self):
        model = _model(7)
        positions = layout(model)
        for node_id, (x, y) in positions.items():
            node = model.get(node_id)
            assert (node.x, node.y) == (x, y)
