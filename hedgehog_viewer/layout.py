"""Deterministic row-major grid placement."""

from typing import Dict, Tuple

from .config import MAX_COLUMNS, NODE_SPACING_X, NODE_SPACING_Y
from .graph_model import GraphModel


def grid_positions(model: GraphModel, columns: int = MAX_COLUMNS,
                   spacing_x: float = NODE_SPACING_X,
                   spacing_y: float = NODE_SPACING_Y) -> Dict[str, Tuple[float, float]]:
    """Map each node id to (col * spacing_x, row * spacing_y) in insertion order."""
    positions = {}
    row = col = 0
    for node_id in model.nodes:
        positions[node_id] = (col * spacing_x, row * spacing_y)
        col += 1
        if col >= columns:
            col = 0
            row += 1
    return positions


def apply_layout(model: GraphModel, positions) -> None:
    for node_id, (x, y) in positions.items():
        node = model.get(node_id)
        if node is not None:
            node.x, node.y = x, y


def layout(model: GraphModel) -> Dict[str, Tuple[float, float]]:
    positions = grid_positions(model)
    apply_layout(model, positions)
    return positions
