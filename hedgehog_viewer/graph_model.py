"""In-memory call graph: nodes keyed by identity plus an ordered edge list."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import NODE_HEIGHT, NODE_WIDTH


@dataclass
class Node:
    id: str
    label: str
    x: float = 0.0
    y: float = 0.0
    w: float = NODE_WIDTH
    h: float = NODE_HEIGHT

    @property
    def bottom_center(self):
        return self.x + self.w / 2, self.y + self.h

    @property
    def top_center(self):
        return self.x + self.w / 2, self.y


@dataclass(frozen=True)
class Edge:
    source: str
    target: str


@dataclass
class GraphModel:
    """Nodes in first-seen order and edges exactly as declared.

    Edges hold node ids, never Node objects, so a rebuilt model cannot leave
    stale references behind.
    """
    nodes: Dict[str, Node] = field(default_factory=dict)
    edges: List[Edge] = field(default_factory=list)

    def add_node(self, node_id: str, label: str) -> Node:
        # re-declaring an id keeps the first label and slot
        existing = self.nodes.get(node_id)
        if existing is not None:
            return existing
        node = Node(node_id, label)
        self.nodes[node_id] = node
        return node

    def add_edge(self, source: str, target: str) -> Edge:
        edge = Edge(source, target)
        self.edges.append(edge)
        return edge

    def get(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def __contains__(self, node_id) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def is_empty(self) -> bool:
        return not self.nodes


def build_model(nodes, edges) -> GraphModel:
    """Build a fresh GraphModel from parser output."""
    model = GraphModel()
    for node_id, label in nodes:
        model.add_node(node_id, label)
    for source, target in edges:
        model.add_edge(source, target)
    return model
