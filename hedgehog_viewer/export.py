"""DOT text for the loaded graph, built with pydot."""

import pydot

from .graph_model import GraphModel


def _quote(s: str) -> str:
    return '"' + s.replace('"', "'") + '"'


def model_to_dot(model: GraphModel, name: str = "G") -> pydot.Dot:
    graph = pydot.Dot(name, graph_type="digraph")
    for node in model.nodes.values():
        graph.add_node(pydot.Node(_quote(node.id), label=_quote(node.label)))
    for edge in model.edges:
        graph.add_edge(pydot.Edge(_quote(edge.source), _quote(edge.target)))
    return graph


def to_dot_string(model: GraphModel) -> str:
    """One declaration per line, readable again by ``dot_parser.parse_dot_text``."""
    return model_to_dot(model).to_string()
