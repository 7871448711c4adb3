"""Line-oriented reader for the DOT subset emitted by the analysis backend.

Only two kinds of line are recognised::

    "id" [label="text"]
    "from" -> "to"

Everything else (graph headers, closing braces, defaults, rank groups) is
ignored. Escaped quotes are not supported.
"""

import logging
import re

log = logging.getLogger("hedgehog_viewer.parser")

NODE_RE = re.compile(r'"([^"]+)"\s*\[[^\]]*?\blabel="([^"]+)"[^\]]*\]')
EDGE_RE = re.compile(r'"([^"]+)"\s*->\s*"([^"]+)"')


def _match_node(line: str):
    for m in NODE_RE.finditer(line):
        # the target of a labelled edge is not a declaration
        if line[:m.start()].rstrip().endswith("->"):
            continue
        return m.group(1), m.group(2)
    return None


def parse_line(line: str):
    """Classify one line as ("node", id, label), ("edge", src, dst) or None.

    The node pattern is tried first, except that a labelled edge such as
    ``"a" -> "b" [label="1"]`` is an edge: a bracket list right after ``->``
    belongs to the edge, not to a declaration of ``b``.
    """
    node = _match_node(line)
    if node:
        return ("node",) + node
    m = EDGE_RE.search(line)
    if m:
        return "edge", m.group(1), m.group(2)
    return None


def parse_dot_text(text):
    """Return ``(nodes, edges)`` where nodes are (id, label) and edges (src, dst) pairs.

    Never raises on bad content; an empty or unrecognised document gives two
    empty lists.
    """
    nodes = []
    edges = []
    if not text:
        return nodes, edges
    for line in text.splitlines():
        parsed = parse_line(line)
        if parsed is None:
            continue
        kind, a, b = parsed
        if kind == "node":
            nodes.append((a, b))
        else:
            edges.append((a, b))
    log.debug("Parsed %d node and %d edge declarations", len(nodes), len(edges))
    return nodes, edges
