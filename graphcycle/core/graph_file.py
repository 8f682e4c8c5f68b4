"""YAML graph description loader.

A graph file looks like::

    nodes: [compile, link]
    dependencies:
      link: [compile]
      package: [link, docs]

``nodes`` is optional and only fixes the scan order or adds isolated nodes.
Every name mentioned under ``dependencies`` joins the node set, so a loaded
graph never refers to a node it does not contain.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from graphcycle.core.detector import Dependency
from graphcycle.core.logging import timed

logger = logging.getLogger(__name__)


class GraphFileError(ValueError):
    """Raised when a graph file has the wrong shape."""


@dataclass
class Graph:
    """Nodes plus dependency edges, ready for GraphCycleDetector."""
    nodes: List[str] = field(default_factory=list)
    dependencies: List[Dependency] = field(default_factory=list)


@timed
def load_graph(path: str) -> Graph:
    """Load a graph from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML is invalid
        GraphFileError: If the file isn't UTF-8 or isn't a graph description
    """
    graph_path = Path(path)
    if not graph_path.exists():
        raise FileNotFoundError(f"Graph file not found: {path}")

    try:
        with open(graph_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except UnicodeDecodeError as e:
        raise GraphFileError(f"Graph file is not valid UTF-8: {path} ({e.reason})") from e

    graph = parse_graph(data)
    logger.debug("Loaded graph", extra={
        "graph": str(graph_path), "nodes": len(graph.nodes), "edges": len(graph.dependencies),
    })
    return graph


def parse_graph(data: Any) -> Graph:
    """Build a Graph from an already-parsed YAML document."""
    if data is None:
        return Graph()
    if not isinstance(data, dict):
        raise GraphFileError("Graph file must contain a mapping")
    unknown = set(data) - {"nodes", "dependencies"}
    if unknown:
        raise GraphFileError(f"Unknown keys in graph file: {sorted(map(str, unknown))}")

    listed = data.get("nodes") or []
    if not isinstance(listed, list):
        raise GraphFileError("'nodes' must be a list")
    declared = data.get("dependencies") or {}
    if not isinstance(declared, dict):
        raise GraphFileError("'dependencies' must map each node to its prerequisites")

    # Insertion-ordered set of every node mentioned anywhere.
    seen: Dict[str, None] = {}
    for name in listed:
        seen[_node_name(name)] = None

    dependencies: List[Dependency] = []
    for name, prerequisites in declared.items():
        node = _node_name(name)
        seen.setdefault(node, None)
        for prerequisite in _as_list(node, prerequisites):
            dependencies.append(Dependency(node, _node_name(prerequisite)))
    for edge in dependencies:
        seen.setdefault(edge.prerequisite, None)

    return Graph(nodes=list(seen), dependencies=dependencies)


def _as_list(node: str, prerequisites: Any) -> List[Any]:
    if prerequisites is None:
        return []
    if isinstance(prerequisites, list):
        return prerequisites
    if isinstance(prerequisites, dict):
        raise GraphFileError(f"Prerequisites of {node!r} must be a list or a single name")
    return [prerequisites]


def _node_name(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        raise GraphFileError(f"Invalid node name: {value!r}")
    return str(value)
