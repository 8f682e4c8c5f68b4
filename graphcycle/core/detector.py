"""Cycle detection and execution ordering for dependency graphs."""
from collections import deque
from typing import (
    Any, Deque, Dict, Hashable, Iterable, List, NamedTuple, Optional, Protocol, Sequence, Tuple,
)


class Dependency(NamedTuple):
    """Edge meaning ``node`` cannot run until ``prerequisite`` has run."""
    node: Any
    prerequisite: Any


class Dependentable(Protocol):
    """A node that knows its own prerequisites."""

    dependencies: Sequence[Any]


def build_dependencies(nodes: Iterable[Dependentable]) -> List[Dependency]:
    """Flatten each node's declared prerequisites into dependency edges.

    Edges come out in node order, then in declaration order. A prerequisite
    listed twice produces two edges.
    """
    return [
        Dependency(node, prerequisite)
        for node in nodes
        for prerequisite in node.dependencies
    ]


class GraphCycleDetector:
    """Kahn's algorithm over an explicit or node-derived edge list.

    ``find_order`` returns ``None`` when no valid order exists. That covers
    both a real cycle and an edge that refers to a node outside the node
    set; the two cases are not told apart.
    """

    def __init__(self, deduplicate_edges: bool = False):
        # When False, a repeated (node, prerequisite) pair counts once per
        # occurrence on both the indegree and the dependents side.
        self.deduplicate_edges = deduplicate_edges

    def has_cycle(self, nodes: Iterable[Hashable],
                  dependencies: Optional[Iterable[Tuple[Hashable, Hashable]]] = None) -> bool:
        """Return True if the nodes cannot be put in a valid order."""
        return self.find_order(nodes, dependencies) is None

    def find_order(self, nodes: Iterable[Hashable],
                   dependencies: Optional[Iterable[Tuple[Hashable, Hashable]]] = None
                   ) -> Optional[List[Any]]:
        """Return an execution order for ``nodes``, or None if none exists.

        Args:
            nodes: Unique hashable nodes. Their order decides which
                indegree-zero nodes are queued first.
            dependencies: ``(node, prerequisite)`` pairs. When omitted the
                nodes must be ``Dependentable`` and edges are read from each
                node's ``dependencies``.

        Returns:
            A list holding every node once, each after all of its
            prerequisites. An empty node set gives an empty list.
        """
        nodes = list(nodes)
        if dependencies is None:
            dependencies = build_dependencies(nodes)
        if not nodes:
            return []

        edges = self._ingest(dependencies)
        known = set(nodes)

        # Node -> outstanding prerequisites, prerequisite -> dependents.
        indegree: Dict[Hashable, int] = {}
        dependents: Dict[Hashable, List[Hashable]] = {}
        for node, prerequisite in edges:
            if node not in known or prerequisite not in known:
                return None
            indegree[node] = indegree.get(node, 0) + 1
            dependents.setdefault(prerequisite, []).append(node)

        order: List[Any] = []
        queue: Deque[Hashable] = deque()
        for node in nodes:
            if indegree.get(node, 0) == 0:
                order.append(node)
                queue.append(node)

        while queue:
            prerequisite = queue.popleft()
            for node in dependents.get(prerequisite, ()):
                indegree[node] -= 1
                if indegree[node] == 0:
                    order.append(node)
                    queue.append(node)

        if len(order) != len(nodes):
            return None
        return order

    def _ingest(self, dependencies: Iterable[Tuple[Hashable, Hashable]]) -> List[Dependency]:
        edges = [Dependency(*edge) for edge in dependencies]
        if self.deduplicate_edges:
            edges = list(dict.fromkeys(edges))
        return edges


_default_detector = GraphCycleDetector()


def find_order(nodes: Iterable[Hashable],
               dependencies: Optional[Iterable[Tuple[Hashable, Hashable]]] = None
               ) -> Optional[List[Any]]:
    """Module-level shortcut for ``GraphCycleDetector().find_order``."""
    return _default_detector.find_order(nodes, dependencies)


def has_cycle(nodes: Iterable[Hashable],
              dependencies: Optional[Iterable[Tuple[Hashable, Hashable]]] = None) -> bool:
    """Module-level shortcut for ``GraphCycleDetector().has_cycle``."""
    return _default_detector.has_cycle(nodes, dependencies)
