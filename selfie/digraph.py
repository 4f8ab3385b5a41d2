"""A small directed graph over hashable nodes."""

from __future__ import annotations

from typing import Callable, Generic, Hashable, Iterable, Iterator, TypeVar

N = TypeVar("N", bound=Hashable)


class DiGraph(Generic[N]):
    """Directed graph keeping nodes and neighbours in insertion order."""

    def __init__(self) -> None:
        self._nodes: dict[N, None] = {}
        self._edges: set[tuple[N, N]] = set()
        self._incoming: dict[N, dict[N, None]] = {}
        self._outgoing: dict[N, dict[N, None]] = {}

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[N]:
        return iter(list(self._nodes))

    def add_node(self, node: N) -> None:
        self._nodes.setdefault(node, None)
        self._incoming.setdefault(node, {})
        self._outgoing.setdefault(node, {})

    def add_edge(self, a: N, b: N) -> None:
        self.add_node(a)
        self.add_node(b)
        self._edges.add((a, b))
        self._outgoing[a].setdefault(b, None)
        self._incoming[b].setdefault(a, None)

    def _require(self, node: N) -> None:
        if node not in self._nodes:
            raise KeyError(f"node not in graph: {node!r}")

    def incoming_edges(self, node: N) -> frozenset[N]:
        self._require(node)
        return frozenset(self._incoming[node])

    def outgoing_edges(self, node: N) -> frozenset[N]:
        self._require(node)
        return frozenset(self._outgoing[node])

    def sources(self) -> Iterator[N]:
        """Nodes with no incoming edge."""
        return (node for node in list(self._nodes) if not self._incoming[node])

    def sinks(self) -> Iterator[N]:
        """Nodes with no outgoing edge."""
        return (node for node in list(self._nodes) if not self._outgoing[node])

    def successors(self, node: N) -> Iterator[N]:
        self._require(node)
        return iter(tuple(self._outgoing[node]))

    def predecessors(self, node: N) -> Iterator[N]:
        self._require(node)
        return iter(tuple(self._incoming[node]))

    @staticmethod
    def _reachable(start: Iterable[N], step: Callable[[N], Iterator[N]]) -> Iterator[N]:
        stack = list(start)
        visited: set[N] = set()
        while stack:
            node = stack.pop()
            if node not in visited:
                visited.add(node)
                stack.extend(step(node))
                yield node

    def transitive_successors(self, node: N) -> Iterator[N]:
        """Every node reachable from ``node`` by one or more edges."""
        return self._reachable(list(self.successors(node)), self.successors)

    def transitive_predecessors(self, node: N) -> Iterator[N]:
        """Every node that reaches ``node`` by one or more edges."""
        return self._reachable(list(self.predecessors(node)), self.predecessors)

    def strongly_connected_components(self) -> list[list[N]]:
        """Groups of nodes, each gathered by a search from a not yet seen node."""
        components: list[list[N]] = []
        visited: set[N] = set()
        for start in list(self._nodes):
            if start in visited:
                continue
            visited.add(start)
            component: list[N] = []
            stack = [start]
            while stack:
                node = stack.pop()
                component.append(node)
                for succ in self.successors(node):
                    if succ not in visited:
                        visited.add(succ)
                        stack.append(succ)
            components.append(component)
        return components

    def topological_sort(self) -> list[N]:
        """Nodes emitted once all of their successors have been seen."""
        ordered: list[N] = []
        visited: set[N] = set()
        for start in list(self._nodes):
            if start in visited:
                continue
            visited.add(start)
            stack = [start]
            while stack:
                node = stack.pop()
                all_visited = True
                for succ in self.successors(node):
                    if succ not in visited:
                        visited.add(succ)
                        stack.append(succ)
                        all_visited = False
                if all_visited:
                    ordered.append(node)
        return ordered