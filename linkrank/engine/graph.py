"""Directed link graph keyed by canonical page URL."""

from __future__ import annotations

import sys
from typing import Dict, Iterator, List, Optional, TextIO

from .exceptions import CursorError
from .types import Node


class LinkGraph:
    """Mapping from page name to :class:`Node` with adjacency in both directions.

    The graph owns its nodes. Nodes are created on first reference, either
    explicitly or as an endpoint of :meth:`add_edge`, and start out
    un-indexed.

    Traversal uses a single resettable cursor: :meth:`reset_cursor` takes a
    snapshot of the node order, :meth:`next_node` walks it and returns
    ``None`` once the pass is exhausted, and :meth:`remove_current` deletes
    the node last returned without disturbing the rest of the pass.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, Node] = {}
        self._cursor: Optional[List[str]] = None
        self._position = 0
        self._current: Optional[Node] = None

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(list(self._nodes.values()))

    def nodes(self) -> List[Node]:
        """Return all nodes in insertion order."""

        return list(self._nodes.values())

    def edge_count(self) -> int:
        return sum(node.out_degree for node in self._nodes.values())

    def get_node(self, name: str) -> Node | None:
        """Return the node called ``name`` or ``None`` when absent."""

        return self._nodes.get(name)

    def get_or_create_node(self, name: str) -> Node:
        """Return the node called ``name``, creating it when needed."""

        node = self._nodes.get(name)
        if node is None:
            node = Node(name)
            self._nodes[name] = node
        return node

    def add_node(self, name: str) -> bool:
        """Create ``name`` if missing. Returns True when a node was added."""

        if name in self._nodes:
            return False
        self._nodes[name] = Node(name)
        return True

    def add_edge(self, source: str, target: str) -> None:
        """Add an edge ``source -> target``.

        Both endpoints are resolved or created. Repeated calls add repeated
        edges; callers that need a simple graph check first.
        """

        source_node = self.get_or_create_node(source)
        target_node = self.get_or_create_node(target)
        source_node.out_edges.append(target_node)
        target_node.in_edges.append(source_node)

    def reset_cursor(self) -> None:
        self._cursor = list(self._nodes)
        self._position = 0
        self._current = None

    def next_node(self) -> Node | None:
        """Advance the cursor. Returns ``None`` at the end of the pass."""

        if self._cursor is None:
            raise CursorError("cursor not set; call reset_cursor() first")
        self._current = None
        while self._position < len(self._cursor):
            name = self._cursor[self._position]
            self._position += 1
            node = self._nodes.get(name)
            if node is not None:
                self._current = node
                return node
        return None

    def remove_current(self) -> Node:
        """Delete the node most recently returned by :meth:`next_node`.

        Edges touching the node are detached from its neighbours so the
        remaining graph keeps symmetric adjacency.
        """

        node = self._current
        if node is None:
            raise CursorError("remove_current() must directly follow a next_node() that returned a node")
        self._current = None

        for target in node.out_edges:
            if target is not node:
                target.in_edges[:] = [source for source in target.in_edges if source is not node]
        for source in node.in_edges:
            if source is not node:
                source.out_edges[:] = [target for target in source.out_edges if target is not node]
        node.out_edges.clear()
        node.in_edges.clear()
        del self._nodes[node.name]
        return node

    def print(self, stream: TextIO | None = None) -> None:
        """Write each node and its outgoing adjacency, one node per line."""

        out = stream if stream is not None else sys.stdout
        for node in self._nodes.values():
            targets = ", ".join(target.name for target in node.out_edges)
            out.write(f"{node.name}->[{targets}]\n")
