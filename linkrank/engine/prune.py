"""Derive the graph of indexed pages used for ranking."""

from __future__ import annotations

import logging

from .graph import LinkGraph

logger = logging.getLogger(__name__)


def prune(graph: LinkGraph) -> LinkGraph:
    """Return a new graph holding only indexed nodes and the edges between them.

    Frontier nodes that were linked to but never fetched are dropped along
    with every edge touching them. ``graph`` itself is left untouched.
    """

    pruned = LinkGraph()
    dropped = 0

    graph.reset_cursor()
    node = graph.next_node()
    while node is not None:
        if node.indexed:
            copy = pruned.get_or_create_node(node.name)
            copy.document_id = node.document_id
            copy.indexed = True
            for target in node.out_edges:
                if target.indexed and not copy.links_to(target.name):
                    pruned.add_edge(copy.name, target.name)
        else:
            dropped += 1
        node = graph.next_node()

    logger.info(
        "Pruned crawl graph: kept %d indexed pages, dropped %d frontier pages, %d edges remain",
        len(pruned),
        dropped,
        pruned.edge_count(),
    )
    return pruned
