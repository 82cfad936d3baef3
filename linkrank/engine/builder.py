"""Build the crawl link graph from page-indexed events."""

from __future__ import annotations

import logging
from typing import Iterable

from .graph import LinkGraph
from .types import Node

logger = logging.getLogger(__name__)


class CrawlGraphBuilder:
    """Subscriber for the crawler's page-indexed event.

    The builder is handed to a crawler as its ``on_page_indexed`` callback
    and is the only thing that mutates the graph while crawling. Events must
    arrive one at a time; the builder holds no locks.
    """

    def __init__(self, graph: LinkGraph | None = None, *, exclude_self_loops: bool = True) -> None:
        self.graph = graph if graph is not None else LinkGraph()
        self.exclude_self_loops = exclude_self_loops
        self.pages_indexed = 0

    def __call__(self, url: str, document_id: str, links: Iterable[str]) -> Node:
        return self.on_page_indexed(url, document_id, links)

    def on_page_indexed(self, url: str, document_id: str, links: Iterable[str]) -> Node:
        """Record ``url`` as indexed under ``document_id`` and add its out-links."""

        node = self.graph.get_or_create_node(url)
        node.document_id = document_id
        node.indexed = True

        added = 0
        for target in links:
            if self.exclude_self_loops and target == url:
                continue
            if node.links_to(target):
                continue
            self.graph.add_edge(url, target)
            added += 1

        self.pages_indexed += 1
        logger.debug("Indexed %s as %s with %d outgoing links", url, document_id, added)
        return node
