"""Shared fixtures for engine tests."""

from __future__ import annotations

from collections import Counter
from typing import Callable, Dict, Sequence

import pytest

from linkrank.engine.builder import CrawlGraphBuilder
from linkrank.engine.config import load_config
from linkrank.engine.graph import LinkGraph


@pytest.fixture()
def engine_config():
    """Provide a mutable copy of the default engine configuration."""

    return load_config(None)


@pytest.fixture()
def crawl() -> Callable[..., LinkGraph]:
    """Return a factory building a graph from ``{url: [links]}`` page events.

    Pages are indexed in mapping order and numbered ``P1.html``, ``P2.html``...
    """

    def build(pages: Dict[str, Sequence[str]], *, exclude_self_loops: bool = True) -> LinkGraph:
        builder = CrawlGraphBuilder(exclude_self_loops=exclude_self_loops)
        for number, (url, links) in enumerate(pages.items(), start=1):
            builder.on_page_indexed(url, f"P{number}.html", links)
        return builder.graph

    return build


@pytest.fixture()
def assert_symmetric() -> Callable[[LinkGraph], None]:
    """Return a checker for ``B in A.out_edges <=> A in B.in_edges`` with multiplicity."""

    def check(graph: LinkGraph) -> None:
        out_pairs: Counter = Counter()
        in_pairs: Counter = Counter()
        for node in graph:
            out_pairs.update((node.name, target.name) for target in node.out_edges)
            in_pairs.update((source.name, node.name) for source in node.in_edges)
        assert out_pairs == in_pairs

    return check
