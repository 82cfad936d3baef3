"""Crawl-side helpers that feed the link graph.

These functions sit between a crawler and the ranking engine: they turn
fetched HTML into the canonical link list of a page-indexed event, assign
sequential document names to stored pages, and load graphs or crawl logs
saved as whitespace-separated text so a crawl can be ranked offline.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterator, List, Tuple
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup  # type: ignore

from .engine.builder import CrawlGraphBuilder
from .engine.graph import LinkGraph

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = {"http", "https"}


def canonical_url(url: str, base_url: str | None = None) -> str | None:
    """Return the absolute, fragment-free form of ``url``.

    Relative links are resolved against ``base_url``. Links that do not use
    HTTP(S) yield ``None``.
    """

    absolute = urljoin(base_url, url.strip()) if base_url else url.strip()
    absolute, _ = urldefrag(absolute)
    parsed = urlparse(absolute)
    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.netloc:
        return None
    path = parsed.path or "/"
    return parsed._replace(scheme=parsed.scheme.lower(), netloc=parsed.netloc.lower(), path=path).geturl()


def extract_links(html: str, base_url: str) -> List[str]:
    """Return the canonical targets of every anchor in ``html``, in page order.

    Duplicates are kept; the graph builder decides which edges to record.
    """

    if not html:
        return []

    try:
        soup = BeautifulSoup(html, 'lxml')
    except Exception:
        # Fallback to html.parser if lxml isn't installed
        soup = BeautifulSoup(html, 'html.parser')

    base_tag = soup.find('base', href=True)
    if base_tag is not None:
        base_url = urljoin(base_url, base_tag['href'])

    links: List[str] = []
    for anchor in soup.find_all('a', href=True):
        target = canonical_url(anchor['href'], base_url)
        if target:
            links.append(target)
    return links


def document_id_for(count: int, max_count: int, suffix: str = ".html") -> str:
    """Name the ``count``-th stored page, e.g. ``P001.html`` when ``max_count`` is 100.

    Numbers are zero padded to the width of ``max_count`` so the names sort
    in crawl order.
    """

    if count < 0 or max_count < 1:
        raise ValueError(f"invalid page count {count} of {max_count}")
    width = int(math.floor(math.log10(max_count))) + 1
    return f"P{count:0{width}d}{suffix}"


def _graph_lines(path: str | Path) -> Iterator[Tuple[str, List[str]]]:
    with Path(path).open("r", encoding="utf-8") as stream:
        for line in stream:
            tokens = line.split()
            if not tokens:
                continue
            yield tokens[0], tokens[1:]


def load_graph(path: str | Path) -> LinkGraph:
    """Read a graph file where each line is a node followed by the nodes it links to."""

    graph = LinkGraph()
    for source, targets in _graph_lines(path):
        graph.add_node(source)
        for target in targets:
            graph.add_edge(source, target)
    logger.info("Loaded graph with %d nodes and %d edges from %s", len(graph), graph.edge_count(), path)
    return graph


def replay_crawl_log(
    path: str | Path,
    builder: CrawlGraphBuilder | None = None,
    max_count: int = 10000,
) -> CrawlGraphBuilder:
    """Feed each line of a graph file to ``builder`` as a page-indexed event.

    Every line names a page that was fetched and stored; pages get document
    names in line order. Targets that never appear at the start of a line
    stay un-indexed frontier pages.
    """

    crawl = builder if builder is not None else CrawlGraphBuilder()
    for url, links in _graph_lines(path):
        if crawl.pages_indexed >= max_count:
            logger.warning("Stopped replay of %s at the %d page limit", path, max_count)
            break
        crawl.on_page_indexed(url, document_id_for(crawl.pages_indexed + 1, max_count), links)
    return crawl
