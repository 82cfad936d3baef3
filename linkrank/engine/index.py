"""Coordinator for the prune, rank and publish stages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from .config import EngineConfig, load_config
from .graph import LinkGraph
from .prune import prune
from .rank import PageRankEngine
from .store import write_ranks
from .types import RankTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankRun:
    """Outcome of ranking one crawl."""

    graph: LinkGraph
    ranks: RankTable
    path: Path | None = None


def compute_page_ranks(crawl_graph: LinkGraph, config: EngineConfig | None = None) -> RankRun:
    """Prune ``crawl_graph`` and rank the remaining documents."""

    engine_config = config or load_config(None)
    pruned = prune(crawl_graph)
    ranks = PageRankEngine.from_config(engine_config).run(pruned)
    return RankRun(graph=pruned, ranks=ranks)


def publish_page_ranks(
    crawl_graph: LinkGraph,
    directory: str | Path,
    config: EngineConfig | None = None,
) -> RankRun:
    """Rank ``crawl_graph`` and write the table into ``directory``."""

    engine_config = config or load_config(None)
    run = compute_page_ranks(crawl_graph, engine_config)
    path = write_ranks(run.ranks, Path(directory) / engine_config.rank_file_name)
    return RankRun(graph=run.graph, ranks=run.ranks, path=path)


def graph_summary(graph: LinkGraph) -> Dict[str, float]:
    """Return diagnostic counts for a crawl or pruned graph."""

    nodes = graph.nodes()
    indexed = [node for node in nodes if node.indexed]
    total_indexed = len(indexed)
    dangling = sum(1 for node in indexed if node.out_degree == 0)
    orphans = sum(1 for node in indexed if not any(source.indexed for source in node.in_edges))

    return {
        "nodes": len(nodes),
        "indexed": total_indexed,
        "frontier": len(nodes) - total_indexed,
        "edges": graph.edge_count(),
        "dangling_rate": dangling / total_indexed if total_indexed else 0.0,
        "orphan_rate": orphans / total_indexed if total_indexed else 0.0,
    }
