"""PageRank propagation over the pruned link graph."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List

from .config import EngineConfig
from .exceptions import ConfigurationError, GraphInvariantError
from .graph import LinkGraph
from .types import Node, RankTable

logger = logging.getLogger(__name__)

DEFAULT_ALPHA = 0.15
DEFAULT_ITERATIONS = 50


class PageRankEngine:
    """Fixed-budget power iteration with a random-surfer teleport term.

    Each iteration computes, for every document ``v``::

        new[v] = (1 - alpha) * sum(rank[u] / outdeg(u) for u in in_edges(v)) + alpha / N

    and then rescales ``new`` so the ranks sum to one. Rank that would leak
    through pages without out-links is thereby redistributed proportionally.
    There is no convergence test; the engine always runs ``iterations``
    rounds.
    """

    def __init__(self, alpha: float = DEFAULT_ALPHA, iterations: int = DEFAULT_ITERATIONS) -> None:
        if not 0.0 <= alpha <= 1.0:
            raise ConfigurationError(f"alpha must lie in [0, 1], got {alpha}")
        if iterations < 0:
            raise ConfigurationError(f"iterations must be non-negative, got {iterations}")
        self.alpha = alpha
        self.iterations = iterations

    @classmethod
    def from_config(cls, config: EngineConfig) -> "PageRankEngine":
        return cls(alpha=config.damping, iterations=config.iterations)

    def run(self, graph: LinkGraph) -> RankTable:
        """Return the rank of every document after the full iteration budget."""

        nodes = _documents(graph)
        if not nodes:
            logger.warning("No indexed documents to rank")
            return {}

        rank = _initial_ranks(nodes)
        for table in self._propagate(nodes, rank):
            rank = table

        logger.info(
            "Computed PageRank for %d documents (alpha=%s, iterations=%d)",
            len(nodes),
            self.alpha,
            self.iterations,
        )
        return rank

    def iterate(self, graph: LinkGraph) -> Iterator[RankTable]:
        """Yield the normalized rank table produced by each iteration."""

        nodes = _documents(graph)
        if not nodes:
            return
        yield from self._propagate(nodes, _initial_ranks(nodes))

    def _propagate(self, nodes: List[Node], rank: RankTable) -> Iterator[RankTable]:
        rank_source = self.alpha / len(nodes)
        for iteration in range(self.iterations):
            new_rank: Dict[str, float] = {}
            for node in nodes:
                new_rank[node.document_id] = (1.0 - self.alpha) * _incoming_rank(node, rank) + rank_source
            _normalize(new_rank, iteration)
            rank = new_rank
            logger.debug("PageRank iteration %d complete", iteration + 1)
            yield dict(rank)


def _documents(graph: LinkGraph) -> List[Node]:
    """Return the graph's nodes after checking the structure the engine relies on."""

    nodes = graph.nodes()
    seen: Dict[str, str] = {}
    for node in nodes:
        if not node.indexed:
            raise GraphInvariantError(f"{node.name} is not indexed; prune the graph before ranking")
        if not node.document_id:
            raise GraphInvariantError(f"{node.name} has no document id")
        if node.document_id in seen:
            raise GraphInvariantError(
                f"document id {node.document_id} is shared by {seen[node.document_id]} and {node.name}"
            )
        seen[node.document_id] = node.name
        for source in node.in_edges:
            if graph.get_node(source.name) is not source:
                raise GraphInvariantError(f"{node.name} has an in-edge from {source.name}, which is not in the graph")
            if source.out_degree == 0:
                raise GraphInvariantError(f"{source.name} links to {node.name} but has no outgoing edges")
    return nodes


def _initial_ranks(nodes: List[Node]) -> RankTable:
    initial = 1.0 / len(nodes)
    return {node.document_id: initial for node in nodes}


def _incoming_rank(node: Node, rank: RankTable) -> float:
    total = 0.0
    for source in node.in_edges:
        total += rank[source.document_id] / source.out_degree
    return total


def _normalize(rank: Dict[str, float], iteration: int) -> None:
    total = sum(rank.values())
    if total <= 0.0:
        raise GraphInvariantError(f"rank mass vanished in iteration {iteration + 1}")
    factor = 1.0 / total
    for document_id in rank:
        rank[document_id] *= factor
