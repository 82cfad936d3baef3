"""Blend cosine similarity with stored page ranks at query time."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Mapping

from .config import EngineConfig
from .exceptions import ConfigurationError, MissingRankError
from .store import RANK_FILE_NAME, read_ranks
from .types import DocumentVector, RankTable, Retrieval

logger = logging.getLogger(__name__)


def dot_product(query: Mapping[str, float], document: Mapping[str, float]) -> float:
    """Sum of weight products over the terms the two vectors share."""

    if len(document) < len(query):
        query, document = document, query
    return sum(weight * document[term] for term, weight in query.items() if term in document)


class RankedRetriever:
    """Scores documents as ``cosine + rank * weight``.

    With ``weight == 0`` the ordering is pure cosine similarity. Every
    document scored must have an entry in the rank table.
    """

    def __init__(self, ranks: RankTable, weight: float = 0.0) -> None:
        if weight < 0.0:
            raise ConfigurationError(f"rank weight must be non-negative, got {weight}")
        self.ranks = ranks
        self.weight = weight

    @classmethod
    def from_rank_file(
        cls,
        location: str | Path,
        weight: float = 0.0,
        file_name: str = RANK_FILE_NAME,
    ) -> "RankedRetriever":
        """Load the rank table first so the corpus can be tokenized afterwards."""

        return cls(read_ranks(location, file_name), weight)

    @classmethod
    def from_config(cls, location: str | Path, config: EngineConfig) -> "RankedRetriever":
        return cls.from_rank_file(location, config.rank_weight, config.rank_file_name)

    def page_rank(self, document_id: str) -> float:
        try:
            return self.ranks[document_id]
        except KeyError:
            raise MissingRankError(document_id) from None

    def score(
        self,
        query: DocumentVector,
        document: DocumentVector,
        numerator: float,
        weight: float | None = None,
    ) -> float:
        """Return the fused score for ``document``.

        ``numerator`` is the unnormalized dot product of the two vectors as
        accumulated by the inverted index.
        """

        scale = self.weight if weight is None else weight
        lengths = query.length * document.length
        cosine = numerator / lengths if lengths else 0.0
        return cosine + self.page_rank(document.document_id) * scale

    def retrieve(self, query: DocumentVector, documents: Iterable[DocumentVector]) -> List[Retrieval]:
        """Score every document sharing a term with ``query``, best first."""

        results: List[Retrieval] = []
        for document in documents:
            if not any(term in document.weights for term in query.weights):
                continue
            numerator = dot_product(query.weights, document.weights)
            results.append(Retrieval(document.document_id, self.score(query, document, numerator)))

        results.sort(key=lambda item: (-item.score, item.document_id))
        logger.debug("Retrieved %d documents for %s", len(results), query.document_id)
        return results
