"""Typed data structures shared by the link ranking pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Mapping

RankTable = Dict[str, float]


@dataclass
class PagePayload:
    """Per-page record carried by every graph node."""

    document_id: str = ""
    indexed: bool = False


@dataclass(eq=False)
class Node:
    """Graph node identified by the canonical URL of a page.

    Equality is identity: two nodes with the same name can only exist in
    different graphs, and edges always refer to nodes of their own graph.
    """

    name: str
    payload: PagePayload = field(default_factory=PagePayload)
    out_edges: List["Node"] = field(default_factory=list, repr=False)
    in_edges: List["Node"] = field(default_factory=list, repr=False)

    @property
    def document_id(self) -> str:
        return self.payload.document_id

    @document_id.setter
    def document_id(self, value: str) -> None:
        self.payload.document_id = value

    @property
    def indexed(self) -> bool:
        return self.payload.indexed

    @indexed.setter
    def indexed(self, value: bool) -> None:
        self.payload.indexed = value

    @property
    def out_degree(self) -> int:
        return len(self.out_edges)

    def links_to(self, name: str) -> bool:
        """Return True when an outgoing edge already points at ``name``."""

        return any(target.name == name for target in self.out_edges)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class DocumentVector:
    """Sparse term-weight vector of an indexed document or a query."""

    document_id: str
    weights: Mapping[str, float]

    @property
    def length(self) -> float:
        return math.sqrt(sum(value * value for value in self.weights.values()))


@dataclass(frozen=True)
class Retrieval:
    """A document retrieved for a query together with its fused score."""

    document_id: str
    score: float
