"""Error types raised by the link ranking engine."""

from __future__ import annotations


class LinkRankError(Exception):
    """Base class for every error raised by the engine."""


class ConfigurationError(LinkRankError):
    """Raised when engine settings are out of range or unusable."""


class CursorError(LinkRankError):
    """Raised when the graph cursor is used out of sequence."""


class GraphInvariantError(LinkRankError):
    """Raised when a graph handed to the rank engine breaks its structure."""


class RankFileError(LinkRankError):
    """Raised when a rank file cannot be written, read or parsed."""


class MissingRankError(LinkRankError):
    """Raised when a retrieved document has no entry in the rank table."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"no page rank recorded for document {document_id!r}")
        self.document_id = document_id
