"""Persistence of rank tables as flat ``<document id> <score>`` text files."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Dict, List, Mapping

from .exceptions import RankFileError
from .types import RankTable

logger = logging.getLogger(__name__)

RANK_FILE_NAME = "page_ranks.txt"


def rank_file_path(location: str | Path, file_name: str = RANK_FILE_NAME) -> Path:
    """Resolve ``location`` to a rank file path.

    A directory resolves to ``file_name`` inside it; anything else is taken
    to be the file itself.
    """

    path = Path(location)
    if path.is_dir():
        return path / file_name
    return path


def write_ranks(table: Mapping[str, float], destination: str | Path, file_name: str = RANK_FILE_NAME) -> Path:
    """Write ``table`` to ``destination``, replacing any previous file."""

    path = rank_file_path(destination, file_name)
    try:
        with path.open("w", encoding="utf-8", newline="\n") as stream:
            for document_id, score in table.items():
                stream.write(f"{document_id} {float(score)!r}\n")
    except OSError as exc:
        raise RankFileError(f"could not write rank file {path}: {exc}") from exc

    logger.info("Wrote %d page ranks to %s", len(table), path)
    return path


def read_ranks(source: str | Path, file_name: str = RANK_FILE_NAME) -> RankTable:
    """Parse a rank file written by :func:`write_ranks`.

    Any malformed line aborts the read with :class:`RankFileError`.
    """

    path = rank_file_path(source, file_name)
    try:
        with path.open("r", encoding="utf-8") as stream:
            lines = stream.read().splitlines()
    except OSError as exc:
        raise RankFileError(f"could not read rank file {path}: {exc}") from exc

    table: Dict[str, float] = {}
    for number, line in enumerate(lines, start=1):
        document_id, score = _parse_line(line, path, number)
        if document_id in table:
            raise RankFileError(f"{path}:{number}: duplicate entry for {document_id}")
        table[document_id] = score

    logger.info("Loaded %d page ranks from %s", len(table), path)
    return table


def _parse_line(line: str, path: Path, number: int) -> tuple[str, float]:
    fields = line.split(" ")
    if len(fields) != 2 or not fields[0]:
        raise RankFileError(f"{path}:{number}: expected '<document id> <score>', got {line!r}")
    document_id, raw_score = fields
    try:
        score = float(raw_score)
    except ValueError as exc:
        raise RankFileError(f"{path}:{number}: score {raw_score!r} is not a number") from exc
    if not math.isfinite(score) or score < 0.0:
        raise RankFileError(f"{path}:{number}: score {raw_score!r} must be a finite non-negative number")
    return document_id, score


def is_rank_file(path: str | Path, file_name: str = RANK_FILE_NAME) -> bool:
    return Path(path).name == file_name


def corpus_documents(directory: str | Path, file_name: str = RANK_FILE_NAME) -> List[Path]:
    """List the files of a crawl directory that should be tokenized.

    The rank file lives beside the crawled pages and is left out.
    """

    root = Path(directory)
    return sorted(
        entry for entry in root.iterdir() if entry.is_file() and not is_rank_file(entry, file_name)
    )
