"""Command line entry point: rank an offline crawl and inspect rank files."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Sequence

from linkrank_tool import settings

from . import services
from .engine.builder import CrawlGraphBuilder
from .engine.config import load_config
from .engine.exceptions import LinkRankError
from .engine.index import graph_summary, publish_page_ranks
from .engine.store import read_ranks

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linkrank", description="PageRank for crawled document collections")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="override LINKRANK_LOG_LEVEL",
    )
    parser.add_argument("--config", default=None, help="YAML engine configuration (default: LINKRANK_CONFIG)")
    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("print", help="print a graph file as adjacency lists")
    show.add_argument("graph", help="file of lines '<node> <target> ...'")

    rank = commands.add_parser("rank", help="replay a crawl log, rank it and write the rank file")
    rank.add_argument("graph", help="crawl log: one indexed page per line followed by its links")
    rank.add_argument("--out", required=True, help="directory receiving the rank file")
    rank.add_argument("--damping", type=float, default=None, help="teleport probability (alpha)")
    rank.add_argument("--iterations", type=int, default=None, help="number of power iterations")
    rank.add_argument("--max-count", type=int, default=None, help="maximum number of indexed pages")
    rank.add_argument("--show-graph", action="store_true", help="print the pruned graph structure")

    scores = commands.add_parser("scores", help="list the entries of a rank file")
    scores.add_argument("location", help="rank file or the directory holding it")
    scores.add_argument("--top", type=int, default=None, help="only show the best N documents")
    return parser


def _rank(args: argparse.Namespace) -> int:
    config = settings.engine_config(args.config)
    overrides = {
        key: value
        for key, value in (
            ("damping", args.damping),
            ("iterations", args.iterations),
            ("max_documents", args.max_count),
        )
        if value is not None
    }
    if overrides:
        config = load_config(None, {**config.raw, **overrides})

    builder = CrawlGraphBuilder(exclude_self_loops=config.exclude_self_loops)
    services.replay_crawl_log(args.graph, builder, max_count=config.max_documents)
    logger.info("Crawl graph: %s", graph_summary(builder.graph))

    run = publish_page_ranks(builder.graph, args.out, config)
    if args.show_graph:
        print("Graph Structure")
        run.graph.print()
    print(run.path)
    return 0


def _scores(args: argparse.Namespace) -> int:
    config = settings.engine_config(args.config)
    ranks = read_ranks(args.location, config.rank_file_name)
    ordered = sorted(ranks.items(), key=lambda item: (-item[1], item[0]))
    if args.top is not None:
        ordered = ordered[: args.top]
    for document_id, score in ordered:
        print(f"{document_id} {score!r}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings.configure_logging(args.log_level)
        if args.command == "print":
            services.load_graph(args.graph).print()
            return 0
        if args.command == "rank":
            return _rank(args)
        return _scores(args)
    except (LinkRankError, OSError) as exc:
        logger.error("%s", exc)
        return 1


def run(argv: List[str] | None = None) -> None:
    sys.exit(main(argv))


if __name__ == "__main__":
    run()
