"""End-to-end ranking pipeline tests."""

from __future__ import annotations

import math

from linkrank.engine.index import compute_page_ranks, graph_summary, publish_page_ranks
from linkrank.engine.retrieval import RankedRetriever
from linkrank.engine.store import corpus_documents, read_ranks
from linkrank.engine.types import DocumentVector


def test_compute_page_ranks_prunes_before_ranking(crawl, engine_config):
    graph = crawl({"a": ["b", "never-fetched"], "b": ["a"], "c": ["a", "blocked"]})

    run = compute_page_ranks(graph, engine_config)

    assert set(run.ranks) == {"P1.html", "P2.html", "P3.html"}
    assert "never-fetched" not in run.graph
    assert math.isclose(sum(run.ranks.values()), 1.0, abs_tol=1e-9)
    assert run.ranks["P1.html"] > run.ranks["P2.html"] > run.ranks["P3.html"]
    assert run.path is None


def test_published_ranks_feed_the_retriever(tmp_path, crawl, engine_config):
    graph = crawl({"a": ["b"], "b": ["a", "c"], "c": ["a"]})
    for name in ("P1.html", "P2.html", "P3.html"):
        (tmp_path / name).write_text("<html></html>", encoding="utf-8")

    run = publish_page_ranks(graph, tmp_path, engine_config)

    assert run.path == tmp_path / "page_ranks.txt"
    assert read_ranks(tmp_path) == run.ranks
    assert [path.name for path in corpus_documents(tmp_path)] == ["P1.html", "P2.html", "P3.html"]

    retriever = RankedRetriever.from_rank_file(tmp_path, weight=1.0)
    query = DocumentVector("query", {"term": 1.0})
    results = retriever.retrieve(query, [DocumentVector(name, {"term": 1.0}) for name in run.ranks])
    assert results[0].document_id == max(run.ranks, key=run.ranks.get)


def test_publish_uses_configured_file_name(tmp_path, crawl, engine_config):
    engine_config.raw["rank_file_name"] = "authority.txt"

    run = publish_page_ranks(crawl({"a": []}), tmp_path, engine_config)

    assert run.path == tmp_path / "authority.txt"
    assert run.ranks == {"P1.html": 1.0}


def test_graph_summary_counts_frontier_and_orphans(crawl):
    graph = crawl({"a": ["b", "x"], "b": ["y"], "c": []})

    summary = graph_summary(graph)

    assert summary["nodes"] == 5
    assert summary["indexed"] == 3
    assert summary["frontier"] == 2
    assert summary["edges"] == 3
    assert math.isclose(summary["dangling_rate"], 1 / 3)
    assert math.isclose(summary["orphan_rate"], 2 / 3)


def test_graph_summary_of_empty_graph(crawl):
    summary = graph_summary(crawl({}))

    assert summary["nodes"] == 0
    assert summary["orphan_rate"] == 0.0
