"""Pruning of frontier pages from the crawl graph."""

from __future__ import annotations

from linkrank.engine.graph import LinkGraph
from linkrank.engine.prune import prune


def test_prune_keeps_only_indexed_pages_and_their_edges(crawl, assert_symmetric):
    graph = crawl(
        {
            "a": ["b", "frontier-1"],
            "b": ["a", "c", "frontier-2"],
            "c": ["frontier-1"],
        }
    )
    assert len(graph) == 5

    pruned = prune(graph)

    assert sorted(node.name for node in pruned) == ["a", "b", "c"]
    for node in pruned:
        assert node.indexed
        for target in node.out_edges:
            assert pruned.get_node(target.name) is target
        for source in node.in_edges:
            assert pruned.get_node(source.name) is source
    assert [target.name for target in pruned.get_node("b").out_edges] == ["a", "c"]
    assert pruned.get_node("c").out_edges == []
    assert_symmetric(pruned)


def test_prune_copies_document_ids(crawl):
    pruned = prune(crawl({"a": ["b"], "b": []}))

    assert pruned.get_node("a").document_id == "P1.html"
    assert pruned.get_node("b").document_id == "P2.html"


def test_prune_does_not_modify_the_crawl_graph(crawl):
    graph = crawl({"a": ["b", "x"], "b": []})

    pruned = prune(graph)

    assert len(graph) == 3
    assert graph.get_node("x") is not None
    assert graph.get_node("a").out_degree == 2
    assert pruned.get_node("a") is not graph.get_node("a")
    assert pruned.get_node("a").out_degree == 1


def test_prune_collapses_duplicate_edges(assert_symmetric):
    graph = LinkGraph()
    graph.add_edge("a", "b")
    graph.add_edge("a", "b")
    for name, document_id in (("a", "P1.html"), ("b", "P2.html")):
        node = graph.get_node(name)
        node.indexed = True
        node.document_id = document_id

    pruned = prune(graph)

    assert pruned.get_node("a").out_degree == 1
    assert len(pruned.get_node("b").in_edges) == 1
    assert_symmetric(pruned)


def test_prune_of_unindexed_graph_is_empty():
    graph = LinkGraph()
    graph.add_edge("a", "b")

    assert len(prune(graph)) == 0
