"""Command line tests."""

from __future__ import annotations

import pytest

from linkrank.cli import main
from linkrank.engine.store import read_ranks
from linkrank_tool import settings


def _crawl_log(tmp_path):
    path = tmp_path / "crawl.txt"
    path.write_text("a b\nb c\nc a\n", encoding="utf-8")
    return path


def test_rank_writes_rank_file(tmp_path, capsys):
    out = tmp_path / "pages"
    out.mkdir()

    status = main(["rank", str(_crawl_log(tmp_path)), "--out", str(out), "--max-count", "100"])

    assert status == 0
    ranks = read_ranks(out)
    assert set(ranks) == {"P001.html", "P002.html", "P003.html"}
    assert capsys.readouterr().out.strip().endswith("page_ranks.txt")


def test_rank_can_print_pruned_graph(tmp_path, capsys):
    out = tmp_path / "pages"
    out.mkdir()

    main(["rank", str(_crawl_log(tmp_path)), "--out", str(out), "--iterations", "3", "--show-graph"])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Graph Structure"
    assert "a->[b]" in lines


def test_scores_lists_best_documents_first(tmp_path, capsys):
    (tmp_path / "page_ranks.txt").write_text("P1.html 0.2\nP2.html 0.5\nP3.html 0.3\n", encoding="utf-8")

    status = main(["scores", str(tmp_path), "--top", "2"])

    assert status == 0
    assert capsys.readouterr().out.splitlines() == ["P2.html 0.5", "P3.html 0.3"]


def test_print_shows_graph_file(tmp_path, capsys):
    status = main(["print", str(_crawl_log(tmp_path))])

    assert status == 0
    assert capsys.readouterr().out.splitlines() == ["a->[b]", "b->[c]", "c->[a]"]


def test_errors_exit_with_status_one(tmp_path):
    status = main(["scores", str(tmp_path)])

    assert status == 1


def test_invalid_damping_is_reported(tmp_path):
    out = tmp_path / "pages"
    out.mkdir()

    assert main(["rank", str(_crawl_log(tmp_path)), "--out", str(out), "--damping", "2"]) == 1


def test_unknown_log_level_is_a_usage_error(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--log-level", "bogus", "scores", str(tmp_path)])

    assert excinfo.value.code == 2
    assert "--log-level" in capsys.readouterr().err


def test_log_level_is_case_insensitive(tmp_path):
    (tmp_path / "page_ranks.txt").write_text("P1.html 1.0\n", encoding="utf-8")

    assert main(["--log-level", "warning", "scores", str(tmp_path)]) == 0


def test_bad_logging_setup_exits_with_status_one(tmp_path, monkeypatch):
    monkeypatch.setitem(settings.LOGGING["root"], "level", "BOGUS")
    monkeypatch.setitem(settings.LOGGING["loggers"]["linkrank"], "level", "BOGUS")

    assert main(["scores", str(tmp_path)]) == 1
