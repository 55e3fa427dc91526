import io
import sys

import pytest

from tagtree import __main__ as cli

HTML = '<div><p class="a"><span></span></p></div>'


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(HTML)
    return str(path)


def test_selector_prints_matching_tokens(page, capsys):
    cli.main([page, "--selector", "p.a span"])
    assert capsys.readouterr().out == "<span>\n"


def test_without_selector_lists_every_element(page, capsys):
    cli.main([page])
    assert capsys.readouterr().out == '<div>\n<p class="a">\n<span>\n'


def test_count(page, capsys):
    cli.main([page, "--selector", "div *", "--count"])
    assert capsys.readouterr().out == "3\n"


def test_first(page, capsys):
    cli.main([page, "--selector", "div *", "--first"])
    assert capsys.readouterr().out == "<div>\n"


def test_unique(tmp_path, capsys):
    path = tmp_path / "nested.html"
    path.write_text("<div><div><b></b></div></div>")
    cli.main([str(path), "--selector", "div b", "--count"])
    cli.main([str(path), "--selector", "div b", "--count", "--unique"])
    assert capsys.readouterr().out == "2\n1\n"


def test_no_matches_exits_1(page):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([page, "--selector", "table"])
    assert excinfo.value.code == 1


def test_bad_selector_exits_2(page, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([page, "--selector", "div > p"])
    assert excinfo.value.code == 2
    assert "combinator" in capsys.readouterr().err


def test_unbalanced_markup_exits_3(tmp_path, capsys):
    path = tmp_path / "bad.html"
    path.write_text("<p></p></p>")
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(path)])
    assert excinfo.value.code == 3
    assert "</p>" in capsys.readouterr().err


def test_missing_path_exits_1(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 1
    assert "usage" in capsys.readouterr().err


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(HTML))
    cli.main(["-", "--selector", "span"])
    assert capsys.readouterr().out == "<span>\n"


def test_fetches_urls(monkeypatch, capsys):
    requested = []

    async def fake_load(url):
        requested.append(url)
        return HTML

    monkeypatch.setattr(cli, "load", fake_load)
    cli.main(["https://example.com/", "--selector", "p"])
    assert requested == ["https://example.com/"]
    assert capsys.readouterr().out == '<p class="a">\n'
