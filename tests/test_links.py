from pathlib import Path

from KnowledgeMark.links import KnowledgeBase, LinkResolver, extract_declared_url


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_extract_declared_url():
    assert extract_declared_url("<!-- url: graph-theory -->") == "graph-theory"
    assert extract_declared_url("<!-- url: spaced   -->  ") == "spaced"
    assert extract_declared_url("<!-- url:  -->") is None
    assert extract_declared_url("<!-- note: x -->") is None
    assert extract_declared_url("# Heading") is None
    assert extract_declared_url("<!-- url: unterminated") is None


def test_resolve_link_walks_subdirectories(tmp_path: Path):
    target = _write(tmp_path / "math" / "graphs" / "Graph.md", "<!-- url: graph -->\n")
    _write(tmp_path / "Graph.txt", "ignored")
    store = KnowledgeBase(tmp_path)
    assert store.resolve_link("Graph") == target
    assert store.resolve_link("Missing") is None


def test_resolve_link_without_root():
    assert KnowledgeBase(None).resolve_link("Anything") is None


def test_read_first_line(tmp_path: Path):
    path = _write(tmp_path / "note.md", "<!-- url: n -->\r\nbody\n")
    store = KnowledgeBase(tmp_path)
    assert store.read_first_line(path) == "<!-- url: n -->"
    assert store.read_first_line(tmp_path / "gone.md") is None


def test_resolver_builds_article_href(tmp_path: Path):
    _write(tmp_path / "Graph.md", "<!-- url: graph -->\n# Graph\n")
    resolver = LinkResolver(KnowledgeBase(tmp_path))
    assert resolver.resolve("Graph") == "article/graph"


def test_resolver_custom_prefix_and_extension(tmp_path: Path):
    _write(tmp_path / "Graph.markdown", "<!-- url: graph -->\n")
    resolver = LinkResolver(KnowledgeBase(tmp_path, extension=".markdown"), prefix="/wiki/")
    assert resolver.resolve("Graph") == "/wiki/graph"


def test_resolver_degrades_without_declared_url(tmp_path: Path):
    _write(tmp_path / "Plain.md", "# No url here\n")
    _write(tmp_path / "Empty.md", "")
    resolver = LinkResolver(KnowledgeBase(tmp_path))
    assert resolver.resolve("Plain") is None
    assert resolver.resolve("Empty") is None
    assert resolver.resolve("Nowhere") is None
