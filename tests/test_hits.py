from docsearch.search.documents import Document, DocumentType
from docsearch.search.hits import make_hit, resolve_url


def test_page_hit_with_title_highlight() -> None:
    doc = Document(title="Guide", content="text", url="/guide", version="1.0")
    hit = make_hit(doc, "<b>Guide</b>")
    assert hit.hierarchy.lvl0 == "Guide"
    assert hit.hierarchy.lvl1 is None
    assert hit.highlight.lvl0.value == "<b>Guide</b>"
    assert hit.highlight.lvl1 is None
    assert hit.snippet is None
    assert hit.version == "1.0"


def test_section_hit_with_snippet() -> None:
    doc = Document(
        title="Roasting",
        page_title="Cooking Basics",
        content="Roast it.",
        url="/basics#roasting",
        type=DocumentType.SECTION,
    )
    hit = make_hit(doc, None, "... snippet ...")
    assert hit.hierarchy.lvl0 == "Cooking Basics"
    assert hit.hierarchy.lvl1 == "Roasting"
    assert hit.highlight.lvl0.value == "Cooking Basics"
    assert hit.highlight.lvl1 is not None
    assert hit.highlight.lvl1.value == "Roasting"
    assert hit.snippet is not None
    assert hit.snippet.value == "... snippet ..."
    assert hit.snippet.match_level == "full"


def test_section_without_page_title_falls_back_to_title() -> None:
    doc = Document(title="Orphan", content="", url="/x", type=DocumentType.SECTION)
    hit = make_hit(doc)
    assert hit.hierarchy.lvl0 == "Orphan"
    assert hit.highlight.lvl0.value == "Orphan"


def test_to_dict_uses_docsearch_shape() -> None:
    doc = Document(title="Guide", content="text", url="/guide")
    payload = make_hit(doc, None, "snip").to_dict()
    assert payload == {
        "hierarchy": {"lvl0": "Guide", "lvl1": None},
        "url": "/guide",
        "version": None,
        "_snippetResult": {"content": {"value": "snip", "matchLevel": "full"}},
        "_highlightResult": {"hierarchy": {"lvl0": {"value": "Guide"}, "lvl1": None}},
    }


def test_resolve_url() -> None:
    assert resolve_url("/", "/guide") == "/guide"
    assert resolve_url("/docs/", "guide/intro") == "/docs/guide/intro"
    assert resolve_url("/docs/", "https://example.com/a") == "https://example.com/a"
    assert resolve_url("/docs/", "") == "/docs/"
