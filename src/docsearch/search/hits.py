"""Hit records returned to the search UI.

The shape mirrors DocSearch hits so existing dropdown renderers can consume
them unchanged (see `Hit.to_dict`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urljoin

from docsearch.search.documents import Document

MATCH_LEVEL_FULL = "full"


@dataclass(frozen=True, slots=True)
class Hierarchy:
    lvl0: str
    lvl1: Optional[str] = None


@dataclass(frozen=True, slots=True)
class HighlightValue:
    value: str


@dataclass(frozen=True, slots=True)
class HighlightHierarchy:
    lvl0: HighlightValue
    lvl1: Optional[HighlightValue] = None


@dataclass(frozen=True, slots=True)
class SnippetBlock:
    value: str
    match_level: str = MATCH_LEVEL_FULL


@dataclass(frozen=True, slots=True)
class Hit:
    """A single UI-ready search result."""

    hierarchy: Hierarchy
    url: str
    version: Optional[str]
    highlight: HighlightHierarchy
    snippet: Optional[SnippetBlock] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the DocSearch hit JSON shape."""
        highlight: Dict[str, Any] = {
            "lvl0": {"value": self.highlight.lvl0.value},
            "lvl1": {"value": self.highlight.lvl1.value} if self.highlight.lvl1 else None,
        }
        return {
            "hierarchy": {"lvl0": self.hierarchy.lvl0, "lvl1": self.hierarchy.lvl1},
            "url": self.url,
            "version": self.version,
            "_snippetResult": (
                {"content": {"value": self.snippet.value, "matchLevel": self.snippet.match_level}}
                if self.snippet
                else None
            ),
            "_highlightResult": {"hierarchy": highlight},
        }


def resolve_url(base_url: str, url: str) -> str:
    """Join a relative document URL onto the site base URL."""
    if not url:
        return base_url
    return urljoin(base_url or "/", url)


def make_hit(
    document: Document,
    formatted_title: Optional[str] = None,
    formatted_content: Optional[str] = None,
    *,
    base_url: str = "/",
) -> Hit:
    """Assemble a hit from a document and optional highlighted title/content."""
    page_title = document.page_title or document.title
    title_value = formatted_title or document.title
    if document.is_page:
        hierarchy = Hierarchy(lvl0=page_title)
        highlight = HighlightHierarchy(lvl0=HighlightValue(title_value))
    else:
        hierarchy = Hierarchy(lvl0=page_title, lvl1=document.title)
        highlight = HighlightHierarchy(
            lvl0=HighlightValue(page_title),
            lvl1=HighlightValue(title_value),
        )
    snippet = SnippetBlock(formatted_content) if formatted_content is not None else None
    return Hit(
        hierarchy=hierarchy,
        url=resolve_url(base_url, document.url),
        version=document.version,
        highlight=highlight,
        snippet=snippet,
    )
