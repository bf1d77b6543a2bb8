"""Search documents and the corpus that index refs resolve against.

The corpus is produced by the documentation build and loaded once; the
search pipeline only reads it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from docsearch.exceptions import ConfigError, CorpusLookupFault


class DocumentType(IntEnum):
    """Kind of search document; the serialized corpus uses the integer codes."""

    PAGE = 0
    SECTION = 1


@dataclass(frozen=True, slots=True)
class Document:
    """A searchable page or page section.

    Attributes
    ----------
    title: str
        Page title for pages, section heading for sections.
    content: str
        Plain text body used for snippets.
    url: str
        Link target, possibly relative to the site base URL.
    page_title: str | None
        Title of the enclosing page (sections only).
    keywords: str | None
        Comma-separated keywords from the page front matter.
    version: str | None
        Documentation version the document belongs to.
    type: DocumentType
        Page or section.
    """

    title: str
    content: str
    url: str
    page_title: Optional[str] = None
    keywords: Optional[str] = None
    version: Optional[str] = None
    type: DocumentType = DocumentType.PAGE

    @property
    def is_page(self) -> bool:
        return self.type == DocumentType.PAGE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Document":
        """Build a document from a serialized record (camelCase keys accepted)."""
        page_title = data.get("pageTitle", data.get("page_title"))
        return cls(
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            url=str(data.get("url") or ""),
            page_title=page_title or None,
            keywords=data.get("keywords") or None,
            version=data.get("version") or None,
            type=DocumentType(int(data.get("type") or 0)),
        )


SearchCorpus = Mapping[str, Document]


def load_corpus(data: Union[list, Mapping[str, Any]]) -> Dict[str, Document]:
    """Build a corpus from serialized documents.

    A list is keyed by position (the refs the index was built with); a mapping
    keeps its own keys. Refs are always strings.
    """
    if isinstance(data, Mapping):
        items = data.items()
    elif isinstance(data, list):
        items = enumerate(data)
    else:
        raise ConfigError(f"Unsupported corpus payload: {type(data).__name__}")
    corpus: Dict[str, Document] = {}
    for ref, record in items:
        if isinstance(record, Document):
            corpus[str(ref)] = record
        else:
            corpus[str(ref)] = Document.from_dict(record)
    return corpus


def load_corpus_file(path: Union[str, Path]) -> Dict[str, Document]:
    """Read a JSON corpus file produced by the documentation build."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read search corpus from {path}: {e}") from e
    return load_corpus(payload)


def lookup(corpus: SearchCorpus, ref: str) -> Document:
    """Resolve an index ref, raising CorpusLookupFault when it is unknown."""
    try:
        return corpus[ref]
    except KeyError:
        raise CorpusLookupFault(ref) from None
