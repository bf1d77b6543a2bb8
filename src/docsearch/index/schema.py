"""Whoosh schema shared between the documentation build and the gateway.

The build step writes one Whoosh document per search document, with `ref`
holding the corpus key. Searchable fields must record character offsets so
matches can be highlighted in the original text. Fields carry no boosts; ranking
is BM25F over the stored terms as indexed.
"""

from __future__ import annotations

from whoosh.fields import ID, TEXT, Schema

from docsearch.exceptions import IndexFault
from docsearch.index.analysis import make_analyzer

REF_FIELD = "ref"
SEARCH_FIELDS = ("title", "content", "keywords")


def make_schema() -> Schema:
    analyzer = make_analyzer()
    return Schema(
        ref=ID(stored=True, unique=True),
        title=TEXT(analyzer=analyzer, chars=True),
        content=TEXT(analyzer=analyzer, chars=True),
        keywords=TEXT(analyzer=analyzer, chars=True),
    )


def check_schema(schema: Schema) -> None:
    """Raise IndexFault unless the schema carries the ref and search fields."""
    if REF_FIELD not in schema:
        raise IndexFault(f"index schema has no {REF_FIELD!r} field")
    for name in SEARCH_FIELDS:
        if name not in schema:
            raise IndexFault(f"index schema has no {name!r} field")
        if not schema[name].format.supports("characters"):
            raise IndexFault(f"index field {name!r} does not store character offsets")
