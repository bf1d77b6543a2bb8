"""Whoosh-backed index gateway.

Opens a prebuilt Whoosh index once and answers structured queries with raw
matches: the document ref, its BM25F score, and the character position of
each matched term in the first searchable field that contains it.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Tuple, Union

from whoosh import index as whoosh_index
from whoosh import scoring
from whoosh.index import Index
from whoosh.query import NullQuery, Or, Prefix, Query, Term

from docsearch.exceptions import IndexFault
from docsearch.index.base_index import BaseIndex, Position, RawMatch
from docsearch.index.schema import REF_FIELD, SEARCH_FIELDS, check_schema
from docsearch.search.query import ExactBoosted, StructuredQuery, TrailingWildcard

logger = logging.getLogger(__name__)

IndexSource = Union[str, "os.PathLike[str]", Index]

# (fieldname, indexed term) pairs whose postings supply match positions
_TermKey = Tuple[str, str]


def open_index(source: IndexSource, *, indexname: str = "MAIN") -> Index:
    """Open a Whoosh index from a directory, or pass through an open one."""
    if isinstance(source, Index):
        ix = source
    else:
        try:
            ix = whoosh_index.open_dir(os.fspath(source), indexname=indexname)
        except Exception as e:
            logger.error("Failed to open search index at %s", source, exc_info=True)
            raise IndexFault(f"Cannot open search index at {source}: {e}") from e
    check_schema(ix.schema)
    return ix


class IndexGateway(BaseIndex):
    """Executes structured queries against one loaded Whoosh index."""

    def __init__(self, source: IndexSource, *, indexname: str = "MAIN") -> None:
        self._index = open_index(source, indexname=indexname)
        self._schema = self._index.schema
        logger.info("Loaded search index with %d documents", self._index.doc_count())

    def _analyze(self, fieldname: str, token: str) -> List[str]:
        return list(self._schema[fieldname].process_text(token, mode="query"))

    def _plan(self, query: StructuredQuery) -> Tuple[Query, List[Tuple[str, str, bool]]]:
        """Translate clauses into a Whoosh query plus the terms to locate.

        Returns the query and a list of (fieldname, text, is_prefix) entries in
        token order. Tokens the analyzer drops entirely (stop words) take part
        in neither clause.
        """
        subqueries: List[Query] = []
        lookups: List[Tuple[str, str, bool]] = []
        for clause in query.clauses:
            for token in clause.tokens:
                for fieldname in SEARCH_FIELDS:
                    analyzed = self._analyze(fieldname, token)
                    if not analyzed:
                        continue
                    if isinstance(clause, ExactBoosted):
                        for text in analyzed:
                            subqueries.append(Term(fieldname, text, boost=clause.weight))
                            lookups.append((fieldname, text, False))
                    elif isinstance(clause, TrailingWildcard):
                        subqueries.append(Prefix(fieldname, token))
                        lookups.append((fieldname, token, True))
        if not subqueries:
            return NullQuery, []
        return Or(subqueries), lookups

    def _expand(self, reader, lookups: List[Tuple[str, str, bool]]) -> List[_TermKey]:
        """Resolve lookups to indexed terms, keeping first-seen order."""
        seen = set()
        keys: List[_TermKey] = []
        for fieldname, text, is_prefix in lookups:
            if is_prefix:
                candidates = [
                    t.decode("utf-8") if isinstance(t, bytes) else t
                    for t in reader.expand_prefix(fieldname, text)
                ]
            elif (fieldname, text) in reader:
                candidates = [text]
            else:
                candidates = []
            for term in candidates:
                key = (fieldname, term)
                if key not in seen:
                    seen.add(key)
                    keys.append(key)
        return keys

    def _positions(
        self, reader, docnums: set, keys: List[_TermKey]
    ) -> Dict[int, Dict[str, List[Position]]]:
        """Collect one character span per matched term per document.

        A term found in several fields of a document is reported only for the
        first of them in SEARCH_FIELDS order, at its first occurrence there.
        """
        targets = sorted(docnums)
        # docnum -> term -> fieldname -> first span, terms in first-seen order
        spans_by_term: Dict[int, Dict[str, Dict[str, Position]]] = {}
        for fieldname, term in keys:
            matcher = reader.postings(fieldname, term)
            for docnum in targets:
                if not matcher.is_active():
                    break
                if matcher.id() < docnum:
                    matcher.skip_to(docnum)
                    if not matcher.is_active():
                        break
                if matcher.id() != docnum:
                    continue
                spans = matcher.spans()
                # Postings without spans count as no match for the field
                if spans and spans[0].startchar is not None:
                    span = spans[0]
                    per_field = spans_by_term.setdefault(docnum, {}).setdefault(term, {})
                    per_field.setdefault(fieldname, (span.startchar, span.endchar - span.startchar))

        found: Dict[int, Dict[str, List[Position]]] = {}
        for docnum, terms in spans_by_term.items():
            for per_field in terms.values():
                fieldname = next(name for name in SEARCH_FIELDS if name in per_field)
                found.setdefault(docnum, {}).setdefault(fieldname, []).append(per_field[fieldname])
        return found

    def execute(self, query: StructuredQuery) -> List[RawMatch]:
        """Run the query and return matches ordered by score, best first."""
        if query.matches_nothing:
            return []
        try:
            whoosh_query, lookups = self._plan(query)
            if whoosh_query is NullQuery:
                return []
            with self._index.searcher(weighting=scoring.BM25F()) as searcher:
                results = searcher.search(whoosh_query, limit=None)
                ranked = [(hit.docnum, hit[REF_FIELD], float(hit.score or 0.0)) for hit in results]
                reader = searcher.reader()
                keys = self._expand(reader, lookups)
                positions = self._positions(reader, {d for d, _, _ in ranked}, keys)
        except Exception as e:
            logger.error("Search index query failed", exc_info=True)
            raise IndexFault(f"Search index query failed: {e}") from e

        logger.debug("Index returned %d matches for %d clauses", len(ranked), len(query.clauses))
        out: List[RawMatch] = []
        for docnum, ref, score in ranked:
            fields = positions.get(docnum, {})
            out.append(
                RawMatch(
                    ref=str(ref),
                    score=score,
                    fields={name: tuple(fields[name]) for name in SEARCH_FIELDS if name in fields},
                )
            )
        return out
