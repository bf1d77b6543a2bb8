"""Query parsing and structured query construction.

A raw search-box string is split into quoted phrases and free terms. Phrases
are enforced later by literal containment; for ranking, their tokens are sent
to the index together with the free terms as two clauses: an exact match with
a high boost, and a trailing-wildcard (prefix) match at default weight.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from docsearch.index.analysis import tokenize

# Same quote character at both ends; backslash escapes are allowed inside.
_PHRASE_RE = re.compile(r"([\"'])((?:\\.|[^\\\n])*?)\1")

EXACT_MATCH_BOOST = 10.0


@dataclass(frozen=True, slots=True)
class ParsedQuery:
    """Quoted phrases and free tokens of a query, in input order."""

    phrases: Tuple[str, ...] = ()
    terms: Tuple[str, ...] = ()

    @property
    def required_phrases(self) -> Tuple[str, ...]:
        """Phrases lower-cased for case-insensitive containment checks."""
        return tuple(p.lower() for p in self.phrases)


@dataclass(frozen=True, slots=True)
class ExactBoosted:
    """Match the tokens exactly, weighted above prefix matches."""

    tokens: Tuple[str, ...]
    weight: float = EXACT_MATCH_BOOST


@dataclass(frozen=True, slots=True)
class TrailingWildcard:
    """Match the tokens as prefixes at default weight."""

    tokens: Tuple[str, ...]


Clause = Union[ExactBoosted, TrailingWildcard]


@dataclass(frozen=True, slots=True)
class StructuredQuery:
    """Declarative index request: clauses are OR-combined across documents."""

    clauses: Tuple[Clause, ...] = ()

    @property
    def matches_nothing(self) -> bool:
        return not any(clause.tokens for clause in self.clauses)


def parse_query(text: str) -> ParsedQuery:
    """Split raw input into quoted phrases and free terms.

    Text before, between and after quoted spans is tokenized in order. An
    unterminated quote is not a phrase; it is tokenized like any other text.
    """
    phrases = []
    terms = []
    last = 0
    for match in _PHRASE_RE.finditer(text):
        terms.extend(tokenize(text[last : match.start()].strip()))
        phrases.append(match.group(2))
        last = match.end()
    terms.extend(tokenize(text[last:].strip()))

    if not phrases and not terms:
        terms = tokenize(text)
    return ParsedQuery(phrases=tuple(phrases), terms=tuple(terms))


def build_query(phrases: Iterable[str], terms: Iterable[str]) -> StructuredQuery:
    """Build the exact-boosted and trailing-wildcard clauses over all tokens.

    Tokens are the tokens of every phrase (in phrase order) followed by the
    free terms. With no tokens the query has no clauses and matches nothing.
    """
    tokens = [token for phrase in phrases for token in tokenize(phrase)]
    tokens.extend(terms)
    if not tokens:
        return StructuredQuery()
    all_tokens = tuple(tokens)
    return StructuredQuery(clauses=(ExactBoosted(all_tokens), TrailingWildcard(all_tokens)))
