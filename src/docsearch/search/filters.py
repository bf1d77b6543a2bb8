"""Literal phrase filtering of raw index matches.

The index has no phrase operator, so quoted phrases only influence ranking
through their tokens. Correctness is enforced here by checking that the
document text literally contains a phrase.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from docsearch.exceptions import CorpusLookupFault
from docsearch.index.base_index import RawMatch
from docsearch.search.documents import Document, SearchCorpus, lookup

logger = logging.getLogger(__name__)


def contains_phrase(document: Document, phrase: str) -> bool:
    """True if the phrase occurs in the content, title or keywords (any case)."""
    needle = phrase.lower()
    return (
        needle in (document.content or "").lower()
        or needle in (document.title or "").lower()
        or needle in (document.keywords or "").lower()
    )


def filter_matches(
    matches: Iterable[RawMatch],
    corpus: SearchCorpus,
    phrases: Sequence[str],
    max_hits: int,
) -> List[RawMatch]:
    """Keep matches whose document contains any required phrase, up to max_hits.

    Matches referencing documents missing from the corpus are dropped.
    """
    if max_hits <= 0:
        return []
    kept: List[RawMatch] = []
    for match in matches:
        try:
            document = lookup(corpus, match.ref)
        except CorpusLookupFault as e:
            logger.warning("Skipping index match: %s", e)
            continue
        if phrases and not any(contains_phrase(document, p) for p in phrases):
            continue
        kept.append(match)
        if len(kept) >= max_hits:
            break
    return kept
