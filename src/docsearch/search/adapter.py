"""Search adapter turning search-box input into ranked, highlighted hits.

Pipeline per query: parse phrases/terms, build the structured index query,
execute it, drop matches that fail phrase containment, then turn every
recorded match position into a hit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from docsearch.config import Settings
from docsearch.exceptions import ConfigError, IndexFault
from docsearch.index.base_index import BaseIndex, RawMatch
from docsearch.index.gateway import IndexGateway, IndexSource
from docsearch.search.documents import SearchCorpus, load_corpus_file
from docsearch.search.filters import filter_matches
from docsearch.search.hits import Hit, make_hit
from docsearch.search.query import build_query, parse_query
from docsearch.search.snippet import extract_snippet, format_keywords, format_title

logger = logging.getLogger(__name__)

DEFAULT_MAX_HITS = 8

# Fields are visited in this order for every match; it decides which hit a
# document contributes first and therefore which one survives deduplication.
MATCH_FIELD_ORDER = ("title", "content", "keywords")


@dataclass(slots=True)
class SearchOutcome:
    """Result of a search call: hits, or the fault that prevented searching."""

    hits: List[Hit] = field(default_factory=list)
    fault: Optional[IndexFault] = None

    @property
    def ok(self) -> bool:
        return self.fault is None


class SearchAdapter:
    """Runs search-box queries against a prebuilt index and its corpus.

    The corpus and index are loaded once and only read afterwards; all
    per-query state is local to the call, so one adapter can serve
    overlapping searches.
    """

    def __init__(
        self,
        corpus: SearchCorpus,
        index_source: Optional[IndexSource] = None,
        base_url: str = "/",
        max_hits: int = DEFAULT_MAX_HITS,
        *,
        gateway: Optional[BaseIndex] = None,
    ) -> None:
        if gateway is None:
            if index_source is None:
                raise ConfigError("An index source or gateway is required")
            gateway = IndexGateway(index_source)
        self.corpus = corpus
        self.gateway = gateway
        self.base_url = base_url
        self.max_hits = max_hits

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchAdapter":
        """Build an adapter from the configured corpus file and index directory."""
        icfg = settings.index
        if not icfg.corpus_path or not icfg.index_dir:
            raise ConfigError(
                "Search index is not configured. Set DOCSEARCH_INDEX__CORPUS_PATH "
                "and DOCSEARCH_INDEX__INDEX_DIR."
            )
        corpus = load_corpus_file(icfg.corpus_path)
        gateway = IndexGateway(icfg.index_dir, indexname=icfg.index_name)
        return cls(
            corpus,
            base_url=settings.search.base_url,
            max_hits=settings.search.max_hits,
            gateway=gateway,
        )

    def _hits_for_match(self, match: RawMatch, query: str, titled: Set[str]) -> List[Hit]:
        # filter_matches has already dropped refs missing from the corpus
        document = self.corpus[match.ref]
        hits: List[Hit] = []
        for fieldname in MATCH_FIELD_ORDER:
            for start, length in match.positions(fieldname):
                if fieldname == "content":
                    snippet = extract_snippet(document.content, start, length)
                    hits.append(make_hit(document, None, snippet.value, base_url=self.base_url))
                    continue
                # At most one title- or keyword-derived hit per document
                if match.ref in titled:
                    continue
                titled.add(match.ref)
                if fieldname == "title":
                    formatted = format_title(document, start, len(query))
                else:
                    formatted = format_keywords(document, start, len(query))
                hits.append(make_hit(document, formatted, base_url=self.base_url))
        return hits

    def run(self, query: str) -> List[Hit]:
        """Search synchronously. Raises IndexFault when the index fails."""
        if self.max_hits <= 0:
            return []
        parsed = parse_query(query)
        matches = self.gateway.execute(build_query(parsed.phrases, parsed.terms))
        matches = filter_matches(matches, self.corpus, parsed.required_phrases, self.max_hits)

        titled: Set[str] = set()
        hits: List[Hit] = []
        for match in matches:
            hits.extend(self._hits_for_match(match, query, titled))
        logger.debug("Query %r: %d matches, %d hits", query, len(matches), len(hits))
        return hits[: self.max_hits]

    async def search(self, query: str) -> List[Hit]:
        """Awaitable search; an IndexFault propagates to the awaiting caller."""
        return self.run(query)

    async def search_outcome(self, query: str) -> SearchOutcome:
        """Search and report index faults as a value instead of raising."""
        try:
            return SearchOutcome(hits=await self.search(query))
        except IndexFault as e:
            logger.error("Search unavailable: %s", e)
            return SearchOutcome(fault=e)
