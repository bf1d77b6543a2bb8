"""Custom exception hierarchy for docsearch.

These exceptions allow callers to discriminate error categories
and handle them appropriately while preserving the original context.
"""

from __future__ import annotations


class DocSearchError(Exception):
    """Base class for all docsearch exceptions."""


class ConfigError(DocSearchError):
    """Raised when configuration loading or validation fails."""


class SearchError(DocSearchError):
    """Raised for search query issues."""


class IndexFault(SearchError):
    """Raised when the full-text index cannot be loaded or queried.

    Callers use this to tell "search unavailable" apart from "nothing found".
    """


class CorpusLookupFault(SearchError):
    """Raised when an index match references a document missing from the corpus."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"document {ref!r} is not in the search corpus")
        self.ref = ref
