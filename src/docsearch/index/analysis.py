"""Text analysis shared by the index build and query parsing.

Tokens are runs of word characters (dots allowed inside, e.g. "2.0"), so
whitespace, hyphens, slashes and other punctuation all act as separators.
"""

from __future__ import annotations

from typing import List

from whoosh.analysis import LowercaseFilter, RegexTokenizer, StemmingAnalyzer

TOKEN_PATTERN = r"\w+(\.?\w+)*"


def make_tokenizer():
    """Tokenizer used for query text: split and lowercase, nothing else."""
    return RegexTokenizer(TOKEN_PATTERN) | LowercaseFilter()


def make_analyzer() -> StemmingAnalyzer:
    """Analyzer the searchable index fields are built with."""
    return StemmingAnalyzer(expression=TOKEN_PATTERN)


_tokenizer = make_tokenizer()


def tokenize(text: str) -> List[str]:
    """Split text into lower-cased tokens, in order of appearance."""
    if not text:
        return []
    return [t.text for t in _tokenizer(text)]
