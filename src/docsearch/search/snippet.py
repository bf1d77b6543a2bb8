"""Highlighting and snippet extraction for search hits.

Title and keyword matches are highlighted in place. Content matches get a
short excerpt around the match: a few words of context before it and up to
the end of the sentence after it, trimmed at word or sentence boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass

from docsearch.search.documents import Document

HIGHLIGHT_OPEN = '<span class="algolia-docsearch-suggestion--highlight">'
HIGHLIGHT_CLOSE = "</span>"
KEYWORDS_LABEL = "Keywords:"
ELLIPSIS_BEFORE = "... "
ELLIPSIS_AFTER = " ..."

# Word boundaries to walk back from the match / forward from its end
BACKWARD_STEPS = 3
FORWARD_STEPS = 10


@dataclass(frozen=True, slots=True)
class ContentSnippet:
    """A highlighted content excerpt and the bounds it was cut from.

    Bounds satisfy ``0 <= preview_start <= start <= end <= preview_end <= len(content)``.
    """

    value: str
    preview_start: int
    start: int
    end: int
    preview_end: int


def highlight(text: str, start: int, end: int) -> str:
    """Wrap ``text[start:end]`` in the highlight marker."""
    return text[:start] + HIGHLIGHT_OPEN + text[start:end] + HIGHLIGHT_CLOSE + text[end:]


def format_title(document: Document, start: int, length: int) -> str:
    return highlight(document.title, start, start + length)


def format_keywords(document: Document, start: int, length: int) -> str:
    """Render a keyword match as the title plus a highlighted keywords line."""
    keywords = highlight(document.keywords or "", start, start + length)
    return f"{document.title}<br /><i>{KEYWORDS_LABEL} {keywords}</i>"


def _rfind_before(text: str, char: str, index: int) -> int:
    # Last occurrence at or before index; nothing lies before the text start
    if index < 0:
        return -1
    return text.rfind(char, 0, index + 1)


def extract_snippet(content: str, start: int, length: int) -> ContentSnippet:
    """Cut a readable excerpt around ``content[start:start + length]``.

    Walking backwards, each step moves the excerpt start to just after the
    nearest preceding space. A nearer sentence-ending period, or reaching the
    start of the text, ends the walk without a leading ellipsis. Walking
    forwards works the same way from the match end, stopping on a period
    before the next space or at the end of the text.
    """
    size = len(content)
    start = min(max(start, 0), size)
    end = min(start + max(length, 0), size)

    preview_start = start
    ellipsis_before = True
    for _ in range(BACKWARD_STEPS):
        space = _rfind_before(content, " ", preview_start - 2)
        dot = _rfind_before(content, ".", preview_start - 2)
        if dot > 0 and dot > space:
            preview_start = dot + 1
            ellipsis_before = False
            break
        if space < 0:
            preview_start = 0
            ellipsis_before = False
            break
        preview_start = space + 1

    preview_end = end
    ellipsis_after = True
    for _ in range(FORWARD_STEPS):
        space = content.find(" ", preview_end + 1)
        dot = content.find(".", preview_end + 1)
        if dot > 0 and dot < space:
            preview_end = dot
            ellipsis_after = False
            break
        if space < 0:
            preview_end = size
            ellipsis_after = False
            break
        preview_end = space

    value = content[preview_start:start]
    if ellipsis_before:
        value = ELLIPSIS_BEFORE + value
    value += HIGHLIGHT_OPEN + content[start:end] + HIGHLIGHT_CLOSE
    value += content[end:preview_end]
    if ellipsis_after:
        value += ELLIPSIS_AFTER
    return ContentSnippet(
        value=value,
        preview_start=preview_start,
        start=start,
        end=end,
        preview_end=preview_end,
    )
