"""Split a cue's text at its <b>...</b> highlight marker."""

import re
from dataclasses import dataclass
from typing import List, Tuple


HIGHLIGHT_SPAN_RE = re.compile(r"<b>(.*?)</b>", re.DOTALL)
HIGHLIGHT_TAG_RE = re.compile(r"</?b>")


@dataclass(frozen=True)
class HighlightSpan:
    """One <b>...</b> span found in raw cue text."""
    text: str
    start: int
    end: int


def strip_highlight_tags(text: str) -> str:
    """Remove every <b> and </b> tag, keeping the text between them."""
    return HIGHLIGHT_TAG_RE.sub("", text)


def find_highlight_spans(raw_text: str) -> List[HighlightSpan]:
    """Return all highlight spans in order of appearance."""
    return [
        HighlightSpan(text=match.group(1), start=match.start(), end=match.end())
        for match in HIGHLIGHT_SPAN_RE.finditer(raw_text)
    ]


def select_cursor_span(spans: List[HighlightSpan]) -> HighlightSpan:
    """
    Pick the span that marks the leading edge of speech.

    The first span with text wins, even when several have text. If every
    span is empty the first one is used as a bare cursor position.

    Args:
        spans: Non-empty list of spans in document order

    Returns:
        The selected span
    """
    for span in spans:
        if span.text:
            return span
    return spans[0]


def split_cue_text(raw_text: str) -> Tuple[str, str, str]:
    """
    Split raw cue text into full, spoken and pending text.

    A cue without any marker counts as fully spoken. Markers that are not
    selected are stripped from the surrounding text.

    Args:
        raw_text: Joined cue text, possibly containing <b>...</b> markers

    Returns:
        Tuple of (full_text, done_text, pending_text) where
        ``done_text + pending_text == full_text``
    """
    spans = find_highlight_spans(raw_text)

    if not spans:
        plain_text = strip_highlight_tags(raw_text)
        return plain_text, plain_text, ""

    cursor = select_cursor_span(spans)
    before = strip_highlight_tags(raw_text[:cursor.start])
    after = strip_highlight_tags(raw_text[cursor.end:])

    done_text = f"{before}{strip_highlight_tags(cursor.text)}"
    return f"{done_text}{after}", done_text, after
