"""Tests for splitting cue text at the highlight marker."""

import pytest

from karaoke.parsing.highlight import (
    HighlightSpan,
    find_highlight_spans,
    select_cursor_span,
    split_cue_text,
    strip_highlight_tags,
)


class TestHighlightSpans:
    """Tests for finding marker spans."""

    def test_find_spans_in_order(self):
        spans = find_highlight_spans("<b>To</b> <b></b>cele<b>brate</b>")

        assert [s.text for s in spans] == ["To", "", "brate"]
        assert spans[0].start == 0
        assert spans[0].end == len("<b>To</b>")

    def test_no_spans(self):
        assert find_highlight_spans("Plain text") == []

    def test_strip_tags_keeps_inner_text(self):
        assert strip_highlight_tags("<b>To</b> cele<b></b>brate") == "To celebrate"

    def test_strip_removes_unpaired_tags(self):
        assert strip_highlight_tags("Hello <b>world") == "Hello world"

    def test_select_first_non_empty_span(self):
        spans = [
            HighlightSpan(text="", start=0, end=7),
            HighlightSpan(text="cele", start=10, end=21),
            HighlightSpan(text="brate", start=21, end=33),
        ]
        assert select_cursor_span(spans) is spans[1]

    def test_select_first_span_when_all_empty(self):
        spans = [
            HighlightSpan(text="", start=7, end=14),
            HighlightSpan(text="", start=15, end=22),
        ]
        assert select_cursor_span(spans) is spans[0]


class TestSplitCueText:
    """Tests for full/done/pending text."""

    @pytest.mark.parametrize("raw_text, expected", [
        (
            "<b>To</b> celebrate, we're gonna record.",
            ("To celebrate, we're gonna record.", "To", " celebrate, we're gonna record."),
        ),
        (
            "To <b>cele</b>brate, we're gonna record.",
            ("To celebrate, we're gonna record.", "To cele", "brate, we're gonna record."),
        ),
        (
            "<b>To</b> <b>cele</b>brate",
            ("To celebrate", "To", " celebrate"),
        ),
        (
            "Episode<b></b> <b></b>700 of the show.",
            ("Episode 700 of the show.", "Episode", " 700 of the show."),
        ),
        (
            "A <b></b>quick <b>brown</b> fox",
            ("A quick brown fox", "A quick brown", " fox"),
        ),
        (
            "<b></b>Hello there",
            ("Hello there", "", "Hello there"),
        ),
        (
            "We're <b>recording.</b>",
            ("We're recording.", "We're recording.", ""),
        ),
    ])
    def test_split(self, raw_text, expected):
        assert split_cue_text(raw_text) == expected

    def test_no_marker_is_fully_spoken(self):
        full_text, done_text, pending_text = split_cue_text("No bold segment here")

        assert full_text == "No bold segment here"
        assert done_text == full_text
        assert pending_text == ""

    def test_unpaired_tag_counts_as_no_marker(self):
        assert split_cue_text("Hello <b>world") == ("Hello world", "Hello world", "")

    def test_done_plus_pending_is_full_text(self):
        samples = [
            "<b>a</b>",
            "x <b>y</b> z <b>w</b>",
            "<b></b><b></b>",
            "lead <b></b>",
            "spaced  <b> out </b>  words",
        ]
        for raw_text in samples:
            full_text, done_text, pending_text = split_cue_text(raw_text)
            assert done_text + pending_text == full_text
            assert full_text == strip_highlight_tags(raw_text)
