"""Test snippet highlighting."""

import re

from record_search.search.fields import FieldKind
from record_search.search.snippet import (
    ELLIPSIS,
    find_matches,
    generate_highlights,
    highlight_text,
)
from record_search.search.tokenizer import SearchMode, tokenize_query

TAGS = re.compile(r"</?mark>")


def visible(snippet: str) -> str:
    return TAGS.sub("", snippet)


class TestFindMatches:
    def test_sorted_and_merged(self):
        """Overlapping and adjacent occurrences collapse into one span."""
        assert find_matches("typescript", ["type", "script", "pes"]) == [(0, 10)]

    def test_case_insensitive(self):
        assert find_matches("Test and TEST", ["test"]) == [(0, 4), (9, 13)]

    def test_special_characters(self):
        assert find_matches("Price is $100.99 today", ["$100.99"]) == [(9, 16)]

    def test_lowercase_expanding_characters(self):
        """Spans map back to the original text when lower-casing changes length."""
        assert find_matches("İstanbul travel", ["İstanbul".lower()]) == [(0, 8)]
        assert find_matches("Visit İstanbul", ["istanbul"]) == []


class TestHighlightText:
    def test_short_value_returned_whole(self):
        result = highlight_text("TypeScript is great for building applications", ["typescript"])
        assert result == ["<mark>TypeScript</mark> is great for building applications"]

    def test_all_occurrences_wrapped(self):
        result = highlight_text("Testing is important for TEST quality.", ["test"])
        assert result[0].count("<mark>") == 2

    def test_custom_tag(self):
        assert highlight_text("hello world", ["world"], tag="em") == ["hello <em>world</em>"]

    def test_long_value_windowed_with_ellipsis(self):
        text = "alpha " * 50 + "target" + " omega" * 50
        result = highlight_text(text, ["target"], max_length=40)

        assert len(result) == 1
        assert "<mark>target</mark>" in result[0]
        assert result[0].startswith(ELLIPSIS)
        assert result[0].endswith(ELLIPSIS)
        assert len(visible(result[0])) <= 40

    def test_distant_matches_get_separate_snippets_in_order(self):
        text = "first " + "filler " * 60 + "second"
        result = highlight_text(text, ["first", "second"], max_length=40)

        assert len(result) == 2
        assert "<mark>first</mark>" in result[0]
        assert not result[0].startswith(ELLIPSIS)
        assert "<mark>second</mark>" in result[1]
        assert not result[1].endswith(ELLIPSIS)

    def test_nearby_matches_share_a_window(self):
        text = "x" * 200 + " red and blue " + "y" * 200
        result = highlight_text(text, ["red", "blue"], max_length=60)
        assert len(result) == 1
        assert "<mark>red</mark> and <mark>blue</mark>" in result[0]

    def test_snippets_never_exceed_max_length(self):
        text = ("lorem ipsum dolor sit amet consectetur " * 30).strip()
        for max_length in (16, 25, 50, 150):
            for snippet in highlight_text(text, ["dolor", "amet"], max_length=max_length):
                assert len(visible(snippet)) <= max_length

    def test_occurrence_longer_than_window_is_clipped(self):
        phrase = "a very long phrase that will not fit inside"
        text = "start " * 20 + phrase + " end" * 20
        result = highlight_text(text, [phrase], max_length=20)
        assert len(visible(result[0])) <= 20
        assert "<mark>" in result[0]

    def test_phrase_matches_across_whitespace_runs(self):
        result = highlight_text("The quick   brown fox", ["quick brown"])
        assert result == ["The <mark>quick   brown</mark> fox"]

    def test_no_literal_occurrence_wraps_whole_value(self):
        assert highlight_text("Hello", ["zzz"]) == ["<mark>Hello</mark>"]


class TestGenerateHighlights:
    def test_phrase(self):
        highlights = generate_highlights(
            "The quick brown fox jumps over the lazy dog", ["quick brown"], SearchMode.PHRASE
        )
        assert highlights == ["The <mark>quick brown</mark> fox jumps over the lazy dog"]

    def test_no_match(self):
        assert generate_highlights("Hello world", ["typescript"], SearchMode.ANY) == []

    def test_match_after_expanding_lowercase(self):
        text = "İstanbul travel guide " + "pad " * 50
        highlights = generate_highlights(text, tokenize_query("İstanbul", SearchMode.ANY), SearchMode.ANY)

        assert len(highlights) == 1
        assert highlights[0].startswith("<mark>İstanbul</mark> travel guide")
        assert highlights[0].endswith(ELLIPSIS)

    def test_array_values_per_matching_element(self):
        highlights = generate_highlights(
            ["tag1", "typescript", "tag3", "TypeScript tips"],
            ["typescript"],
            SearchMode.ANY,
            kind=FieldKind.ARRAY,
        )
        assert highlights == ["<mark>typescript</mark>", "<mark>TypeScript</mark> tips"]

    def test_keyword_value(self):
        highlights = generate_highlights(
            "Published", ["published"], SearchMode.ANY, kind=FieldKind.KEYWORD
        )
        assert highlights == ["<mark>Published</mark>"]

    def test_none_value(self):
        assert generate_highlights(None, ["cat"], SearchMode.ANY) == []
