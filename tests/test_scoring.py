"""Test weighted field relevance scoring."""

from datetime import date

import pytest

from record_search.search.fields import FieldConfig, FieldKind
from record_search.search.scoring import field_values, match_strength, score_record
from record_search.search.tokenizer import SearchMode

PETS_FIELDS = {"title": FieldConfig(weight=2.0), "body": FieldConfig(weight=1.0)}
PETS = [
    {"id": 1, "title": "Cat lover", "body": "dogs"},
    {"id": 2, "title": "dog", "body": "I have a cat"},
]


class TestScoreRecord:
    def test_weighted_score_over_all_present_fields(self):
        """Denominator counts unmatched fields too: 2/3 and 1/3."""
        first = score_record(PETS[0], ["cat"], PETS_FIELDS, SearchMode.ANY)
        second = score_record(PETS[1], ["cat"], PETS_FIELDS, SearchMode.ANY)

        assert first.score == pytest.approx(2 / 3)
        assert first.matched_fields == ["title"]
        assert second.score == pytest.approx(1 / 3)
        assert second.matched_fields == ["body"]

    def test_no_match(self):
        result = score_record(PETS[0], ["python"], PETS_FIELDS, SearchMode.ANY)
        assert result.score == 0
        assert result.matched_fields == []

    def test_higher_weight_field_scores_higher(self):
        fields = {"title": FieldConfig(weight=2.0), "content": FieldConfig(weight=1.0)}
        title_match = {"title": "TypeScript Guide", "content": "Some other content"}
        content_match = {"title": "Some title", "content": "Learn TypeScript today"}

        assert (
            score_record(title_match, ["typescript"], fields, SearchMode.ANY).score
            > score_record(content_match, ["typescript"], fields, SearchMode.ANY).score
        )

    def test_any_mode_partial_strength(self):
        """Half of the distinct tokens found gives half strength."""
        fields = {"title": FieldConfig()}
        record = {"title": "TypeScript Guide"}
        result = score_record(record, ["typescript", "python", "typescript"], fields, SearchMode.ANY)
        assert result.score == pytest.approx(0.5)

    def test_all_mode_requires_every_token_in_one_field(self):
        record = {"title": "TypeScript Guide", "content": "Introduction to TypeScript"}
        fields = {"title": FieldConfig(weight=2.0), "content": FieldConfig()}

        assert score_record(record, ["typescript", "python"], fields, SearchMode.ANY).score > 0
        assert score_record(record, ["typescript", "python"], fields, SearchMode.ALL).score == 0

    def test_all_mode_tokens_split_across_fields_do_not_match(self):
        result = score_record(PETS[0], ["cat", "dog"], PETS_FIELDS, SearchMode.ALL)
        assert result.matched_fields == []

    def test_phrase_mode_contiguous_only(self):
        fields = {"title": FieldConfig()}
        assert score_record(
            {"title": "Getting  Started with React"}, ["getting started"], fields, SearchMode.PHRASE
        ).score == 1.0
        assert score_record(
            {"title": "Started getting"}, ["getting started"], fields, SearchMode.PHRASE
        ).matched_fields == []

    def test_absent_and_null_fields_are_skipped(self):
        """Missing fields don't count toward the weight total."""
        record = {"title": "cat", "body": None}
        result = score_record(record, ["cat"], PETS_FIELDS, SearchMode.ANY)
        assert result.score == 1.0

    def test_no_searchable_field_present(self):
        result = score_record({"id": 3}, ["cat"], PETS_FIELDS, SearchMode.ANY)
        assert result.score == 0
        assert result.matched_fields == []

    def test_empty_tokens_never_match(self):
        result = score_record(PETS[0], [], PETS_FIELDS, SearchMode.ANY)
        assert result.matched_fields == []

    def test_zero_total_weight(self):
        fields = {"title": FieldConfig(weight=0.0)}
        assert score_record({"title": "cat"}, ["cat"], fields, SearchMode.ANY).score == 0

    def test_matched_fields_follow_config_order(self):
        fields = {"body": FieldConfig(), "title": FieldConfig()}
        record = {"title": "cat", "body": "cat"}
        assert score_record(record, ["cat"], fields, SearchMode.ANY).matched_fields == [
            "body",
            "title",
        ]

    def test_raising_weight_never_lowers_matching_score(self):
        record = {"title": "cat", "body": "dog"}
        low = score_record(record, ["cat"], PETS_FIELDS, SearchMode.ANY).score
        high = score_record(
            record,
            ["cat"],
            {"title": FieldConfig(weight=5.0), "body": FieldConfig(weight=1.0)},
            SearchMode.ANY,
        ).score
        assert high >= low


class TestFieldKinds:
    def test_keyword_requires_whole_value(self):
        fields = {"status": FieldConfig(kind=FieldKind.KEYWORD)}
        assert score_record({"status": "Published"}, ["published"], fields, SearchMode.ANY).score == 1.0
        assert score_record({"status": "Published"}, ["pub"], fields, SearchMode.ANY).score == 0

    def test_array_all_mode_matches_across_elements(self):
        fields = {"tags": FieldConfig(kind=FieldKind.ARRAY)}
        record = {"tags": ["typescript", "react"]}
        result = score_record(record, ["typescript", "react"], fields, SearchMode.ALL)
        assert result.score == 1.0

    def test_array_skips_null_elements(self):
        assert field_values(["A", None, "b"], FieldKind.ARRAY) == ["a", "b"]

    def test_scalars_compared_as_strings(self):
        fields = {"views": FieldConfig(), "active": FieldConfig(), "day": FieldConfig()}
        record = {"views": 100, "active": True, "day": date(2024, 5, 1)}

        assert score_record(record, ["100"], fields, SearchMode.ANY).matched_fields == ["views"]
        assert score_record(record, ["true"], fields, SearchMode.ANY).matched_fields == ["active"]
        assert score_record(record, ["2024-05"], fields, SearchMode.ANY).matched_fields == ["day"]

    def test_lists_in_scalar_fields_join_with_commas(self):
        assert field_values(["A", None, "b"], FieldKind.TEXT) == ["a,,b"]
        record = {"labels": ["a", "b"]}
        fields = {"labels": FieldConfig()}

        assert score_record(record, ["'"], fields, SearchMode.ANY).matched_fields == []
        assert score_record(record, ["a,b"], fields, SearchMode.ANY).matched_fields == ["labels"]

    def test_mapping_values_never_match(self):
        assert field_values({"k": "v"}, FieldKind.TEXT) == []
        result = score_record({"meta": {"k": "v"}}, ["k"], {"meta": FieldConfig()}, SearchMode.ANY)
        assert result.matched_fields == []
        assert result.score == 0.0

    def test_match_strength_empty_values(self):
        assert match_strength([], ["cat"], FieldKind.TEXT, SearchMode.ANY) == 0.0
