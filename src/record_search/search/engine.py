"""
In-Memory Relevance Search

Scores, filters, ranks and highlights already-fetched records.

Pipeline per request:
tokenize -> score every record -> drop zero-match / below-threshold records
-> stable sort by score (descending) -> highlight -> paginate.

Storage adapters expose search through the SearchBackend interface; the
in-memory backend here is the default, swappable for a native full-text
engine.
"""

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from record_search.search.fields import FieldConfig
from record_search.search.filters import FilterCondition, apply_filters
from record_search.search.scoring import score_record
from record_search.search.snippet import generate_highlights
from record_search.search.tokenizer import SearchMode, tokenize_query
from record_search.store import RecordStore

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]


@dataclass(frozen=True)
class SearchOptions:
    """Per-request search parameters."""

    query: str
    fields: tuple[str, ...] | None = None  # None: all configured fields
    mode: SearchMode = SearchMode.ANY
    highlight: bool = False
    min_score: float = 0.0


@dataclass
class ScoredRecord:
    """A record that survived relevance filtering."""

    record: Record
    score: float
    matched_fields: list[str]
    highlights: dict[str, list[str]] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "item": dict(self.record),
            "score": self.score,
            "matchedFields": list(self.matched_fields),
        }
        if self.highlights:
            data["highlights"] = self.highlights
        return data


@dataclass
class SearchResult:
    """One page of scored records plus the post-filter match count."""

    items: list[ScoredRecord]
    total_count: int


@dataclass
class SearchFilters:
    """Non-relevance request parameters handed to a backend."""

    page: int = 1
    per_page: int = 20
    order_by: str | None = None
    order_direction: str = "asc"
    filters: list[FilterCondition] = field(default_factory=list)
    with_deleted: bool = False
    only_deleted: bool = False


def select_fields(
    searchable_fields: Mapping[str, FieldConfig], requested: Iterable[str] | None
) -> dict[str, FieldConfig]:
    """Restrict the configured field map to requested names, keeping config order."""
    if requested is None:
        return dict(searchable_fields)
    requested = set(requested)
    return {name: cfg for name, cfg in searchable_fields.items() if name in requested}


def search_in_memory(
    records: Iterable[Record],
    options: SearchOptions,
    searchable_fields: Mapping[str, FieldConfig],
    highlight_tag: str = "mark",
    snippet_length: int = 150,
) -> list[ScoredRecord]:
    """
    Score and rank records for a query.

    Records with no matched field are always excluded, even with
    ``min_score`` 0. Ties keep the input order.
    """
    tokens = tokenize_query(options.query, options.mode)
    if not tokens:
        return []

    fields = select_fields(searchable_fields, options.fields)

    results: list[ScoredRecord] = []
    candidates = 0
    for record in records:
        candidates += 1
        scored = score_record(record, tokens, fields, options.mode)
        if not scored.matched_fields or scored.score < options.min_score:
            continue
        results.append(ScoredRecord(record, scored.score, scored.matched_fields))

    results.sort(key=lambda r: r.score, reverse=True)

    if options.highlight:
        for result in results:
            highlights = {}
            for name in result.matched_fields:
                snippets = generate_highlights(
                    result.record.get(name),
                    tokens,
                    options.mode,
                    kind=fields[name].kind,
                    tag=highlight_tag,
                    max_length=snippet_length,
                )
                if snippets:
                    highlights[name] = snippets
            result.highlights = highlights or None

    logger.debug(
        f"Search mode={options.mode.value} tokens={len(tokens)} "
        f"candidates={candidates} matched={len(results)}"
    )
    return results


def paginate(items: list, page: int, per_page: int) -> list:
    start = (page - 1) * per_page
    return items[start : start + per_page]


def total_pages(total_count: int, per_page: int) -> int:
    return math.ceil(total_count / per_page) if per_page > 0 else 0


class SearchBackend(ABC):
    """Capability interface implemented by each storage adapter."""

    @abstractmethod
    def search(
        self,
        options: SearchOptions,
        filters: SearchFilters,
        searchable_fields: Mapping[str, FieldConfig],
    ) -> SearchResult:
        """Return one page of relevance-ranked records and the total match count."""


class InMemorySearchBackend(SearchBackend):
    """
    Search backend over a RecordStore table.

    Applies soft-delete and equality filters, then relevance search, optional
    field ordering and pagination.
    """

    def __init__(
        self,
        store: RecordStore,
        table: str,
        soft_delete_field: str | None = None,
        highlight_tag: str = "mark",
        snippet_length: int = 150,
    ):
        self.store = store
        self.table = table
        self.soft_delete_field = soft_delete_field
        self.highlight_tag = highlight_tag
        self.snippet_length = snippet_length

    def fetch(self, filters: SearchFilters) -> list[dict[str, Any]]:
        """Candidate records after non-text predicates."""
        records = self.store.all(self.table)

        if self.soft_delete_field:
            if filters.only_deleted:
                records = [r for r in records if r.get(self.soft_delete_field) is not None]
            elif not filters.with_deleted:
                records = [r for r in records if r.get(self.soft_delete_field) is None]

        return apply_filters(records, filters.filters)

    def search(
        self,
        options: SearchOptions,
        filters: SearchFilters,
        searchable_fields: Mapping[str, FieldConfig],
    ) -> SearchResult:
        results = search_in_memory(
            self.fetch(filters),
            options,
            searchable_fields,
            highlight_tag=self.highlight_tag,
            snippet_length=self.snippet_length,
        )

        if filters.order_by:
            results = order_results(results, filters.order_by, filters.order_direction)

        return SearchResult(
            items=paginate(results, filters.page, filters.per_page),
            total_count=len(results),
        )


def order_results(
    results: list[ScoredRecord], order_by: str, direction: str = "asc"
) -> list[ScoredRecord]:
    """Stable re-sort by a record field; records missing the field go last."""
    present = [r for r in results if r.record.get(order_by) is not None]
    missing = [r for r in results if r.record.get(order_by) is None]
    try:
        present.sort(key=lambda r: r.record[order_by], reverse=direction == "desc")
    except TypeError:
        # Mixed types: fall back to string comparison.
        present.sort(key=lambda r: str(r.record[order_by]), reverse=direction == "desc")
    return present + missing
