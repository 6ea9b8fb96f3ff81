"""
Search Endpoint

Per-resource search configuration plus request handling: parses raw query
parameters into SearchOptions/SearchFilters, validates the query, calls the
backend and builds the response envelope.

Subclass and set class attributes to configure a resource:

    class ArticleSearch(SearchEndpoint):
        resource = "articles"
        schema = Article
        searchable_fields = {"title": {"weight": 2.0}, "content": {"weight": 1.0}}
        filter_fields = ["status"]
        filter_config = {"views": ["gte", "lte", "between"]}
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from record_search.core.config import settings
from record_search.core.exceptions import InvalidQueryError
from record_search.search.engine import (
    InMemorySearchBackend,
    ScoredRecord,
    SearchBackend,
    SearchFilters,
    SearchOptions,
    total_pages,
)
from record_search.search.fields import FieldConfig, parse_search_fields, resolve_search_fields
from record_search.search.filters import allowed_filters, parse_filter_params
from record_search.search.snippet import MIN_SNIPPET_LENGTH
from record_search.search.tokenizer import SearchMode, parse_search_mode
from record_search.store import RecordStore, record_store

logger = logging.getLogger(__name__)


def _parse_pos_int(value: str | None, default: int, *, min_v: int = 1) -> int:
    try:
        x = int(value) if value is not None else default
    except ValueError:
        x = default
    return max(x, min_v)


def parse_min_score(value: str | None, default: float = 0.0) -> float:
    """Parse ``minScore``; unparsable values become 0, others are clamped to [0, 1]."""
    if value is None or value == "":
        return default
    try:
        score = float(value)
    except ValueError:
        return 0.0
    if math.isnan(score):
        return 0.0
    return max(0.0, min(1.0, score))


class SearchEndpoint:
    """Configurable search endpoint for one resource."""

    # Resource
    resource: str = ""
    schema: type[BaseModel] | None = None

    # Searchable fields (first non-empty declaration wins)
    searchable_fields: Mapping[str, FieldConfig | Mapping[str, Any]] = {}
    search_fields: list[str] = []
    field_weights: dict[str, float] = {}

    # Search behavior
    default_mode: SearchMode = SearchMode.ANY
    default_min_score: float = 0.0
    min_query_length: int = settings.SEARCH_MIN_QUERY_LEN
    max_query_length: int = settings.SEARCH_MAX_QUERY_LEN
    highlight_tag: str = settings.SEARCH_HIGHLIGHT_TAG
    snippet_length: int = settings.SEARCH_SNIPPET_LENGTH

    # Filtering, ordering, pagination
    filter_fields: list[str] = []
    filter_config: dict[str, list[str]] = {}
    order_by_fields: list[str] = []
    soft_delete_field: str | None = None
    default_per_page: int = settings.SEARCH_DEFAULT_PER_PAGE
    max_per_page: int = settings.SEARCH_MAX_PER_PAGE

    def __init__(self, backend: SearchBackend | None = None, store: RecordStore | None = None):
        if self.min_query_length < 1:
            raise ValueError("min_query_length must be at least 1")
        if self.snippet_length < MIN_SNIPPET_LENGTH:
            raise ValueError(f"snippet_length must be at least {MIN_SNIPPET_LENGTH}")

        # Resolved once per endpoint, never per request
        self.fields: dict[str, FieldConfig] = resolve_search_fields(
            self.searchable_fields,
            self.search_fields,
            self.field_weights,
            self.schema,
        )
        self.backend = backend or InMemorySearchBackend(
            store or record_store,
            self.resource,
            soft_delete_field=self.soft_delete_field,
            highlight_tag=self.highlight_tag,
            snippet_length=self.snippet_length,
        )
        self.allowed_filters = allowed_filters(self.filter_fields, self.filter_config)

    # --- Parsing ---

    def parse_options(
        self,
        q: str | None,
        fields: str | None = None,
        mode: str | None = None,
        highlight: str | None = None,
        min_score: str | None = None,
    ) -> SearchOptions:
        """
        Build SearchOptions from raw query parameters.

        Raises:
            InvalidQueryError: query shorter than ``min_query_length``
        """
        query = (q or "").strip()
        if len(query) > self.max_query_length:
            query = query[: self.max_query_length]
        if len(query) < self.min_query_length:
            logger.info(f"Rejected search on '{self.resource}': query too short")
            raise InvalidQueryError(self.min_query_length)

        return SearchOptions(
            query=query,
            fields=tuple(parse_search_fields(fields, self.fields)),
            mode=parse_search_mode(mode, self.default_mode),
            highlight=(highlight or "").lower() == "true",
            min_score=parse_min_score(min_score, self.default_min_score),
        )

    def parse_filters(self, params: Mapping[str, str]) -> SearchFilters:
        """Build SearchFilters from the request's query parameters."""
        order_by = params.get("order_by")
        if order_by not in self.order_by_fields:
            order_by = None
        direction = params.get("order_by_direction", "asc")

        return SearchFilters(
            page=_parse_pos_int(params.get("page"), 1),
            per_page=min(
                _parse_pos_int(params.get("per_page"), self.default_per_page),
                self.max_per_page,
            ),
            order_by=order_by,
            order_direction=direction if direction in ("asc", "desc") else "asc",
            filters=parse_filter_params(params, self.allowed_filters),
            with_deleted=params.get("with_deleted", "").lower() == "true",
            only_deleted=params.get("only_deleted", "").lower() == "true",
        )

    # --- Lifecycle hooks ---

    def before_search(self, options: SearchOptions) -> SearchOptions:
        """Override to transform search options."""
        return options

    def after_search(self, items: list[ScoredRecord]) -> list[ScoredRecord]:
        """Override to transform results before they are returned."""
        return items

    # --- Handler ---

    def handle(self, params: Mapping[str, str]) -> dict[str, Any]:
        """Run a search for raw query parameters and return the response envelope."""
        options = self.parse_options(
            params.get("q"),
            fields=params.get("fields"),
            mode=params.get("mode"),
            highlight=params.get("highlight"),
            min_score=params.get("minScore"),
        )
        filters = self.parse_filters(params)

        options = self.before_search(options)
        result = self.backend.search(options, filters, self.fields)
        items = self.after_search(result.items)

        return {
            "success": True,
            "result": [item.to_dict() for item in items],
            "result_info": {
                "page": filters.page,
                "per_page": filters.per_page,
                "total_count": result.total_count,
                "total_pages": total_pages(result.total_count, filters.per_page),
                "query": options.query,
                "searchedFields": list(self.fields if options.fields is None else options.fields),
            },
        }
