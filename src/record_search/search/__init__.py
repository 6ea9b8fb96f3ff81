"""In-memory relevance search and highlighting."""

from record_search.search.fields import (
    FieldConfig,
    FieldKind,
    build_search_config,
    parse_search_fields,
    resolve_search_fields,
)
from record_search.search.tokenizer import (
    SearchMode,
    parse_search_mode,
    tokenize,
    tokenize_query,
)
from record_search.search.filters import (
    FilterCondition,
    FilterOperator,
    apply_filters,
    parse_filter_params,
)
from record_search.search.scoring import FieldScore, score_record
from record_search.search.snippet import generate_highlights, highlight_text
from record_search.search.engine import (
    InMemorySearchBackend,
    ScoredRecord,
    SearchBackend,
    SearchFilters,
    SearchOptions,
    SearchResult,
    search_in_memory,
)

__all__ = [
    "FieldConfig",
    "FieldKind",
    "build_search_config",
    "parse_search_fields",
    "resolve_search_fields",
    "SearchMode",
    "parse_search_mode",
    "tokenize",
    "tokenize_query",
    "FilterCondition",
    "FilterOperator",
    "apply_filters",
    "parse_filter_params",
    "FieldScore",
    "score_record",
    "generate_highlights",
    "highlight_text",
    "InMemorySearchBackend",
    "ScoredRecord",
    "SearchBackend",
    "SearchFilters",
    "SearchOptions",
    "SearchResult",
    "search_in_memory",
]
