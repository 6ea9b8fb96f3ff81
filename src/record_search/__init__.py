"""Weighted in-memory relevance search and highlighting for record endpoints."""

from record_search.core.exceptions import InvalidQueryError, SearchError
from record_search.endpoint import SearchEndpoint
from record_search.store import RecordStore

__all__ = [
    "InvalidQueryError",
    "SearchEndpoint",
    "SearchError",
    "RecordStore",
]
