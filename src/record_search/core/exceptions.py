"""
Search Errors

Client-facing errors raised by the search surface. Scoring, tokenizing and
highlighting never raise; only request validation does.
"""


class SearchError(Exception):
    """Base class for errors surfaced to API clients."""

    code: str = "SEARCH_ERROR"
    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error": {"code": self.code, "message": self.message},
        }


class InvalidQueryError(SearchError):
    """Search query shorter than the endpoint's minimum length."""

    code = "INVALID_QUERY"

    def __init__(self, min_length: int):
        super().__init__(f"Search query must be at least {min_length} characters")
        self.min_length = min_length
