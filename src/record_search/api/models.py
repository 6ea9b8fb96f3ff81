"""
Search Response Models

Pydantic models documenting the search response envelope in OpenAPI.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchResultItem(BaseModel):
    """A single matched record"""

    model_config = ConfigDict(populate_by_name=True)

    item: dict[str, Any] = Field(..., description="The matched record")
    score: float = Field(..., ge=0.0, le=1.0, description="Relevance score (higher is better)")
    highlights: dict[str, list[str]] | None = Field(
        default=None, description="Highlighted snippets per matched field"
    )
    matched_fields: list[str] = Field(
        ..., alias="matchedFields", description="Fields that matched the query"
    )


class SearchResultInfo(BaseModel):
    """Pagination and query metadata"""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(..., ge=1)
    per_page: int = Field(..., ge=1)
    total_count: int = Field(..., ge=0, description="Matches after relevance filtering")
    total_pages: int = Field(..., ge=0)
    query: str
    searched_fields: list[str] = Field(..., alias="searchedFields")


class SearchResponse(BaseModel):
    """Successful search response"""

    success: bool = True
    result: list[SearchResultItem]
    result_info: SearchResultInfo


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    """Client error response"""

    success: bool = False
    error: ErrorDetail
