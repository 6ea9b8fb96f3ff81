"""Search Router - JSON search endpoint per resource."""

import logging
import time

from fastapi import APIRouter, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from record_search.api.metrics import observe_search
from record_search.api.models import ErrorResponse, SearchResponse
from record_search.endpoint import SearchEndpoint
from record_search.search.filters import FilterOperator
from record_search.search.tokenizer import parse_search_mode

logger = logging.getLogger(__name__)


def build_search_router(endpoint: SearchEndpoint) -> APIRouter:
    """
    Create a router exposing ``GET /{resource}/search`` for an endpoint.

    All parameters are read from the raw query string; the named ones below
    and the endpoint's filter parameters are declared for the OpenAPI schema.
    """
    router = APIRouter()
    available = ", ".join(endpoint.fields)
    filter_params = [
        {
            "name": name if operator == FilterOperator.EQ else f"{name}[{operator.value}]",
            "in": "query",
            "required": False,
            "schema": {"type": "string"},
            "description": f"Filter {name} ({operator.value})",
        }
        for name, operators in endpoint.allowed_filters.items()
        for operator in sorted(operators | {FilterOperator.EQ})
    ]

    @router.get(
        f"/{endpoint.resource}/search",
        name=f"search_{endpoint.resource}",
        responses={200: {"model": SearchResponse}, 400: {"model": ErrorResponse}},
        openapi_extra={"parameters": filter_params},
    )
    def search(
        request: Request,
        q: str | None = Query(None, description="Search query"),
        fields: str | None = Query(
            None, description=f"Comma-separated fields to search. Available: {available}"
        ),
        mode: str | None = Query(None, description="Search mode: any (OR), all (AND), phrase (exact)"),
        highlight: str | None = Query(None, description="Include highlighted snippets"),
        min_score: str | None = Query(
            None, alias="minScore", description="Minimum relevance score threshold (0-1)"
        ),
        page: str | None = None,
        per_page: str | None = None,
        order_by: str | None = Query(
            None, description=f"Sort field. Allowed: {', '.join(endpoint.order_by_fields)}"
        ),
        order_by_direction: str | None = Query(None, description="asc or desc"),
        with_deleted: str | None = Query(None, description="Include soft-deleted records"),
        only_deleted: str | None = Query(None, description="Return only soft-deleted records"),
    ):
        """Full-text search with relevance scoring and highlighting."""
        start_time = time.time()
        data = endpoint.handle(request.query_params)
        observe_search(
            endpoint.resource,
            parse_search_mode(mode, endpoint.default_mode).value,
            time.time() - start_time,
            data["result_info"]["total_count"],
        )
        logger.debug(
            f"Search on '{endpoint.resource}' returned "
            f"{len(data['result'])}/{data['result_info']['total_count']} results"
        )
        return JSONResponse(jsonable_encoder(data))

    return router
