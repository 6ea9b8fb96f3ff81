from fastapi import Request
from fastapi.responses import JSONResponse

from record_search.core.exceptions import SearchError


def search_error_handler(request: Request, exc: SearchError):
    """Render SearchError subclasses as the standard error envelope."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
