"""
Catalog search API router.

Handles product search and autocomplete endpoints with parameter
validation and error mapping.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import settings
from ..dependencies import get_search_engine, get_suggestion_engine
from ..domain.exceptions import StoreUnavailableException, ValidationException
from ..services.search_engine import SearchEngine
from ..services.suggestion_engine import SuggestionEngine

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


# Response Models
class SearchResponse(BaseModel):
    """Search results response model."""

    success: bool = True
    data: dict = Field(description="products, totalPages, currentPage, totalCount")


class SuggestionsResponse(BaseModel):
    """Autocomplete suggestions response model."""

    success: bool = True
    data: list[dict] = Field(description="Suggestions as {text, category}")


class ErrorDetail(BaseModel):
    """Error code and message."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error: ErrorDetail


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """Build the standard error envelope."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=ErrorDetail(code=code, message=message)).model_dump(),
    )


def parse_int(value: Optional[str], default: int) -> Optional[int]:
    """Parse an integer query parameter. Empty means default, junk means None."""
    if not value:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return None


def missing_query() -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "MISSING_QUERY",
        'Search query parameter "q" is required',
    )


@router.get(
    "/suggestions",
    response_model=SuggestionsResponse,
    responses={
        400: {"description": "Invalid parameters", "model": ErrorResponse},
        503: {"description": "Catalog store unavailable", "model": ErrorResponse},
    },
    summary="Autocomplete suggestions",
    description="Unique product titles containing the partial query, best rated first.",
)
async def get_suggestions(
    q: Optional[str] = Query(None, max_length=100, description="Partial query"),
    limit: Optional[str] = Query(None, description="Maximum number of suggestions (default 10)"),
    engine: SuggestionEngine = Depends(get_suggestion_engine),
):
    """
    Get autocomplete suggestions.

    Queries shorter than two characters return an empty list.
    """
    if not q:
        return missing_query()

    limit_num = parse_int(limit, settings.DEFAULT_SUGGESTION_LIMIT)
    if limit_num is None or limit_num < 1 or limit_num > settings.MAX_SUGGESTION_LIMIT:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "INVALID_LIMIT",
            f"Limit must be between 1 and {settings.MAX_SUGGESTION_LIMIT}",
        )

    try:
        suggestions = await engine.suggest(q, limit_num)
    except ValidationException as e:
        return error_response(status.HTTP_400_BAD_REQUEST, e.code, e.message)
    except StoreUnavailableException as e:
        logger.warning("Suggestions unavailable", query=q, error=e.message)
        return error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "STORE_UNAVAILABLE",
            "Catalog is temporarily unavailable",
        )
    except Exception as e:
        logger.error("Suggestions error", query=q, error=str(e), exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "SUGGESTIONS_FAILED",
            "Failed to get suggestions",
        )

    return SuggestionsResponse(data=[suggestion.to_dict() for suggestion in suggestions])


@router.get(
    "",
    response_model=SearchResponse,
    responses={
        400: {"description": "Invalid parameters", "model": ErrorResponse},
        500: {"description": "Search failed", "model": ErrorResponse},
    },
    summary="Search products",
    description="""
    Free-text product search with typo tolerance.

    Results are ranked by term frequency, match position (exact title,
    title, description, fuzzy) and product rating, then paginated.
    """,
)
async def search_products(
    q: Optional[str] = Query(None, max_length=200, description="Search query"),
    page: Optional[str] = Query(None, description="Page number (1-based, default 1)"),
    limit: Optional[str] = Query(None, description="Results per page (default 20)"),
    engine: SearchEngine = Depends(get_search_engine),
):
    """
    Search for products.

    A whitespace-only query returns an empty page.
    """
    if not q:
        return missing_query()

    page_num = parse_int(page, 1)
    if page_num is None or page_num < 1:
        return error_response(
            status.HTTP_400_BAD_REQUEST, "INVALID_PAGE", "Page must be a positive integer"
        )

    limit_num = parse_int(limit, settings.DEFAULT_PAGE_SIZE)
    if limit_num is None or limit_num < 1 or limit_num > settings.MAX_PAGE_SIZE:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "INVALID_LIMIT",
            f"Limit must be between 1 and {settings.MAX_PAGE_SIZE}",
        )

    try:
        result = await engine.search(q, page_num, limit_num)
    except ValidationException as e:
        return error_response(status.HTTP_400_BAD_REQUEST, e.code, e.message)
    except Exception as e:
        logger.error("Search error", query=q, error=str(e), exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "SEARCH_FAILED", "Failed to search products"
        )

    logger.info(
        "Search served",
        query=q,
        page=page_num,
        total_count=result.total_count,
    )
    return SearchResponse(data=result.to_dict())
