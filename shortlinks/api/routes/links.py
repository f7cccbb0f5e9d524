"""Short link API routes.

This module contains the endpoints for link operations:
- Create short link (POST /shorten, deprecated alias POST /shortenUrl)
- Redirect to original URL (GET /{link_id})

Service errors are raised as ``ShortenerError`` and rendered by the
application's exception handler.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from ...core.rate_limit import current_rate_limit, limiter
from ...schemas.link import ErrorResponse, ShortenRequest, ShortenResponse
from ...services.shortener import ShortenerService, get_service

router = APIRouter(prefix="", tags=["Links"])

SHORTEN_RESPONSES = {
    200: {"description": "Short link created"},
    400: {"model": ErrorResponse, "description": "Invalid URL"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Id allocation failed"},
}


@limiter.limit(current_rate_limit)
async def shorten_url(
    request: Request,
    payload: ShortenRequest,
    service: ShortenerService = Depends(get_service),
) -> ShortenResponse:
    """Create a short link from a long URL.

    Args:
        request: FastAPI request object.
        payload: Body holding the URL.
        service: Shortener service.

    Returns:
        Short URL and the stored original URL.
    """
    result = service.shorten(payload.url)
    return ShortenResponse(short_url=result.short_url, original_url=result.original_url)


router.add_api_route(
    "/shorten",
    shorten_url,
    methods=["POST"],
    response_model=ShortenResponse,
    responses=SHORTEN_RESPONSES,
    summary="Create a short link",
)
router.add_api_route(
    "/shortenUrl",
    shorten_url,
    methods=["POST"],
    response_model=ShortenResponse,
    responses=SHORTEN_RESPONSES,
    summary="Create a short link (deprecated alias of /shorten)",
    deprecated=True,
)


@router.get(
    "/{link_id}",
    response_class=RedirectResponse,
    status_code=302,
    responses={
        302: {"description": "Redirect to original URL"},
        404: {"model": ErrorResponse, "description": "Link not found"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    },
    summary="Redirect to original URL",
)
@limiter.limit(current_rate_limit)
async def redirect_to_url(
    request: Request,
    link_id: str,
    service: ShortenerService = Depends(get_service),
) -> RedirectResponse:
    """Redirect to the original URL.

    Args:
        request: FastAPI request object.
        link_id: The short link id.
        service: Shortener service.

    Returns:
        Redirect response to original URL.
    """
    return RedirectResponse(url=service.resolve(link_id), status_code=302)
