import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from shortify.dependencies import get_url_service
from shortify.services.exceptions import URLNotFoundError, URLServiceError
from shortify.services.url_service import URLService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["redirect"])


@router.get("/{alias}")
async def redirect_to_original(
    alias: str,
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the original URL.

    Lookups go through the service cache, so repeated hits on the same
    alias do not reach the store.
    """
    try:
        record = await url_service.get_by_alias(alias)
    except URLNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="URL not found"
        )
    except URLServiceError:
        logger.exception("Failed to resolve alias %s", alias)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error"
        )

    return RedirectResponse(url=record.original, status_code=status.HTTP_302_FOUND)
