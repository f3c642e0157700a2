import logging

from fastapi import APIRouter, Depends, HTTPException, status

from shortify.dependencies import get_url_service
from shortify.schemas.url import URLCreate, URLResponse
from shortify.services.exceptions import (
    URLAlreadyExistsError,
    URLNotFoundError,
    URLServiceError,
)
from shortify.services.url_service import URLService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/urls", tags=["urls"])

INTERNAL_ERROR = "Internal Server Error"


@router.post("", response_model=URLResponse, status_code=status.HTTP_201_CREATED)
async def create_url(
    url_data: URLCreate,
    url_service: URLService = Depends(get_url_service)
):
    """Create a new URL and generate an alias for it"""
    original = str(url_data.original)
    try:
        record = await url_service.create(original)
    except URLAlreadyExistsError:
        logger.info("URL already exists: %s", original)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="URL already exists"
        )
    except URLServiceError:
        logger.exception("Failed to create URL for %s", original)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR
        )

    return record


@router.get("/", include_in_schema=False)
async def get_url_without_alias():
    """A lookup with an empty alias segment"""
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Alias is empty"
    )


@router.get("/{alias}", response_model=URLResponse)
async def get_url_by_alias(
    alias: str,
    url_service: URLService = Depends(get_url_service)
):
    """Get a URL by its alias"""
    try:
        return await url_service.get_by_alias(alias)
    except URLNotFoundError:
        logger.info("URL not found for alias %s", alias)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="URL not found"
        )
    except URLServiceError:
        logger.exception("Failed to get URL by alias %s", alias)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR
        )
