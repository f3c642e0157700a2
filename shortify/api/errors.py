import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def describe_validation_error(exc: RequestValidationError) -> str:
    """Turn request validation errors into one client-facing message"""
    messages = []
    for error in exc.errors():
        loc = error.get("loc", ())
        # ("body", "original") for a field; ("body", <offset>) for bad JSON
        if len(loc) < 2 or not isinstance(loc[-1], str):
            continue

        field = loc[-1]
        error_type = error.get("type", "")
        if error_type == "missing":
            messages.append(f"Field '{field}' is missing")
        elif error_type.startswith("url"):
            messages.append(f"Field '{field}' is not a valid URL")
        else:
            messages.append(f"Field '{field}' is not valid")

    return ", ".join(messages) or "Invalid request body"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer malformed requests with 400 and a short message"""
    message = describe_validation_error(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": message},
    )
