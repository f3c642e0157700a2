from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from shortify.api.errors import validation_exception_handler
from shortify.config import settings
from shortify.database.connection import engine, Base
from shortify.logging_config import setup_logging
from shortify.middleware import RequestLoggingMiddleware
from shortify.store.factory import StoreBackend
from shortify.api.v1 import urls, redirect

# Import models to ensure they're registered with Base
from shortify.models import URL

logger = setup_logging(settings.log_level, json_format=settings.log_json)

# Create database tables
if StoreBackend(settings.store_backend) == StoreBackend.DATABASE:
    Base.metadata.create_all(bind=engine)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Maps long URLs to short random aliases",
    debug=settings.debug
)
app.add_middleware(RequestLoggingMiddleware)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

logger.info(
    "Starting %s (env=%s, store=%s, cache=%s)",
    settings.app_name,
    settings.environment,
    settings.store_backend,
    settings.cache_backend,
)


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}




######## Include routers
app.include_router(urls.router, prefix="/api/v1")
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
