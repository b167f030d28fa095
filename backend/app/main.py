import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse

from .api.v1.router import api_router
from .core.config import get_settings
from .core.logging import configure_logging
from .services.loader_service import LoaderService, build_loader, get_datasets

settings = get_settings()
configure_logging(settings)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.loader = build_loader(settings)
    logger.info(f"Data loader ready, base URL {settings.DATA_BASE_URL}")

    if settings.PRELOAD_ON_STARTUP:
        await LoaderService.preload(app.state.loader, get_datasets())

    yield

    await app.state.loader.aclose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="CSV data loading service for the Kerala map dashboard",
    lifespan=lifespan
)

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "app": settings.PROJECT_NAME,
        "version": settings.VERSION
    }


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Renders every HTTPException as JSON"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )
