import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from metadata_api import __version__
from metadata_api.api import api_router
from metadata_api.config import settings
from metadata_api.core.logging_config import configure_logging
from metadata_api.errors import MetadataError

configure_logging(log_format=settings.log_format, log_level=settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(f"Starting {settings.app_name} v{__version__}")
    yield
    logger.info("Shutting down...")


app = FastAPI(title=settings.app_name, version=__version__, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)
app.include_router(api_router)


@app.exception_handler(MetadataError)
async def metadata_error_handler(request: Request, exc: MetadataError) -> PlainTextResponse:
    return PlainTextResponse(exc.reason, status_code=exc.status_code)


@app.get("/health", tags=["system"], response_class=PlainTextResponse)
async def healthcheck() -> str:
    return "OK"
