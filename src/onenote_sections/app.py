"""OneNote Sections API.

Initializes the FastAPI application: logging on startup, the list-sections
route and a health check.
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__, config
from .auth import TokenExchanger
from .handler import list_sections
from .models import ErrorResponse, ListSectionsRequest, SectionResponse

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = 30


@lru_cache
def get_settings() -> config.Settings:
    """Settings are read once per process."""
    return config.load_settings()


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """One HTTP client per request, closed when the request ends."""
    async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
        yield client


def get_exchanger(settings: config.Settings = Depends(get_settings)) -> TokenExchanger:
    """A fresh on-behalf-of exchanger for each request."""
    return TokenExchanger(settings)


@asynccontextmanager
async def lifespan(api: FastAPI):
    """Configure logging and warn early about missing or invalid configuration."""
    settings = get_settings()
    config.configure_logging(settings.log_level)
    missing = settings.missing()
    if missing:
        logger.warning("Missing configuration: %s; requests will fail with 500", ", ".join(missing))
    for error in settings.errors:
        logger.warning("Invalid configuration: %s; requests will fail with 500", error)
    yield


DESCRIPTION = """
Lists the sections of a OneNote notebook for the calling user, using an
on-behalf-of token exchange and Microsoft Graph.
"""

api = FastAPI(
    lifespan=lifespan,
    title="OneNote Sections API",
    description=DESCRIPTION,
    version=__version__,
)


@api.post(
    "/api/list-sections",
    response_model=list[SectionResponse],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={"requestBody": {"content": {"application/json": {"schema": ListSectionsRequest.model_json_schema()}}}},
)
async def list_sections_route(
    request: Request,
    settings: config.Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
    exchanger: TokenExchanger = Depends(get_exchanger),
) -> JSONResponse:
    """List the sections of a notebook, optionally inside a SharePoint site."""
    body = await request.body()
    try:
        payload = json.loads(body) if body else None
    except ValueError:
        payload = body

    result = await list_sections(
        settings,
        request.headers.get("authorization"),
        payload,
        client=client,
        exchanger=exchanger,
    )
    return JSONResponse(status_code=result.status, content=result.body)


@api.get("/health")
def health_check():
    """Basic health check endpoint for service monitoring."""
    return {
        "status": "healthy",
        "service": "onenote-sections",
        "version": __version__,
    }
