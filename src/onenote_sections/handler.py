"""Request handling for listing the sections of a notebook.

Checks run in a fixed order: server configuration, caller credential, request
body. Only then is the user token exchanged and Graph queried. Every outcome,
including unexpected exceptions, becomes a status code and a JSON body.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx
import pydantic

from . import config, onenote
from .auth import TokenExchanger, bearer_from_header
from .errors import MissingCredentialError, OneNoteSectionsError, ValidationError
from .fetch import GraphFetcher, RetryPolicy
from .models import ListSectionsRequest

logger = logging.getLogger(__name__)

LOG_TAG = "list-sections error:"


@dataclass(frozen=True)
class HandlerResult:
    """Status code and JSON body of one response."""

    status: int
    body: Any


def parse_request(payload: Any) -> ListSectionsRequest:
    """Validate the JSON body; a missing notebook name is a caller error."""
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        request = ListSectionsRequest.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid request body: {exc.errors()[0]['msg']}") from exc
    if not request.notebookName or not request.notebookName.strip():
        raise ValidationError("notebookName required")
    return request


async def list_sections(
    settings: config.Settings,
    authorization: str | None,
    payload: Any,
    *,
    client: httpx.AsyncClient,
    exchanger: TokenExchanger | None = None,
) -> HandlerResult:
    """Answer one list-sections request."""
    try:
        sections = await _list_sections(settings, authorization, payload, client, exchanger)
    except OneNoteSectionsError as exc:
        if exc.status_code >= 500:
            logger.error("%s %s", LOG_TAG, exc)
        else:
            logger.warning("%s %s", LOG_TAG, exc)
        return HandlerResult(exc.status_code, {"error": str(exc) or "Unknown error"})
    except Exception as exc:
        logger.exception("%s %s", LOG_TAG, exc)
        return HandlerResult(500, {"error": str(exc) or "Unknown error"})

    return HandlerResult(200, [section.to_dict() for section in sections])


async def _list_sections(
    settings: config.Settings,
    authorization: str | None,
    payload: Any,
    client: httpx.AsyncClient,
    exchanger: TokenExchanger | None,
) -> list[onenote.Section]:
    config.validate(settings)

    user_token = bearer_from_header(authorization)
    if not user_token:
        raise MissingCredentialError("Missing user bearer token")

    request = parse_request(payload)

    exchanger = exchanger or TokenExchanger(settings)
    token = await exchanger.exchange(user_token)

    fetcher = GraphFetcher(client, RetryPolicy(max_attempts=settings.max_retry_attempts))
    return await onenote.resolve(
        request.siteUrl,
        request.notebookName,
        token,
        fetcher,
        graph_base=settings.graph_base,
    )
