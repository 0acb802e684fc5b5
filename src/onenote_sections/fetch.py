"""Resilient HTTP access to Microsoft Graph.

Every call injects the bearer token, waits out throttling (429/503) and
decodes the response according to its content type.
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

import httpx

from .errors import RemoteError, TransientError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """How throttled Graph calls are retried.

    max_attempts=None retries forever; callers then need an outer timeout.
    """

    max_attempts: int | None = None
    retry_statuses: tuple[int, ...] = (429, 503)
    default_delay: float = 2.0

    def delay_for(self, retry_after: str | None) -> float:
        """Seconds to wait given a Retry-After header value."""
        if retry_after:
            try:
                seconds = float(retry_after)
            except ValueError:
                seconds = None
            if seconds is not None and math.isfinite(seconds):
                return max(seconds, 0.0)
        return self.default_delay


@dataclass(frozen=True)
class StructuredBody:
    """Decoded JSON response."""

    data: Any


@dataclass(frozen=True)
class TextBody:
    """Raw text response, for anything that is not JSON."""

    text: str


FetchResult = Union[StructuredBody, TextBody]


def _is_json(content_type: str) -> bool:
    """Whether a Content-Type header names a JSON media type."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


class GraphFetcher:
    """Issue Graph requests on behalf of one request's scoped token."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        retry_policy: RetryPolicy | None = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._retry = retry_policy or RetryPolicy()
        self._sleep = sleep

    async def fetch(
        self,
        url: str,
        token: str,
        *,
        method: str = "GET",
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> FetchResult:
        """Call ``url`` and return its decoded body.

        Raises RemoteError for any non-2xx status other than the retried ones,
        and TransientError once the policy's attempt ceiling is reached.
        """
        if not token:
            raise ValueError("A scoped access token is required")

        merged_headers = httpx.Headers({"Content-Type": "application/json"})
        if headers:
            merged_headers.update(headers)
        merged_headers["Authorization"] = f"Bearer {token}"

        attempt = 0
        while True:
            attempt += 1
            resp = await self._client.request(method, url, headers=merged_headers, json=json)

            if resp.status_code in self._retry.retry_statuses:
                if self._retry.max_attempts is not None and attempt >= self._retry.max_attempts:
                    raise TransientError(resp.status_code, attempt)
                delay = self._retry.delay_for(resp.headers.get("Retry-After"))
                logger.debug("Graph %s on %s %s, retrying in %.1fs", resp.status_code, method, url, delay)
                await self._sleep(delay)
                continue

            if not resp.is_success:
                raise RemoteError(resp.status_code, resp.reason_phrase, resp.text)

            if _is_json(resp.headers.get("content-type", "")):
                return StructuredBody(resp.json())
            return TextBody(resp.text)
