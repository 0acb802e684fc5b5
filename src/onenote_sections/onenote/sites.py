"""Resolve the Graph scope (personal or site) that OneNote lookups run under."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union
from urllib.parse import quote, urlsplit

from ..errors import NotFoundError, ValidationError
from ..fetch import GraphFetcher, StructuredBody


@dataclass(frozen=True)
class PersonalScope:
    """The signed-in user's own OneNote (``/me``)."""

    def base_url(self, graph_base: str) -> str:
        return f"{graph_base}/me"


@dataclass(frozen=True)
class SiteScope:
    """OneNote of a SharePoint site."""

    site_id: str

    def base_url(self, graph_base: str) -> str:
        return f"{graph_base}/sites/{self.site_id}"


Scope = Union[PersonalScope, SiteScope]


def site_path(site_url: str) -> str:
    """Return the server-relative path of a site URL, e.g. ``/sites/Sales``."""
    try:
        parts = urlsplit(site_url.strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid siteUrl: {site_url}") from exc
    if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
        raise ValidationError(f"Invalid siteUrl: {site_url}")
    return parts.path or "/"


async def resolve_scope(
    fetcher: GraphFetcher,
    token: str,
    site_url: str | None,
    graph_base: str,
) -> Scope:
    """Look up the site behind ``site_url``, or fall back to the personal scope."""
    if not site_url:
        return PersonalScope()

    path = site_path(site_url)
    result = await fetcher.fetch(f"{graph_base}/sites/root:{quote(path, safe='/')}", token)
    data = result.data if isinstance(result, StructuredBody) else None
    site_id = data.get("id") if isinstance(data, dict) else None
    if not site_id:
        raise NotFoundError("Site not found")
    return SiteScope(site_id)
