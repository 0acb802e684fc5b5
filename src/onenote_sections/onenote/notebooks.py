"""OneNote notebook lookups via Microsoft Graph API (lightweight HTTP)."""

from __future__ import annotations

from dataclasses import dataclass

from .. import config
from ..errors import NotFoundError
from ..fetch import GraphFetcher
from .sites import Scope
from .values import listed_values


@dataclass(frozen=True)
class Notebook:
    """A notebook as listed by Graph."""

    id: str
    display_name: str


async def list_notebooks(fetcher: GraphFetcher, token: str, scope: Scope, graph_base: str) -> list[Notebook]:
    """List the first page of notebooks in a scope."""
    url = f"{scope.base_url(graph_base)}/onenote/notebooks?$top={config.PAGE_SIZE}"
    result = await fetcher.fetch(url, token)
    return [_notebook_from_json(nb) for nb in listed_values(result)]


def find_notebook(notebooks: list[Notebook], name: str) -> Notebook:
    """Pick the notebook whose display name matches ``name``.

    Matching ignores case and surrounding whitespace on both sides.
    """
    wanted = name.strip().casefold()
    for nb in notebooks:
        if nb.display_name.strip().casefold() == wanted:
            return nb
    raise NotFoundError("Notebook not found")


def _notebook_from_json(nb: dict) -> Notebook:
    """Normalize a notebook JSON record."""
    return Notebook(id=nb.get("id") or "", display_name=nb.get("displayName") or "")
