"""OneNote resource resolution: site -> notebook -> sections."""

from __future__ import annotations

from .. import config
from ..fetch import GraphFetcher
from .notebooks import Notebook, find_notebook, list_notebooks
from .sections import Section, list_sections
from .sites import PersonalScope, Scope, SiteScope, resolve_scope

__all__ = [
    "Notebook",
    "PersonalScope",
    "Scope",
    "Section",
    "SiteScope",
    "resolve",
]


async def resolve(
    site_url: str | None,
    notebook_name: str,
    token: str,
    fetcher: GraphFetcher,
    graph_base: str = config.GRAPH_BASE,
) -> list[Section]:
    """Return the sections of the named notebook.

    The notebook and its sections are always read under the same scope: the
    site behind ``site_url`` when given, otherwise the caller's own OneNote.
    """
    scope = await resolve_scope(fetcher, token, site_url, graph_base)
    notebook = find_notebook(await list_notebooks(fetcher, token, scope, graph_base), notebook_name)
    return await list_sections(fetcher, token, scope, notebook, graph_base)
