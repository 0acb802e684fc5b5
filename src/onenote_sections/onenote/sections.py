"""OneNote section lookups via Microsoft Graph API (lightweight HTTP)."""

from __future__ import annotations

from dataclasses import dataclass

from .. import config
from ..fetch import GraphFetcher
from .notebooks import Notebook
from .sites import Scope
from .values import listed_values


@dataclass(frozen=True)
class Section:
    """A section with a copy of its parent notebook's id and name."""

    section_id: str | None
    section_name: str | None
    notebook_id: str
    notebook_name: str

    def to_dict(self) -> dict:
        """Response shape with camelCase keys."""
        return {
            "sectionId": self.section_id,
            "sectionName": self.section_name,
            "notebookId": self.notebook_id,
            "notebookName": self.notebook_name,
        }


async def list_sections(fetcher: GraphFetcher, token: str, scope: Scope, notebook: Notebook, graph_base: str) -> list[Section]:
    """List the first page of sections in a notebook, in Graph's order."""
    url = f"{scope.base_url(graph_base)}/onenote/notebooks/{notebook.id}/sections?$top={config.PAGE_SIZE}"
    result = await fetcher.fetch(url, token)
    return [_section_from_json(sec, notebook) for sec in listed_values(result)]


def _section_from_json(sec: dict, notebook: Notebook) -> Section:
    """Normalize a section JSON record, copying the parent notebook onto it."""
    return Section(
        section_id=sec.get("id"),
        section_name=sec.get("displayName"),
        notebook_id=notebook.id,
        notebook_name=notebook.display_name,
    )
