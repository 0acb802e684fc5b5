"""Model definitions for the API"""

from __future__ import annotations

from pydantic import BaseModel


class ListSectionsRequest(BaseModel):
    siteUrl: str | None = None
    notebookName: str | None = None


class SectionResponse(BaseModel):
    sectionId: str | None = None
    sectionName: str | None = None
    notebookId: str
    notebookName: str


class ErrorResponse(BaseModel):
    error: str
