"""Helpers for Graph collection responses."""

from __future__ import annotations

from ..fetch import FetchResult, StructuredBody


def listed_values(result: FetchResult) -> list[dict]:
    """Return the ``value`` array of a collection response.

    Anything that is not a JSON object with a list under ``value`` counts as
    an empty collection.
    """
    if not isinstance(result, StructuredBody) or not isinstance(result.data, dict):
        return []
    values = result.data.get("value")
    if not isinstance(values, list):
        return []
    return [item for item in values if isinstance(item, dict)]
