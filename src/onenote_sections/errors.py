"""Error types raised while listing OneNote sections.

Each error carries the HTTP status the request handler answers with.
"""

from __future__ import annotations


class OneNoteSectionsError(Exception):
    """Base class for every failure the request handler knows how to map."""

    status_code = 500


class ConfigurationError(OneNoteSectionsError):
    """Identity provider configuration is missing or invalid."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class ValidationError(OneNoteSectionsError):
    """Caller input is missing or malformed."""

    status_code = 400


class AuthExchangeError(OneNoteSectionsError):
    """The on-behalf-of exchange was denied or returned no access token."""


class NotFoundError(OneNoteSectionsError):
    """A resolved resource (site or notebook) does not exist."""

    status_code = 404


class RemoteError(OneNoteSectionsError):
    """Microsoft Graph answered with a non-2xx status."""

    def __init__(self, status: int, reason: str, body: str) -> None:
        super().__init__(f"Graph {status} {reason}: {body}")
        self.status = status
        self.reason = reason
        self.body = body


class TransientError(OneNoteSectionsError):
    """Graph kept throttling (429/503) until the retry ceiling was reached."""

    def __init__(self, status: int, attempts: int) -> None:
        super().__init__(f"Graph {status}: still throttled after {attempts} attempts")
        self.status = status
        self.attempts = attempts


class MissingCredentialError(OneNoteSectionsError):
    """The request carried no user bearer token."""

    status_code = 401
