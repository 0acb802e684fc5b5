"""Delegated authentication for Microsoft Graph.

Exchanges the caller's bearer token for a Graph-scoped token using the
on-behalf-of flow (OnBehalfOfCredential). Nothing is cached: every request
builds its own credential and closes it afterwards.
"""

from __future__ import annotations

import re
from typing import Callable

from azure.core.exceptions import ClientAuthenticationError
from azure.identity.aio import OnBehalfOfCredential

from . import config
from .errors import AuthExchangeError

_BEARER_PREFIX = re.compile(r"^Bearer(\s+|$)", re.IGNORECASE)


def bearer_from_header(authorization: str | None) -> str:
    """Strip the ``Bearer`` prefix from an Authorization header value."""
    return _BEARER_PREFIX.sub("", (authorization or "").lstrip()).strip()


class TokenExchanger:
    """Trade an inbound user token for a Graph token via on-behalf-of."""

    def __init__(
        self,
        settings: config.Settings,
        *,
        credential_factory: Callable[..., OnBehalfOfCredential] = OnBehalfOfCredential,
    ) -> None:
        self._settings = settings
        self._scopes = [config.GRAPH_SCOPE]
        self._credential_factory = credential_factory

    async def exchange(self, user_assertion: str) -> str:
        """Return an access token scoped to Graph for the given user token.

        Raises ConfigurationError before contacting the identity provider if
        the tenant, client id or secret is missing, and AuthExchangeError if
        the provider denies the exchange.
        """
        config.validate(self._settings)
        if not user_assertion:
            raise AuthExchangeError("User assertion is required for the on-behalf-of exchange")

        credential = self._credential_factory(
            tenant_id=self._settings.tenant_id,
            client_id=self._settings.client_id,
            client_secret=self._settings.client_secret,
            user_assertion=user_assertion,
        )
        async with credential:
            try:
                access_token = await credential.get_token(*self._scopes)
            except ClientAuthenticationError as exc:
                raise AuthExchangeError(f"Failed to get Graph token via OBO: {exc.message}") from exc

        if not access_token or not access_token.token:
            raise AuthExchangeError("Failed to get Graph token via OBO")
        return access_token.token
