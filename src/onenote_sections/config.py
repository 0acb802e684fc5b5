"""Load configuration from .env file."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigurationError

# Walk up from this file to find .env at the repo root
_repo_root = Path(__file__).resolve().parent.parent.parent
load_dotenv(_repo_root / ".env")

GRAPH_BASE = "https://graph.microsoft.com/v1.0"

# Default scope of Microsoft Graph, requested during the on-behalf-of exchange
GRAPH_SCOPE = "https://graph.microsoft.com/.default"

# Page size for notebook and section listings (first page only)
PAGE_SIZE = 200

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup."""

    tenant_id: str = ""
    client_id: str = ""
    client_secret: str = ""
    graph_base: str = GRAPH_BASE
    max_retry_attempts: int | None = None
    log_level: str = "INFO"
    # Values that were set but could not be used
    errors: tuple[str, ...] = ()

    def missing(self) -> list[str]:
        """Names of the identity provider variables that are not set."""
        required = {
            "TENANT_ID": self.tenant_id,
            "CLIENT_ID": self.client_id,
            "CLIENT_SECRET": self.client_secret,
        }
        return [name for name, value in required.items() if not value]


def load_settings(environ: dict | None = None) -> Settings:
    """Build Settings from the environment (after .env has been loaded)."""
    env = os.environ if environ is None else environ

    errors = []
    raw_attempts = env.get("MAX_RETRY_ATTEMPTS", "").strip()
    try:
        max_attempts = int(raw_attempts) if raw_attempts else None
    except ValueError:
        max_attempts = None
        errors.append(f"MAX_RETRY_ATTEMPTS must be an integer, got {raw_attempts!r}")
    if max_attempts is not None and max_attempts < 1:
        max_attempts = None
        errors.append("MAX_RETRY_ATTEMPTS must be at least 1")

    return Settings(
        tenant_id=env.get("TENANT_ID", "").strip(),
        client_id=env.get("CLIENT_ID", "").strip(),
        client_secret=env.get("CLIENT_SECRET", "").strip(),
        graph_base=env.get("GRAPH_BASE_URL", "").strip().rstrip("/") or GRAPH_BASE,
        max_retry_attempts=max_attempts,
        log_level=env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        errors=tuple(errors),
    )


def validate(settings: Settings) -> None:
    """Raise if required config is missing or unusable."""
    missing = settings.missing()
    if missing:
        raise ConfigurationError(
            "Server configuration missing required environment variables.",
            missing=missing,
        )
    if settings.errors:
        raise ConfigurationError("Invalid server configuration: " + "; ".join(settings.errors))


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr for the service entry points."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
