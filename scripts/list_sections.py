#!/usr/bin/env python3
"""List the sections of a OneNote notebook on behalf of a user token."""

import argparse
import asyncio
import json
import os
import sys

# Auto-detect venv and re-exec if needed
_script_dir = os.path.dirname(os.path.abspath(__file__))
_repo_root = os.path.dirname(_script_dir)
_venv_python = os.path.join(_repo_root, ".venv", "bin", "python3")
if os.path.exists(_venv_python) and sys.executable != _venv_python:
    os.execv(_venv_python, [_venv_python] + sys.argv)

sys.path.insert(0, os.path.join(_repo_root, "src"))

import httpx

from onenote_sections import config
from onenote_sections.handler import list_sections


async def main() -> None:
    parser = argparse.ArgumentParser(description="List sections in a notebook")
    parser.add_argument("--notebook-name", required=True, help="Notebook display name")
    parser.add_argument("--site-url", default=None, help="SharePoint site URL (default: your own notebooks)")
    parser.add_argument(
        "--user-token",
        default=os.environ.get("USER_TOKEN", ""),
        help="User access token to exchange (default: $USER_TOKEN)",
    )
    args = parser.parse_args()

    settings = config.load_settings()
    config.configure_logging(settings.log_level)

    payload = {"notebookName": args.notebook_name, "siteUrl": args.site_url}
    async with httpx.AsyncClient(timeout=30) as client:
        result = await list_sections(settings, f"Bearer {args.user_token}", payload, client=client)

    if result.status != 200:
        print(json.dumps(result.body), file=sys.stderr)
        sys.exit(1)
    print(json.dumps(result.body, indent=2))


if __name__ == "__main__":
    asyncio.run(main())
