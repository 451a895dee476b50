"""Registry transport: fetch component content and list available components.

Requests go through curl, like every other network call in compsync, so
proxies and certificates follow the user's curl setup.
"""

import asyncio
import json
import logging
import os
from typing import Protocol

from .config import RegistryConfig
from .errors import NotFoundError, TransportError
from .execution import run_process_async

_logging = logging.getLogger(__name__)

USER_AGENT = "compsync-cli"

# curl exit code for an HTTP response status >= 400 when run with --fail
CURL_HTTP_ERROR = 22
CURL_TIMEOUT = 28

# Extra seconds granted to the curl process beyond its own --max-time
_PROCESS_GRACE = 5


class Registry(Protocol):
    async def fetch_content(self, name: str) -> bytes: ...

    async def list_available(self) -> set[str]: ...


def add_github_auth_if_needed(args: list[str], url: str) -> list[str]:
    """Add a Bearer token header for GitHub API requests if GITHUB_TOKEN is set."""
    token = os.environ.get("GITHUB_TOKEN")
    if not token or "api.github.com" not in url:
        return args
    if any(a.startswith("Authorization:") for a in args):
        return args
    return args + ["-H", f"Authorization: Bearer {token}"]


def parse_listing(payload: bytes | str, extension: str) -> set[str]:
    """Map a GitHub contents listing to component names.

    Raises:
        TransportError: If the payload is not a JSON array of entries
    """
    try:
        entries = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise TransportError(f"Invalid component listing: {e}")
    if not isinstance(entries, list):
        raise TransportError("Invalid component listing: expected a JSON array")

    names = set()
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        name = entry.get("name")
        if entry.get("type") != "file" or not isinstance(name, str):
            continue
        if name.endswith(extension) and len(name) > len(extension):
            names.add(name[: -len(extension)])
    return names


class RegistryClient:
    """Registry backed by a raw file host plus a GitHub-style contents API."""

    def __init__(self, config: RegistryConfig):
        self.config = config

    def _curl_args(self, url: str) -> list[str]:
        args = [
            "curl",
            "-sSfL",
            "--max-time",
            str(self.config.timeout),
            "-H",
            f"User-Agent: {USER_AGENT}",
        ]
        args = add_github_auth_if_needed(args, url)
        return args + [url]

    async def _get(self, url: str, component: str | None = None) -> bytes:
        try:
            stdout, stderr, returncode = await run_process_async(
                self._curl_args(url), timeout=self.config.timeout + _PROCESS_GRACE
            )
        except asyncio.TimeoutError:
            raise TransportError(
                f"Request timed out after {self.config.timeout} seconds: {url}",
                component,
            )
        except OSError as e:
            raise TransportError(f"Could not run curl: {e}", component)

        if returncode == CURL_HTTP_ERROR:
            raise NotFoundError(f"Failed to fetch {url}", component)
        if returncode == CURL_TIMEOUT:
            raise TransportError(
                f"Request timed out after {self.config.timeout} seconds: {url}",
                component,
            )
        if returncode != 0:
            raise TransportError(
                f"Failed to fetch {url}: {stderr or f'curl exited with {returncode}'}",
                component,
            )
        return stdout

    async def fetch_content(self, name: str) -> bytes:
        """Fetch the current registry content of a component.

        Raises:
            NotFoundError: If the registry answers with an error status
            TransportError: If the request fails for any other reason
        """
        url = self.config.component_url(name)
        _logging.debug(f"Fetching {name} from {url}")
        return await self._get(url, component=name)

    async def list_available(self) -> set[str]:
        """List the component names the registry currently serves.

        Raises:
            TransportError: If the listing cannot be fetched or parsed
        """
        url = self.config.listing_url()
        _logging.debug(f"Listing components from {url}")
        payload = await self._get(url)
        return parse_listing(payload, self.config.extension)


__all__ = [
    "Registry",
    "RegistryClient",
    "add_github_auth_if_needed",
    "parse_listing",
]
