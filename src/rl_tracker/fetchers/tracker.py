"""Tracker Document Fetcher - tracker.gg public profile endpoint

Thin transport for the profile endpoint. One call, one document:

- Shared requests.Session with a browser-like User-Agent
- Bounded request time (``TrackerConfig.timeout_seconds``)
- No auth, no retries, no caching
- Body is always parsed, even on 4xx: the provider reports lookup failures
  as a JSON ``errors`` envelope with a 404/400 status, and that envelope is
  what the snapshot turns into a ProviderError

The async ``fetch`` runs the blocking request in a worker thread so several
profiles can be fetched concurrently with ``asyncio.gather``.

**Usage**:
    from rl_tracker.fetchers.tracker import TrackerFetcher

    fetcher = TrackerFetcher()
    document = await fetcher.fetch(fetcher.config.profile_url("steam", "76561198000000000"))
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import requests

from ..config import TrackerConfig, get_config
from ..errors import FetchError, ParseError

logger = logging.getLogger(__name__)


class TrackerFetcher:
    """Fetch raw profile documents from the provider.

    Args:
        config: Client configuration (default: global config from environment)
        session: Optional pre-built session (tests inject one)

    Example:
        >>> fetcher = TrackerFetcher()
        >>> doc = fetcher.fetch_sync(fetcher.config.profile_url("epic", "SomePlayer"))
        >>> doc["data"]["platformInfo"]["platformUserHandle"]
        'SomePlayer'
    """

    def __init__(
        self,
        config: TrackerConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or get_config()
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "User-Agent": self.config.user_agent,
            }
        )

        logger.debug(f"Initialized TrackerFetcher: timeout={self.config.timeout_seconds}s")

    def fetch_sync(self, url: str) -> dict[str, Any]:
        """Fetch and decode one document.

        Args:
            url: Fully formed profile URL

        Returns:
            Decoded JSON document

        Raises:
            FetchError: If the provider could not be reached
            ParseError: If the body is empty or not a JSON object
        """
        logger.debug(f"Fetching profile document: {url}")

        try:
            resp = self.session.get(url, timeout=self.config.timeout_seconds)
        except requests.RequestException as exc:
            logger.error(f"Profile request failed: {url} - {exc!r}")
            raise FetchError(f"Request failed for {url}: {exc!r}") from exc

        if not resp.content:
            raise ParseError(f"Empty response body (HTTP {resp.status_code}) for {url}")

        try:
            data = resp.json()
        except ValueError as exc:
            logger.error(f"Profile response is not JSON (HTTP {resp.status_code}): {url}")
            raise ParseError(
                f"Response from {url} is not valid JSON (HTTP {resp.status_code}): {exc}"
            ) from exc

        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object from {url}, got {type(data).__name__}")

        logger.debug(f"Fetched profile document: {url} (HTTP {resp.status_code})")
        return data

    async def fetch(self, url: str) -> dict[str, Any]:
        """Async variant of :meth:`fetch_sync` (runs in a worker thread)."""
        return await asyncio.to_thread(self.fetch_sync, url)

    def close(self) -> None:
        self.session.close()
