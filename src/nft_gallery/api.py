"""Content store client: manifests and metadata documents."""

import asyncio
import json
from pathlib import Path
from typing import Any
from urllib.parse import urlencode, urljoin, urlparse

import requests
from loguru import logger

from nft_gallery.config import REQUEST_TIMEOUT
from nft_gallery.errors import ContentFetchError


class ContentStoreClient:
    """Fetch manifests and metadata over HTTP or from local files.

    Relative locations are resolved against `base_url` when one is given, and
    read from disk otherwise. When `proxy_url` is set, remote fetches go through
    the same-origin proxy endpoint (`<proxy_url>?url=<target>`).
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        proxy_url: str | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.base_url = base_url
        self.proxy_url = proxy_url
        self.timeout = timeout
        self.sess = requests.Session()

        logger.debug(
            "Content store ready: base_url {!r}, proxy_url {!r}", self.base_url, self.proxy_url
        )

    def resolve(self, location: str) -> str:
        """Return the URL (or local path) actually fetched for `location`."""
        if self.base_url and not urlparse(location).scheme:
            location = urljoin(self.base_url, location)
        if self.proxy_url and urlparse(location).scheme in ("http", "https"):
            location = f"{self.proxy_url}?{urlencode({'url': location})}"
        return location

    def get_text(self, location: str) -> str:
        """Blocking fetch of a document body."""
        target = self.resolve(location)
        parsed = urlparse(target)
        if parsed.scheme in ("", "file"):
            try:
                return Path(parsed.path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ContentFetchError(location, str(exc)) from exc

        logger.debug("Making request: {!r}", target)
        try:
            r = self.sess.get(target, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as exc:
            raise ContentFetchError(location, str(exc)) from exc
        return r.text

    def get_json(self, location: str) -> Any:
        """Blocking fetch of a JSON document."""
        text = self.get_text(location)
        try:
            return json.loads(text)
        except ValueError as exc:
            raise ContentFetchError(location, f"invalid JSON: {exc}") from exc

    async def fetch_text(self, url: str) -> str:
        return await asyncio.to_thread(self.get_text, url)

    async def fetch_json(self, url: str) -> Any:
        return await asyncio.to_thread(self.get_json, url)

    def close(self) -> None:
        self.sess.close()
