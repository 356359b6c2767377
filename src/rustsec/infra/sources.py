from __future__ import annotations

import logging
from pathlib import Path

from ..core.errors import ResponseUnreadableError, TransportError
from ..core.ports.cache_port import CachePort
from ..core.ports.source_port import AdvisorySourcePort
from .http_client import HttpClient

logger = logging.getLogger(__name__)


class HttpAdvisorySource(AdvisorySourcePort):
    """Fetch ``Advisories.toml`` over HTTP."""

    def __init__(self, http_client: HttpClient, url: str) -> None:
        self._http = http_client
        self._url = url

    @property
    def key(self) -> str:
        return f"doc:{self._url}"

    def fetch_text(self) -> str:
        logger.info(f"Fetching advisory database from {self._url}")
        return self._http.get_text(self._url)


class FileAdvisorySource(AdvisorySourcePort):
    """Read the advisory document from a local file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def key(self) -> str:
        return f"doc:{self._path.resolve()}"

    def fetch_text(self) -> str:
        logger.info(f"Reading advisory database from {self._path}")
        try:
            data = self._path.read_bytes()
        except OSError as exc:
            raise TransportError(f"cannot read {self._path}: {exc}") from exc
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ResponseUnreadableError(f"{self._path} is not valid UTF-8") from exc


class CachedAdvisorySource(AdvisorySourcePort):
    """Serve the raw document from cache, falling back to ``inner`` on a miss.

    Only successfully fetched text is stored; the document is not parsed here,
    so a cached copy goes through the same validation as a fresh one.
    """

    def __init__(self, inner: HttpAdvisorySource | FileAdvisorySource, cache: CachePort, ttl_seconds: int) -> None:
        self._inner = inner
        self._cache = cache
        self._ttl = ttl_seconds

    def fetch_text(self) -> str:
        key = self._inner.key
        cached = self._cache.get_text(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached
        logger.debug(f"Cache miss for {key}")
        text = self._inner.fetch_text()
        self._cache.set_text(key, text, self._ttl)
        return text
