from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from ..core.errors import ResponseUnreadableError, TransportError

logger = logging.getLogger(__name__)


class HttpClient:
    def __init__(
        self,
        base_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = 20.0,
    ) -> None:
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers=dict(base_headers or {}),
            follow_redirects=True,
            max_redirects=10
        )

    def get_bytes(self, url: str) -> bytes:
        """GET ``url`` and return the body; transport failures become TransportError."""
        logger.debug(f"GET {url}")
        try:
            resp = self._client.get(url)
            resp.raise_for_status()
            return resp.content
        except httpx.HTTPStatusError as exc:
            raise TransportError(f"GET {url} returned HTTP {exc.response.status_code}") from exc
        except (httpx.DecodingError, httpx.StreamError) as exc:
            raise ResponseUnreadableError(f"could not read response body from {url}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc

    def get_text(self, url: str) -> str:
        content = self.get_bytes(url)
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ResponseUnreadableError(f"response from {url} is not valid UTF-8") from exc

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
