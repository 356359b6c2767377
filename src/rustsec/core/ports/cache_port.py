from __future__ import annotations

from typing import Iterable, Protocol


class CachePort(Protocol):
    def get(self, key: str) -> bytes | None:
        """Return cached bytes for key, or None if missing/expired."""

    def set(self, key: str, value: bytes, ttl_seconds: int | None = None) -> None:
        """Store bytes with optional TTL in seconds."""

    def clear(self, prefix: str | None = None) -> None:
        """Clear cached entries. Without prefix, clears all. With prefix, clears only matching keys."""

    def iter_keys(self, prefix: str) -> Iterable[str]:
        """Iterate over keys matching the given prefix."""
        ...

    def get_text(self, key: str) -> str | None:
        """Return cached UTF-8 text, or None if missing."""
        raw = self.get(key)
        if raw is None:
            return None
        return raw.decode("utf-8")

    def set_text(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Encode text as UTF-8 and store with optional TTL."""
        self.set(key, value.encode("utf-8"), ttl_seconds)
