from __future__ import annotations

from typing import Protocol


class AdvisorySourcePort(Protocol):
    def fetch_text(self) -> str:
        """Return the serialized advisory document as decoded text.

        Implementations raise TransportError when retrieval fails and
        ResponseUnreadableError when the payload is not valid UTF-8.
        """
        ...
