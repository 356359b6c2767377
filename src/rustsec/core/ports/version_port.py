from __future__ import annotations

from typing import Protocol


class VersionMatcherPort(Protocol):
    def matches(self, version: str, requirement: str) -> bool:
        """Return True if ``version`` satisfies the requirement expression (e.g. ">= 0.0.14").

        Requirement syntax is opaque to this package; implementations decide
        which grammar (Cargo semver, PEP 440, ...) they understand.
        """
        ...
