from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .enums import IdKind


# PREFIX-YYYY-NNNN, e.g. RUSTSEC-2017-0001 or CVE-2021-45710
ADVISORY_ID_RE = re.compile(r"(?P<prefix>[A-Za-z]+)-(?P<year>\d{4})-(?P<number>\d{4,})")
GHSA_ID_RE = re.compile(r"GHSA(-[23456789cfghjmpqrvwx]{4}){3}")


@dataclass(frozen=True, order=True)
class AdvisoryId:
    """Identifier of an advisory in RustSec or another database."""

    value: str

    @property
    def kind(self) -> IdKind:
        if self.value.startswith("GHSA-"):
            return IdKind.GHSA
        return IdKind.from_prefix(self.value.split("-", 1)[0])

    @property
    def year(self) -> Optional[int]:
        m = ADVISORY_ID_RE.fullmatch(self.value)
        return int(m.group("year")) if m else None

    @property
    def url(self) -> Optional[str]:
        kind = self.kind
        if kind is IdKind.RUSTSEC:
            return f"https://rustsec.org/advisories/{self.value}"
        if kind is IdKind.CVE:
            return f"https://cve.mitre.org/cgi-bin/cvename.cgi?name={self.value}"
        if kind is IdKind.GHSA:
            return f"https://github.com/advisories/{self.value}"
        return None

    @staticmethod
    def parse(raw: str) -> "AdvisoryId":
        """Validate the lexical shape of an identifier.

        Raises:
            ValueError: if ``raw`` is neither ``PREFIX-YYYY-NNNN`` nor a GHSA id.
        """
        if ADVISORY_ID_RE.fullmatch(raw) or GHSA_ID_RE.fullmatch(raw):
            return AdvisoryId(raw)
        raise ValueError(f"malformed advisory id: {raw!r}")

    def __str__(self) -> str:
        return self.value
