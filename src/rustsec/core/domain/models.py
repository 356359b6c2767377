from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, TYPE_CHECKING

from .enums import Category, Collection, Informational, Severity
from .identifiers import AdvisoryId
from ...shared.severity import cvss_base_score

if TYPE_CHECKING:
    from ..ports.version_port import VersionMatcherPort


@dataclass(frozen=True)
class Advisory:
    """One RustSec advisory: a vulnerability disclosure for one crate."""

    id: AdvisoryId
    package: str
    date: date

    title: str = ""
    description: str = ""

    aliases: tuple[AdvisoryId, ...] = field(default_factory=tuple)
    references: tuple[AdvisoryId, ...] = field(default_factory=tuple)

    # Assigned by the database build, not authored in the entry
    collection: Optional[Collection] = None

    categories: tuple[Category, ...] = field(default_factory=tuple)
    keywords: tuple[str, ...] = field(default_factory=tuple)

    cvss: Optional[str] = None
    informational: Optional[Informational] = None
    obsolete: bool = False
    url: Optional[str] = None

    patched_versions: tuple[str, ...] = field(default_factory=tuple)
    unaffected_versions: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_informational(self) -> bool:
        return self.informational is not None

    @property
    def is_active(self) -> bool:
        """Obsolete advisories stay retrievable by id but are never reported."""
        return not self.obsolete

    @property
    def cvss_score(self) -> Optional[float]:
        if self.cvss is None:
            return None
        return cvss_base_score(self.cvss)

    @property
    def severity(self) -> Optional[Severity]:
        score = self.cvss_score
        if score is None:
            return None
        return Severity.from_score(score)

    def is_vulnerable(self, version: str, matcher: "VersionMatcherPort") -> bool:
        """True unless a patched or unaffected requirement matches ``version``."""
        requirements = self.patched_versions + self.unaffected_versions
        return not any(matcher.matches(version, req) for req in requirements)
