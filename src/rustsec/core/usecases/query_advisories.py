from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from ..database import AdvisoryDatabase
from ..domain.models import Advisory
from ..ports.version_port import VersionMatcherPort
from ...shared.filter_utils import filter_advisories

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageReport:
    """Advisories affecting one package version, split by actionability."""

    package: str
    version: str
    vulnerabilities: tuple[Advisory, ...] = field(default_factory=tuple)
    warnings: tuple[Advisory, ...] = field(default_factory=tuple)

    @property
    def is_vulnerable(self) -> bool:
        return bool(self.vulnerabilities)


class QueryAdvisoriesUseCase:
    def __init__(self, database: AdvisoryDatabase) -> None:
        self._db = database

    def list(
        self,
        *,
        package: str | None = None,
        include_obsolete: bool = False,
        filter_expr: str | None = None,
        limit: int | None = None,
    ) -> Sequence[Advisory]:
        logger.info(f"Listing advisories: package={package}, include_obsolete={include_obsolete}, filter={filter_expr}, limit={limit}")
        items = self._db.find_by_package(package) if package is not None else list(self._db)
        if not include_obsolete:
            items = [a for a in items if a.is_active]
        if filter_expr:
            items = filter_advisories(items, filter_expr)
        if limit is not None:
            items = items[:limit]
        logger.info(f"Found {len(items)} advisories")
        return items

    def check(self, package: str, version: str, matcher: VersionMatcherPort) -> PackageReport:
        """Evaluate one package version against the database.

        Obsolete advisories are skipped; informational ones are reported as
        warnings rather than vulnerabilities.
        """
        vulnerabilities: list[Advisory] = []
        warnings: list[Advisory] = []
        for a in self._db.affected(package, version, matcher):
            if a.is_informational:
                warnings.append(a)
            else:
                vulnerabilities.append(a)
        logger.info(f"{package} {version}: {len(vulnerabilities)} vulnerabilities, {len(warnings)} warnings")
        return PackageReport(package=package, version=version, vulnerabilities=tuple(vulnerabilities), warnings=tuple(warnings))
