from __future__ import annotations

import logging
import tomllib
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, TYPE_CHECKING

from .domain.enums import Collection
from .domain.identifiers import AdvisoryId
from .domain.models import Advisory
from .domain.schema import decode_advisory
from .errors import EntryInvalidError, StructureInvalidError

if TYPE_CHECKING:
    from .ports.version_port import VersionMatcherPort

logger = logging.getLogger(__name__)


ADVISORY_KEY = "advisory"


def parse_document(text: str) -> dict[str, Any]:
    """Parse the raw TOML text into a generic value tree."""
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise StructureInvalidError(f"advisory document is not valid TOML: {exc}") from exc


class AdvisoryDatabase:
    """Immutable snapshot of all advisories from one document, indexed by id and by package.

    Build it with :meth:`from_toml` or :meth:`from_document`; the build is
    all-or-nothing, so a returned database always covers every entry of its
    source document.

    Example:
        db = AdvisoryDatabase.from_toml(text)
        advisory = db.find("RUSTSEC-2017-0001")
        for a in db.find_by_package("sodiumoxide"):
            print(a.id, a.title)
    """

    __slots__ = ("_advisories", "_by_package")

    def __init__(self, advisories: Mapping[str, Advisory], by_package: Mapping[str, tuple[str, ...]]) -> None:
        object.__setattr__(self, "_advisories", MappingProxyType(dict(advisories)))
        object.__setattr__(self, "_by_package", MappingProxyType(dict(by_package)))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_toml(cls, text: str, collection: Collection = Collection.CRATES) -> AdvisoryDatabase:
        """Parse and build the database from the TOML serialization of ``Advisories.toml``.

        Raises:
            StructureInvalidError: if the text is not TOML or has no ``[[advisory]]`` array.
            EntryInvalidError: if any advisory entry is malformed.
        """
        return cls.from_document(parse_document(text), collection=collection)

    @classmethod
    def from_document(cls, document: Mapping[str, Any], collection: Collection = Collection.CRATES) -> AdvisoryDatabase:
        entries = document.get(ADVISORY_KEY) if isinstance(document, Mapping) else None
        if not isinstance(entries, list):
            raise StructureInvalidError(f"document has no '{ADVISORY_KEY}' array of tables")

        advisories: dict[str, Advisory] = {}
        by_package: dict[str, list[str]] = {}

        for index, raw in enumerate(entries):
            advisory = decode_advisory(raw, index, collection)
            key = advisory.id.value
            if key in advisories:
                raise EntryInvalidError(index=index, field="id", reason="duplicate advisory id", advisory_id=key)
            advisories[key] = advisory
            by_package.setdefault(advisory.package, []).append(key)
            logger.debug(f"Decoded {key} for package {advisory.package}")

        logger.info(f"Built advisory database: {len(advisories)} advisories across {len(by_package)} packages")
        return cls(advisories, {name: tuple(ids) for name, ids in by_package.items()})

    @property
    def advisories(self) -> Mapping[str, Advisory]:
        return self._advisories

    @property
    def by_package(self) -> Mapping[str, tuple[str, ...]]:
        return self._by_package

    def find(self, id: str | AdvisoryId) -> Optional[Advisory]:
        """Look up an advisory by id (e.g. "RUSTSEC-YYYY-NNNN")."""
        return self._advisories.get(str(id))

    def find_by_package(self, name: str) -> list[Advisory]:
        """Return advisories for a crate in document order (empty if unknown)."""
        result = []
        for key in self._by_package.get(name, ()):
            advisory = self._advisories.get(key)
            if advisory is None:
                raise AssertionError(f"package index references unknown advisory {key}")
            result.append(advisory)
        return result

    def find_by_alias(self, alias: str | AdvisoryId) -> list[Advisory]:
        """Return advisories listing ``alias`` (e.g. a CVE id) among their aliases."""
        target = AdvisoryId(str(alias))
        return [a for a in self._advisories.values() if target in a.aliases]

    def affected(self, package: str, version: str, matcher: "VersionMatcherPort") -> list[Advisory]:
        """Return active advisories for ``package`` whose requirements leave ``version`` vulnerable."""
        return [
            a for a in self.find_by_package(package)
            if a.is_active and a.is_vulnerable(version, matcher)
        ]

    def packages(self) -> list[str]:
        return list(self._by_package)

    def __len__(self) -> int:
        return len(self._advisories)

    def __iter__(self) -> Iterator[Advisory]:
        return iter(self._advisories.values())

    def __contains__(self, id: object) -> bool:
        return isinstance(id, (str, AdvisoryId)) and str(id) in self._advisories

    def __repr__(self) -> str:
        return f"AdvisoryDatabase(advisories={len(self._advisories)}, packages={len(self._by_package)})"
