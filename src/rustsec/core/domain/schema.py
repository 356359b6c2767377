"""Typed decoding of one ``[[advisory]]`` table into an :class:`Advisory`.

The pydantic model below mirrors the authored schema of a RustSec advisory
entry. Field validators check the lexical shape of every typed value; no
cross-field checks are made here.
"""

from __future__ import annotations

import re
import datetime as dt
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, field_validator

from .enums import Category, Collection, Informational
from .identifiers import AdvisoryId
from .models import Advisory
from ..errors import EntryInvalidError, MissingAttributeError
from ...shared.severity import parse_cvss_vector


REQUIRED_FIELDS = ("id", "package", "date")

PACKAGE_NAME_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]{0,63}")
KEYWORD_RE = re.compile(r"[a-z0-9][a-z0-9 _-]*")
DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class AdvisoryEntry(BaseModel):
    """Authored fields of a single advisory entry."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    package: str
    date: dt.date

    title: str = ""
    description: str = ""
    aliases: list[str] = Field(default_factory=list)
    references: list[str] = Field(default_factory=list)
    collection: Optional[Collection] = None
    categories: list[Category] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    cvss: Optional[str] = None
    informational: Optional[Informational] = None
    obsolete: StrictBool = False
    url: Optional[str] = None
    patched_versions: list[str] = Field(default_factory=list)
    unaffected_versions: list[str] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def _check_id(cls, v: str) -> str:
        return AdvisoryId.parse(v).value

    @field_validator("aliases", "references")
    @classmethod
    def _check_ids(cls, v: list[str]) -> list[str]:
        return [AdvisoryId.parse(item).value for item in v]

    @field_validator("package")
    @classmethod
    def _check_package(cls, v: str) -> str:
        if not PACKAGE_NAME_RE.fullmatch(v):
            raise ValueError(f"invalid crate name: {v!r}")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def _check_date(cls, v: Any) -> dt.date:
        # TOML local dates arrive as date objects, quoted ones as strings
        if isinstance(v, dt.datetime):
            raise ValueError("expected a calendar date, got a datetime")
        if isinstance(v, dt.date):
            return v
        if isinstance(v, str) and DATE_RE.fullmatch(v):
            return dt.date.fromisoformat(v)
        raise ValueError(f"expected YYYY-MM-DD, got {v!r}")

    @field_validator("categories")
    @classmethod
    def _dedupe_categories(cls, v: list[Category]) -> list[Category]:
        return list(dict.fromkeys(v))

    @field_validator("keywords")
    @classmethod
    def _check_keywords(cls, v: list[str]) -> list[str]:
        result = []
        for kw in v:
            normalized = kw.strip().lower()
            if not KEYWORD_RE.fullmatch(normalized):
                raise ValueError(f"invalid keyword: {kw!r}")
            result.append(normalized)
        return result

    @field_validator("cvss")
    @classmethod
    def _check_cvss(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            parse_cvss_vector(v)
        return v

    @field_validator("url")
    @classmethod
    def _check_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("empty URL")
        return v

    @field_validator("patched_versions", "unaffected_versions")
    @classmethod
    def _check_requirements(cls, v: list[str]) -> list[str]:
        result = [req.strip() for req in v]
        if any(not req for req in result):
            raise ValueError("empty version requirement")
        return result

    def to_domain(self, collection: Optional[Collection] = None) -> Advisory:
        return Advisory(
            id=AdvisoryId(self.id),
            package=self.package,
            date=self.date,
            title=self.title,
            description=self.description,
            aliases=tuple(AdvisoryId(a) for a in self.aliases),
            references=tuple(AdvisoryId(r) for r in self.references),
            collection=self.collection or collection,
            categories=tuple(self.categories),
            keywords=tuple(self.keywords),
            cvss=self.cvss,
            informational=self.informational,
            obsolete=self.obsolete,
            url=self.url,
            patched_versions=tuple(self.patched_versions),
            unaffected_versions=tuple(self.unaffected_versions),
        )


def decode_advisory(value: Any, index: int, collection: Optional[Collection] = None) -> Advisory:
    """Decode one advisory table.

    Args:
        value: The generic value parsed from the document (expected: a table).
        index: Position of the entry in the advisory array, used in errors.
        collection: Collection assigned when the entry does not name one.

    Raises:
        MissingAttributeError: if ``id``, ``package`` or ``date`` is absent.
        EntryInvalidError: if any field is malformed. Unknown keys are ignored.
    """
    if not isinstance(value, Mapping):
        raise EntryInvalidError(index=index, field="<entry>", reason=f"expected a table, got {type(value).__name__}")

    raw_id = value.get("id")
    advisory_id = raw_id if isinstance(raw_id, str) else None

    for name in REQUIRED_FIELDS:
        if name not in value:
            raise MissingAttributeError(index=index, field=name, advisory_id=advisory_id)

    try:
        entry = AdvisoryEntry.model_validate(dict(value))
    except ValidationError as exc:
        error = exc.errors()[0]
        loc = error.get("loc") or ("<entry>",)
        field = str(loc[0])
        if error.get("type") == "missing":
            raise MissingAttributeError(index=index, field=field, advisory_id=advisory_id) from exc
        raise EntryInvalidError(index=index, field=field, reason=error.get("msg", "invalid value"), advisory_id=advisory_id) from exc

    return entry.to_domain(collection)
