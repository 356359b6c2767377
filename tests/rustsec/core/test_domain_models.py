from __future__ import annotations

from datetime import date

import pytest

from rustsec.core.domain.enums import IdKind, Informational, Severity
from rustsec.core.domain.identifiers import AdvisoryId
from rustsec.core.domain.models import Advisory


class PrefixMatcher:
    """Toy matcher: a requirement ">= X" matches versions that sort at or after X."""

    def matches(self, version: str, requirement: str) -> bool:
        op, _, bound = requirement.partition(" ")
        v = tuple(int(p) for p in version.split("."))
        b = tuple(int(p) for p in bound.split("."))
        if op == ">=":
            return v >= b
        if op == "<":
            return v < b
        raise ValueError(requirement)


def _advisory(**kwargs) -> Advisory:
    base = dict(id=AdvisoryId("RUSTSEC-2019-0009"), package="smallvec", date=date(2019, 6, 6))
    base.update(kwargs)
    return Advisory(**base)


@pytest.mark.parametrize(
    "raw,kind,year",
    [
        ("RUSTSEC-2017-0001", IdKind.RUSTSEC, 2017),
        ("CVE-2021-45710", IdKind.CVE, 2021),
        ("TALOS-2020-1234", IdKind.OTHER, 2020),
        ("OSV-2022-0001", IdKind.OTHER, 2022),
        ("GHSA-5x8p-qh9h-j3vf", IdKind.GHSA, None),
    ],
)
def test_advisory_id_parse(raw, kind, year):
    aid = AdvisoryId.parse(raw)
    assert str(aid) == raw
    assert aid.kind is kind
    assert aid.year == year


@pytest.mark.parametrize(
    "raw",
    ["", " RUSTSEC-2017-0001", "RUSTSEC-2017-0001\n", "RUSTSEC", "RUSTSEC-2017", "RUSTSEC-17-0001", "2017-0001", "GHSA-aaaa-bbbb-cccc"],
)
def test_advisory_id_parse_rejects_malformed(raw):
    with pytest.raises(ValueError):
        AdvisoryId.parse(raw)


def test_advisory_id_urls():
    assert AdvisoryId("RUSTSEC-2017-0001").url == "https://rustsec.org/advisories/RUSTSEC-2017-0001"
    assert AdvisoryId("GHSA-5x8p-qh9h-j3vf").url == "https://github.com/advisories/GHSA-5x8p-qh9h-j3vf"
    assert AdvisoryId("OSV-2022-0001").url is None


def test_advisory_is_frozen():
    a = _advisory()
    with pytest.raises(AttributeError):
        a.title = "changed"  # type: ignore[misc]


def test_cvss_score_and_severity():
    a = _advisory(cvss="CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H")
    assert a.cvss_score == pytest.approx(9.8)
    assert a.severity is Severity.CRITICAL
    assert _advisory().severity is None


def test_informational_and_active_flags():
    assert _advisory(informational=Informational.UNSOUND).is_informational
    assert not _advisory().is_informational
    assert not _advisory(obsolete=True).is_active


def test_is_vulnerable_uses_patched_and_unaffected():
    a = _advisory(patched_versions=(">= 0.6.10",), unaffected_versions=("< 0.6.5",))
    matcher = PrefixMatcher()
    assert a.is_vulnerable("0.6.7", matcher)
    assert not a.is_vulnerable("0.6.10", matcher)
    assert not a.is_vulnerable("0.6.1", matcher)


def test_no_requirements_means_every_version_vulnerable():
    assert _advisory().is_vulnerable("1.0.0", PrefixMatcher())


@pytest.mark.parametrize(
    "score,expected",
    [(9.8, Severity.CRITICAL), (7.0, Severity.HIGH), (6.1, Severity.MEDIUM), (0.1, Severity.LOW), (0.0, Severity.NONE)],
)
def test_severity_from_score(score, expected):
    assert Severity.from_score(score) is expected

