from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

from asteval import Interpreter

if TYPE_CHECKING:
    from ..core.domain.models import Advisory


def filter_advisories(advisories: Sequence[Advisory], filter_expr: str) -> list[Advisory]:
    """Filter advisories using asteval expression.

    Available variables in filter expression:
    - id: str - Advisory identifier (RUSTSEC-YYYY-NNNN)
    - package: str - Affected crate name
    - title: str - One-line summary
    - year: int | None - Year part of the identifier
    - date: str - Issue date (YYYY-MM-DD)
    - aliases: list[str] - Identifiers in other databases
    - has_cve: bool - Whether any alias is a CVE
    - categories: list[str] - Category tags (e.g. "memory-corruption")
    - keywords: list[str] - Keywords
    - severity: str | None - Severity from CVSS (CRITICAL, HIGH, MEDIUM, LOW, NONE)
    - score: float | None - CVSS base score
    - informational: str | None - notice, unmaintained, unsound
    - obsolete: bool - Whether the advisory is obsolete
    - collection: str | None - crates or rust
    """
    aeval = Interpreter()
    filtered = []

    for a in advisories:
        aliases = [str(x) for x in a.aliases]
        severity = a.severity
        ctx = {
            "id": str(a.id),
            "package": a.package,
            "title": a.title,
            "year": a.id.year,
            "date": a.date.isoformat(),
            "aliases": aliases,
            "has_cve": any(x.startswith("CVE-") for x in aliases),
            "categories": [c.value for c in a.categories],
            "keywords": list(a.keywords),
            "severity": severity.name if severity else None,
            "score": a.cvss_score,
            "informational": a.informational.value if a.informational else None,
            "obsolete": a.obsolete,
            "collection": a.collection.value if a.collection else None,
        }

        for key, value in ctx.items():
            aeval.symtable[key] = value

        result = aeval(filter_expr)
        if aeval.error:
            error_msg = aeval.error[0].get_error()
            raise ValueError(f"Filter evaluation error: {error_msg}")
        if result:
            filtered.append(a)

    return filtered
