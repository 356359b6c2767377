from __future__ import annotations

from cvss import CVSS3
from cvss.exceptions import CVSSError


CVSS3_PREFIXES = ("CVSS:3.0/", "CVSS:3.1/")
BASE_METRICS = frozenset({"AV", "AC", "PR", "UI", "S", "C", "I", "A"})


def parse_cvss_vector(vector: str) -> CVSS3:
	"""Parse a CVSS v3.x base vector string.

	Temporal and environmental metrics are not accepted.

	Raises:
		ValueError: if the vector is not a well-formed CVSS v3.0/v3.1 base vector.
	"""
	if not vector.startswith(CVSS3_PREFIXES):
		raise ValueError(f"not a CVSS v3 vector: {vector!r}")
	try:
		cvss = CVSS3(vector)
	except CVSSError as exc:
		raise ValueError(f"malformed CVSS vector {vector!r}: {exc}") from exc
	metrics = [part.split(":", 1)[0] for part in vector.split("/")[1:]]
	extra = [m for m in metrics if m not in BASE_METRICS]
	if extra:
		raise ValueError(f"CVSS vector {vector!r} has non-base metrics: {', '.join(extra)}")
	return cvss


def cvss_base_score(vector: str) -> float:
	return float(parse_cvss_vector(vector).base_score)
