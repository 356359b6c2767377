from __future__ import annotations

from typing import Optional


class RustsecError(Exception):
    """Base class for every error raised by this package."""


class TransportError(RustsecError):
    """The advisory document could not be retrieved (network error, bad status, unreadable file)."""


class ResponseUnreadableError(RustsecError):
    """Retrieved bytes could not be read fully or decoded as UTF-8 text."""


class StructureInvalidError(RustsecError):
    """The document is not TOML or lacks the top-level ``[[advisory]]`` array."""


class EntryInvalidError(RustsecError):
    """One advisory entry failed field presence or format validation.

    Attributes:
        index: Position of the entry in the document's advisory array.
        advisory_id: The entry's ``id`` when it could be read, else None.
        field: Name of the offending field.
        reason: Human-readable description of the problem.
    """

    def __init__(self, *, index: int, field: str, reason: str, advisory_id: Optional[str] = None) -> None:
        self.index = index
        self.advisory_id = advisory_id
        self.field = field
        self.reason = reason
        where = f"advisory #{index}" + (f" ({advisory_id})" if advisory_id else "")
        super().__init__(f"{where}: invalid '{field}': {reason}")


class MissingAttributeError(EntryInvalidError):
    """A required field is absent from an advisory entry."""

    def __init__(self, *, index: int, field: str, advisory_id: Optional[str] = None) -> None:
        super().__init__(index=index, field=field, reason="missing required attribute", advisory_id=advisory_id)
