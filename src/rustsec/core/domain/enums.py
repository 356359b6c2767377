from __future__ import annotations

from enum import Enum


class IdKind(Enum):
    RUSTSEC = "RUSTSEC"
    CVE = "CVE"
    GHSA = "GHSA"
    OTHER = "OTHER"

    @classmethod
    def from_prefix(cls, prefix: str) -> "IdKind":
        try:
            return cls(prefix.upper())
        except ValueError:
            return cls.OTHER


class Category(Enum):
    """RustSec vulnerability categories (closed vocabulary)."""

    CODE_EXECUTION = "code-execution"
    CRYPTO_FAILURE = "crypto-failure"
    DENIAL_OF_SERVICE = "denial-of-service"
    FILE_DISCLOSURE = "file-disclosure"
    FORMAT_INJECTION = "format-injection"
    MEMORY_CORRUPTION = "memory-corruption"
    MEMORY_EXPOSURE = "memory-exposure"
    PRIVILEGE_ESCALATION = "privilege-escalation"
    THREAD_SAFETY = "thread-safety"


class Informational(Enum):
    """Kinds of warning-only advisories."""

    NOTICE = "notice"
    UNMAINTAINED = "unmaintained"
    UNSOUND = "unsound"


class Collection(Enum):
    CRATES = "crates"
    RUST = "rust"


class Severity(Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    NONE = "NONE"

    @classmethod
    def from_score(cls, score: float) -> "Severity":
        """Map a CVSS v3 base score to its qualitative rating."""
        if score >= 9.0:
            return cls.CRITICAL
        if score >= 7.0:
            return cls.HIGH
        if score >= 4.0:
            return cls.MEDIUM
        if score > 0.0:
            return cls.LOW
        return cls.NONE
