"""rustsec package: client library for the RustSec security advisory database.

Expose the database and the library-friendly client at the package level.
"""

from .app.api import AdvisoryDatabaseClient, AppConfig
from .core.database import AdvisoryDatabase
from .core.domain.enums import Category, Collection, Informational, Severity
from .core.domain.identifiers import AdvisoryId
from .core.domain.models import Advisory
from .core.errors import (
    EntryInvalidError,
    MissingAttributeError,
    ResponseUnreadableError,
    RustsecError,
    StructureInvalidError,
    TransportError,
)

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "Advisory",
    "AdvisoryDatabase",
    "AdvisoryDatabaseClient",
    "AdvisoryId",
    "AppConfig",
    "Category",
    "Collection",
    "EntryInvalidError",
    "Informational",
    "MissingAttributeError",
    "ResponseUnreadableError",
    "RustsecError",
    "Severity",
    "StructureInvalidError",
    "TransportError",
]
