from __future__ import annotations

import logging

from ..database import AdvisoryDatabase
from ..domain.enums import Collection
from ..ports.source_port import AdvisorySourcePort

logger = logging.getLogger(__name__)


class LoadDatabaseUseCase:
    def __init__(self, source: AdvisorySourcePort, collection: Collection = Collection.CRATES) -> None:
        self._source = source
        self._collection = collection

    def execute(self) -> AdvisoryDatabase:
        """Retrieve the document and build the database.

        Retrieval errors (TransportError, ResponseUnreadableError) and build
        errors (StructureInvalidError, EntryInvalidError) propagate unchanged.
        """
        text = self._source.fetch_text()
        logger.debug(f"Retrieved advisory document ({len(text)} chars)")
        return AdvisoryDatabase.from_toml(text, collection=self._collection)
