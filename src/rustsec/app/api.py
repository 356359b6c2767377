from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .container import Container
from ..config.settings import AppConfig
from ..core.database import AdvisoryDatabase
from ..core.domain.models import Advisory
from ..core.ports.version_port import VersionMatcherPort
from ..core.usecases.query_advisories import PackageReport, QueryAdvisoriesUseCase


class AdvisoryDatabaseClient:
    """Client that retrieves the RustSec advisory database and answers queries on it.

    The database is fetched on first use and kept for the lifetime of the
    client; call :meth:`refresh` to fetch a new snapshot.

    Example:
        # Using default configuration (from environment variables)
        with AdvisoryDatabaseClient() as client:
            advisory = client.find("RUSTSEC-2017-0001")
            for a in client.find_by_package("sodiumoxide"):
                print(a.id, a.title)

        # Read a local checkout instead of fetching
        with AdvisoryDatabaseClient(database_path="Advisories.toml") as client:
            db = client.fetch()
    """

    def __init__(
        self,
        *,
        database_url: str | None = None,
        database_path: str | Path | None = None,
        cache_dir: str | Path | None = None,
        cache_ttl_hours: int | None = None,
        timeout_seconds: float | None = None,
    ):
        """Initialize the client.

        Args:
            database_url: URL of Advisories.toml. If None, uses RUSTSEC_DATABASE_URL or the
                          upstream advisory-db URL.
            database_path: Local Advisories.toml to read instead of fetching.
            cache_dir: Optional custom cache directory path for the raw document.
            cache_ttl_hours: TTL of the cached document (0 disables caching).
            timeout_seconds: HTTP timeout.
        """
        self._container = Container()

        config_dict = {}
        if database_url is not None:
            config_dict["database_url"] = database_url
        if database_path is not None:
            config_dict["database_path"] = Path(database_path)
        if cache_dir is not None:
            config_dict["cache_dir"] = Path(cache_dir)
        if cache_ttl_hours is not None:
            config_dict["cache_ttl_hours"] = cache_ttl_hours
        if timeout_seconds is not None:
            config_dict["timeout_seconds"] = timeout_seconds

        if config_dict:
            config = AppConfig(**config_dict)
            self._container.config.from_pydantic(config)

        self._container.init_resources()
        self._database: AdvisoryDatabase | None = None

    def fetch(self) -> AdvisoryDatabase:
        """Return the advisory database, retrieving and building it on first call.

        Raises:
            TransportError: the document could not be retrieved.
            ResponseUnreadableError: the document is not valid UTF-8.
            StructureInvalidError: the document has no ``[[advisory]]`` array.
            EntryInvalidError: an advisory entry is malformed.
        """
        if self._database is None:
            self._database = self._container.load_uc().execute()
        return self._database

    def refresh(self) -> AdvisoryDatabase:
        """Discard the current snapshot and build a new one."""
        self._database = None
        return self.fetch()

    def find(self, id: str) -> Advisory | None:
        return self.fetch().find(id)

    def find_by_package(self, name: str) -> list[Advisory]:
        return self.fetch().find_by_package(name)

    def list_advisories(
        self,
        *,
        package: str | None = None,
        include_obsolete: bool = False,
        filter_expr: str | None = None,
        limit: int | None = None,
    ) -> Sequence[Advisory]:
        """Return advisories, optionally narrowed to a package or a filter expression.

        Args:
            package: Crate name. If None, lists the whole database.
            include_obsolete: Include obsolete advisories (excluded by default).
            filter_expr: Filter expression using Python syntax.
                        Examples: 'severity == "CRITICAL"', '"memory-corruption" in categories'.
            limit: Maximum number of results to return.

        Raises:
            ValueError: If filter_expr is invalid or contains syntax errors.
        """
        uc = QueryAdvisoriesUseCase(self.fetch())
        return uc.list(package=package, include_obsolete=include_obsolete, filter_expr=filter_expr, limit=limit)

    def check(self, package: str, version: str, matcher: VersionMatcherPort) -> PackageReport:
        """Report advisories affecting ``package`` at ``version`` using the given version matcher."""
        return QueryAdvisoriesUseCase(self.fetch()).check(package, version, matcher)

    def clear_cache(self) -> None:
        self._container.clear_cache_uc().execute()

    def close(self) -> None:
        self._container.shutdown_resources()

    def __enter__(self) -> AdvisoryDatabaseClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = [
    "AdvisoryDatabaseClient",
    "AppConfig",
]
