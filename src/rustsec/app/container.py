from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..config.settings import AppConfig
from ..core.usecases.clear_cache import ClearCacheUseCase
from ..core.usecases.load_database import LoadDatabaseUseCase
from ..infra.cache_diskcache import DiskCacheAdapter
from ..infra.http_client import HttpClient
from ..infra.sources import CachedAdvisorySource, FileAdvisorySource, HttpAdvisorySource

logger = logging.getLogger(__name__)


def cache_resource(cache_dir, cache_ttl_hours):
	cache_dir_str = str(cache_dir) if cache_dir else None
	logger.info(f"Initializing cache at: {cache_dir_str or 'default user cache directory'}")
	with DiskCacheAdapter(
		namespace="documents",
		default_ttl_seconds=cache_ttl_hours * 3600,
		base_dir=cache_dir_str,
	) as cache:
		logger.debug("Cache initialized successfully")
		yield cache
	logger.debug("Cache closed")


def http_client_resource(timeout_seconds):
	logger.debug(f"Initializing HTTP client (timeout={timeout_seconds}s)")
	with HttpClient(timeout_seconds=timeout_seconds) as client:
		yield client
	logger.debug("HTTP client closed")


def source_factory(http_client, cache, database_url, database_path, cache_ttl_hours):
	"""Pick the document source: a local file if configured, else HTTP behind the raw-text cache."""
	if database_path:
		return FileAdvisorySource(database_path)
	source = HttpAdvisorySource(http_client, database_url)
	if cache_ttl_hours and cache_ttl_hours > 0:
		return CachedAdvisorySource(source, cache, ttl_seconds=cache_ttl_hours * 3600)
	logger.debug("Document cache disabled")
	return source


class Container(containers.DeclarativeContainer):
	config = providers.Configuration(pydantic_settings=[AppConfig()])

	cache = providers.Resource(
		cache_resource,
		cache_dir=config.cache_dir,
		cache_ttl_hours=config.cache_ttl_hours,
	)

	http_client = providers.Resource(
		http_client_resource,
		timeout_seconds=config.timeout_seconds,
	)

	source = providers.Factory(
		source_factory,
		http_client=http_client,
		cache=cache,
		database_url=config.database_url,
		database_path=config.database_path,
		cache_ttl_hours=config.cache_ttl_hours,
	)

	load_uc = providers.Factory(LoadDatabaseUseCase, source=source)
	clear_cache_uc = providers.Factory(ClearCacheUseCase, cache=cache)
