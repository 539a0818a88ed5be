"""
Process lifespan for transport adapters.

An adapter (HTTP app, worker, CLI) wraps its run in ``catalog_lifespan()``:

    async with catalog_lifespan() as repository:
        result = await CreateCatalogItemUseCase(repository).execute(request)

Startup configures logging and resolves the configured repository (running
SQLite migrations when that backend is selected). Shutdown closes the SQLite
pool and forgets the cached repository.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from catalog.config import configure_logging, get_logger, get_settings
from catalog.core.interfaces import ICatalogRepository
from catalog.infrastructure.storage import get_catalog_repository, reset_catalog_repository
from catalog.infrastructure.storage.sqlite import close_pool

logger = get_logger(__name__)


@asynccontextmanager
async def catalog_lifespan() -> AsyncIterator[ICatalogRepository]:
    """Initialize logging and storage; release storage on exit."""
    configure_logging()
    settings = get_settings()

    logger.info(
        "catalog_starting",
        environment=settings.environment,
        backend=settings.storage.backend,
    )

    try:
        repository = await get_catalog_repository()
    except Exception as e:
        logger.error("storage_init_failed", error=str(e))
        raise

    try:
        yield repository
    finally:
        await close_pool()
        reset_catalog_repository()
        logger.info("catalog_stopped")
