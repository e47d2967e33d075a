"""Store Factory — maps settings to a StarStore and a configured StarService.

Invariants:
    - Exactly one store per process, built in the lifespan
    - The database manager is created only for store_backend="database"
"""

import logging

from starfield.config import Settings
from starfield.core.domain_types import StoreBackend
from starfield.core.repository_protocols import StarStore
from starfield.core.star_rules import StarRules
from starfield.infrastructure import database
from starfield.infrastructure.database_store import DatabaseStarStore
from starfield.infrastructure.json_file_store import JsonFileStarStore
from starfield.infrastructure.memory_store import InMemoryStarStore
from starfield.services.star_service import StarService

logger = logging.getLogger(__name__)


def build_star_store(settings: Settings) -> StarStore:
    """Instantiate the store selected by settings.store_backend."""
    backend = StoreBackend(settings.store_backend)
    if backend is StoreBackend.DATABASE:
        manager = database.init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        return DatabaseStarStore(manager)
    if backend is StoreBackend.MEMORY:
        logger.warning(
            "Using in-memory star store: stars are lost on restart",
            extra={"backend": backend.value},
        )
        return InMemoryStarStore()
    return JsonFileStarStore(settings.data_file)


def build_star_service(settings: Settings, store: StarStore) -> StarService:
    """StarService wired with the rule settings."""
    return StarService(
        store,
        rules=StarRules(
            position_bound=settings.position_bound,
            strict_signs=settings.strict_signs,
            legacy_timestamp_ids=settings.legacy_timestamp_ids,
        ),
        serialize_writes=settings.serialize_writes,
    )
