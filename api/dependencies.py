"""
Dependency injection for the API.

Provides cached catalog services, API token checking and pagination.
"""

import secrets
from functools import lru_cache
from typing import Dict, List, Optional, TypeVar

from fastapi import Depends, Header

from api.exceptions import UnauthorizedError
from tvcatalog.associations import AssociationManager
from tvcatalog.config import Config
from tvcatalog.database import DatabaseManager
from tvcatalog.jobs import JobManager
from tvcatalog.snapshot import SnapshotManager
from tvcatalog.upsert import UpsertEngine

T = TypeVar("T")


@lru_cache()
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()


@lru_cache()
def get_db() -> DatabaseManager:
    """Get cached DatabaseManager instance."""
    return DatabaseManager(get_config())


def get_upserts(db: DatabaseManager = Depends(get_db)) -> UpsertEngine:
    return UpsertEngine(db)


def get_associations(
    db: DatabaseManager = Depends(get_db),
    upserts: UpsertEngine = Depends(get_upserts),
) -> AssociationManager:
    return AssociationManager(db, upserts)


def get_snapshots(
    db: DatabaseManager = Depends(get_db),
    upserts: UpsertEngine = Depends(get_upserts),
) -> SnapshotManager:
    return SnapshotManager(db, upserts)


@lru_cache()
def get_jobs() -> JobManager:
    """Jobs live in memory, so there is one manager per process."""
    return JobManager(get_db(), get_config())


def require_api_token(
    x_api_token: Optional[str] = Header(None),
    config: Config = Depends(get_config),
) -> None:
    """Reject requests without the configured x-api-token. No token configured means open access."""
    if not config.api_token:
        return
    if not x_api_token or not secrets.compare_digest(x_api_token.encode(), config.api_token.encode()):
        raise UnauthorizedError()


def paginate(
    items: List[T],
    total: int,
    limit: int,
    offset: int,
) -> Dict:
    """
    Create a paginated response structure.

    Args:
        items: List of items for current page
        total: Total number of items
        limit: Page size
        offset: Number of items skipped

    Returns:
        Dictionary with data and pagination metadata
    """
    return {
        "data": items,
        "pagination": {
            "limit": limit,
            "offset": offset,
            "total_items": total,
            "has_next": offset + len(items) < total,
            "has_prev": offset > 0,
        },
    }
