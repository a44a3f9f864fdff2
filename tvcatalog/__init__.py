"""
TV Catalog - Show, season, episode and cast catalog with an idempotent upsert engine.

This package provides tools for:
- Natural-key upserts that never duplicate and never erase omitted fields
- Linking characters to episodes without clobbering their actors
- Full-catalog export and best-effort import
- Background query jobs
- Seeding bundled datasets through the HTTP API
"""

from .config import Config
from .errors import CatalogError, ConflictError, NotFoundError, TransientStoreError, ValidationError
from .database import DatabaseManager
from .upsert import ABSENT, UpsertEngine, UpsertResult
from .associations import AssociationManager, LinkResult
from .snapshot import ImportReport, SnapshotManager
from .queries import QueryRunner
from .jobs import Job, JobManager
from .client import CatalogClient, CatalogClientError
from .seeding import Seeder

__version__ = "1.0.0"
__all__ = [
    "Config",
    "CatalogError",
    "ConflictError",
    "NotFoundError",
    "TransientStoreError",
    "ValidationError",
    "DatabaseManager",
    "ABSENT",
    "UpsertEngine",
    "UpsertResult",
    "AssociationManager",
    "LinkResult",
    "ImportReport",
    "SnapshotManager",
    "QueryRunner",
    "Job",
    "JobManager",
    "CatalogClient",
    "CatalogClientError",
    "Seeder",
]
