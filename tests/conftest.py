"""
Shared fixtures for TV catalog tests.

Provides an in-memory SQLite catalog, sample show data and an API client
wired to the same database.
"""

import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from tvcatalog.associations import AssociationManager
from tvcatalog.config import Config
from tvcatalog.database import DatabaseManager
from tvcatalog.jobs import JobManager
from tvcatalog.seed_data import farscape
from tvcatalog.seeding import build_snapshot
from tvcatalog.snapshot import SnapshotManager
from tvcatalog.upsert import UpsertEngine


# =============================================================================
# SAMPLE DATA
# =============================================================================

def make_snapshot(shows=(), seasons=(), actors=(), characters=(), episodes=(), links=()) -> dict:
    """Build a snapshot dict with every section present."""
    return {
        "version": 1,
        "shows": list(shows),
        "seasons": list(seasons),
        "actors": list(actors),
        "characters": list(characters),
        "episodes": list(episodes),
        "episode_characters": list(links),
    }


def farscape_snapshot() -> dict:
    """Farscape: 4 seasons, 12 episodes, 4 characters with actors."""
    return build_snapshot(farscape())


def find_show_id(db: DatabaseManager, title: str) -> int:
    shows, _ = db.list_shows(title=title)
    return shows[0]["id"]


def find_character(db: DatabaseManager, show_id: int, name: str) -> dict:
    characters, _ = db.list_characters(show_id=show_id, limit=1000)
    return next(c for c in characters if c["name"] == name)


# =============================================================================
# CATALOG FIXTURES
# =============================================================================

def make_config(tmp_path, **overrides) -> Config:
    settings = dict(
        db_url="sqlite://",
        db_retry_attempts=3,
        db_retry_base_delay=0.0,
        job_min_delay_ms=0,
        job_default_delay_ms=0,
        job_delay_jitter_ms=0,
        job_workers=2,
        seed_max_retries=2,
        seed_retry_delay=0.0,
        log_dir=tmp_path / "logs",
    )
    settings.update(overrides)
    return Config(**settings)


@pytest.fixture
def config(tmp_path):
    """Config pointing at a private in-memory SQLite database."""
    return make_config(tmp_path)


@pytest.fixture
def db(config):
    """Fresh catalog schema for each test."""
    manager = DatabaseManager(config)
    manager.init_schema()
    yield manager
    manager.engine.dispose()


@pytest.fixture
def upserts(db):
    return UpsertEngine(db)


@pytest.fixture
def associations(db, upserts):
    return AssociationManager(db, upserts)


@pytest.fixture
def snapshots(db, upserts, associations):
    return SnapshotManager(db, upserts, associations)


@pytest.fixture
def farscape_db(db, snapshots):
    """Catalog pre-populated with Farscape."""
    report = snapshots.import_all(farscape_snapshot())
    assert report.status == "completed"
    return db


@pytest.fixture
def jobs(db, config):
    manager = JobManager(db, config)
    yield manager
    manager.shutdown()


# =============================================================================
# API FIXTURES
# =============================================================================

def _client_for(db, config, jobs):
    from api.main import app
    from api import dependencies

    # Clear any cached config/db from previous runs
    dependencies.get_config.cache_clear()
    dependencies.get_db.cache_clear()
    dependencies.get_jobs.cache_clear()

    app.dependency_overrides[dependencies.get_db] = lambda: db
    app.dependency_overrides[dependencies.get_config] = lambda: config
    app.dependency_overrides[dependencies.get_jobs] = lambda: jobs
    return app


@pytest.fixture
def api_client(db, config, jobs):
    """FastAPI test client on the test database, auth disabled."""
    app = _client_for(db, config, jobs)
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def secured_client(db, tmp_path, jobs):
    """FastAPI test client with API_TOKEN=s3cret."""
    app = _client_for(db, make_config(tmp_path, api_token="s3cret", app_version="2.4.0", build_number="117"), jobs)
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def mock_client():
    """CatalogClient stand-in that records calls and reports clean imports."""
    client = MagicMock()
    client.init_database.return_value = True
    client.import_snapshot.side_effect = lambda snapshot: {
        "status": "completed",
        "counts": {
            section: {"created": len(snapshot.get(section, [])), "updated": 0, "unchanged": 0, "failed": 0}
            for section in ("shows", "seasons", "actors", "characters", "episodes", "episode_characters")
        },
        "failures": [],
    }
    return client
