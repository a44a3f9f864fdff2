"""
Schema and bulk data endpoints: init, reset, dump and import.

Handlers are plain functions so FastAPI runs them in its threadpool; a
large import holds database connections and sleeps between retries.
"""

import json
import logging
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Body, Depends, Response

from api.dependencies import get_db, get_snapshots
from tvcatalog.database import DatabaseManager
from tvcatalog.snapshot import SnapshotManager

router = APIRouter()
logger = logging.getLogger("api.admin")


@router.post("/init")
def init_database(db: DatabaseManager = Depends(get_db)):
    """
    Create missing tables. Safe to call repeatedly.
    """
    result = db.init_schema()
    logger.info(f"Init: created={result['created']}")
    return {"status": "initialized", **result}


@router.post("/admin/reset-database")
def reset_database(db: DatabaseManager = Depends(get_db)):
    """
    Drop and recreate every table. All data is lost.
    """
    result = db.reset_database()
    logger.warning("Database reset via API")
    return {"status": "reset", **result}


@router.get("/admin/database-dump")
def database_dump(snapshots: SnapshotManager = Depends(get_snapshots)):
    """
    Export the whole catalog as a snapshot file.
    """
    snapshot = snapshots.export_all()
    filename = f"tvcatalog-dump-{datetime.now().strftime('%Y%m%d-%H%M%S')}.json"
    return Response(
        content=json.dumps(snapshot, indent=2, ensure_ascii=False),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/admin/database-import")
def database_import(
    snapshot: Any = Body(..., description="Snapshot as produced by /admin/database-dump"),
    snapshots: SnapshotManager = Depends(get_snapshots),
):
    """
    Upsert a snapshot into the catalog.

    Records that fail are listed in the report; the rest are kept.
    """
    report = snapshots.import_all(snapshot)
    logger.info(f"Import finished: {report.status}, {len(report.failures)} failures")
    return report.to_dict()
