"""
Season endpoints. Seasons are created under /shows/{show_id}/seasons.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_db, get_upserts, paginate
from api.schemas.catalog import SeasonUpdate
from tvcatalog.database import DatabaseManager
from tvcatalog.errors import NotFoundError, ValidationError
from tvcatalog.upsert import UpsertEngine

router = APIRouter()


@router.get("/seasons")
async def list_seasons(
    limit: int = Query(100, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    show_id: Optional[int] = Query(None, description="Filter by show"),
    db: DatabaseManager = Depends(get_db),
):
    seasons, total = db.list_seasons(limit=limit, offset=offset, show_id=show_id)
    return paginate(seasons, total, limit, offset)


@router.get("/seasons/{season_id}")
async def get_season(season_id: int, db: DatabaseManager = Depends(get_db)):
    season = db.get_season(season_id)
    if not season:
        raise NotFoundError("Season", season_id)
    return season


@router.put("/seasons/{season_id}")
async def update_season(
    season_id: int,
    body: SeasonUpdate,
    db: DatabaseManager = Depends(get_db),
    upserts: UpsertEngine = Depends(get_upserts),
):
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("No fields to update")
    upserts.update("season", season_id, changes)
    return db.get_season(season_id)


@router.delete("/seasons/{season_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_season(season_id: int, db: DatabaseManager = Depends(get_db)):
    if not db.delete_row("seasons", season_id):
        raise NotFoundError("Season", season_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/seasons/{season_id}/episodes")
async def list_season_episodes(
    season_id: int,
    limit: int = Query(100, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    db: DatabaseManager = Depends(get_db),
):
    if not db.get_season(season_id):
        raise NotFoundError("Season", season_id)
    episodes, total = db.list_episodes(limit=limit, offset=offset, season_id=season_id)
    return paginate(episodes, total, limit, offset)
