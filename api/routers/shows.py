"""
Show endpoints, plus the seasons, episodes and characters nested under a show.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_db, get_upserts, paginate
from api.schemas.catalog import CharacterCreate, EpisodeCreate, SeasonCreate, ShowCreate, ShowUpdate
from tvcatalog.database import DatabaseManager
from tvcatalog.errors import NotFoundError, ValidationError
from tvcatalog.upsert import UpsertEngine

router = APIRouter()
logger = logging.getLogger("api.shows")


def _require_show(db: DatabaseManager, show_id: int) -> dict:
    show = db.get_show(show_id)
    if not show:
        raise NotFoundError("Show", show_id)
    return show


@router.get("/shows")
async def list_shows(
    limit: int = Query(100, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    title: Optional[str] = Query(None, description="Exact title"),
    year: Optional[int] = Query(None, description="Premiere year"),
    db: DatabaseManager = Depends(get_db),
):
    """
    Browse shows ordered by year then title.
    """
    shows, total = db.list_shows(limit=limit, offset=offset, title=title, year=year)
    return paginate(shows, total, limit, offset)


@router.post("/shows", status_code=status.HTTP_201_CREATED)
async def create_show(
    body: ShowCreate,
    db: DatabaseManager = Depends(get_db),
    upserts: UpsertEngine = Depends(get_upserts),
):
    show_id = upserts.create("show", body.model_dump(exclude_unset=True))
    logger.info(f"Show created: id={show_id} title={body.title!r}")
    return db.get_show(show_id)


@router.get("/shows/{show_id}")
async def get_show(show_id: int, db: DatabaseManager = Depends(get_db)):
    return _require_show(db, show_id)


@router.put("/shows/{show_id}")
async def update_show(
    show_id: int,
    body: ShowUpdate,
    db: DatabaseManager = Depends(get_db),
    upserts: UpsertEngine = Depends(get_upserts),
):
    """
    Partially update a show. Omitted fields keep their values.
    """
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("No fields to update")
    upserts.update("show", show_id, changes)
    return db.get_show(show_id)


@router.delete("/shows/{show_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_show(show_id: int, db: DatabaseManager = Depends(get_db)):
    """
    Delete a show with its seasons, episodes, characters and links.
    """
    if not db.delete_row("shows", show_id):
        raise NotFoundError("Show", show_id)
    logger.info(f"Show deleted: id={show_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============ SEASONS ============

@router.get("/shows/{show_id}/seasons")
async def list_show_seasons(
    show_id: int,
    limit: int = Query(100, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    db: DatabaseManager = Depends(get_db),
):
    _require_show(db, show_id)
    seasons, total = db.list_seasons(limit=limit, offset=offset, show_id=show_id)
    return paginate(seasons, total, limit, offset)


@router.post("/shows/{show_id}/seasons", status_code=status.HTTP_201_CREATED)
async def create_season(
    show_id: int,
    body: SeasonCreate,
    db: DatabaseManager = Depends(get_db),
    upserts: UpsertEngine = Depends(get_upserts),
):
    season_id = upserts.create("season", {"show_id": show_id, **body.model_dump(exclude_unset=True)})
    return db.get_season(season_id)


# ============ EPISODES ============

@router.get("/shows/{show_id}/episodes")
async def list_show_episodes(
    show_id: int,
    limit: int = Query(100, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    db: DatabaseManager = Depends(get_db),
):
    """
    Episodes of every season of a show, ordered by air date.
    """
    _require_show(db, show_id)
    episodes, total = db.list_episodes(limit=limit, offset=offset, show_id=show_id)
    return paginate(episodes, total, limit, offset)


@router.post("/shows/{show_id}/episodes", status_code=status.HTTP_201_CREATED)
async def create_episode(
    show_id: int,
    body: EpisodeCreate,
    db: DatabaseManager = Depends(get_db),
    upserts: UpsertEngine = Depends(get_upserts),
):
    """
    Create an episode in an existing season, addressed by season_number.
    """
    _require_show(db, show_id)
    season = db.get_season_by_number(show_id, body.season_number)
    if not season:
        raise ValidationError(
            f"Season {body.season_number} does not exist for show {show_id}",
            details={"show_id": show_id, "season_number": body.season_number},
        )
    payload = body.model_dump(exclude_unset=True, exclude={"season_number"})
    episode_id = upserts.create("episode", {"season_id": season["id"], **payload})
    return db.get_episode(episode_id)


@router.get("/shows/{show_id}/seasons/{season_number}/episodes")
async def list_season_number_episodes(
    show_id: int,
    season_number: int,
    limit: int = Query(100, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    db: DatabaseManager = Depends(get_db),
):
    season = db.get_season_by_number(show_id, season_number)
    if not season:
        raise NotFoundError("Season", f"{show_id}/{season_number}")
    episodes, total = db.list_episodes(limit=limit, offset=offset, season_id=season["id"])
    return paginate(episodes, total, limit, offset)


# ============ CHARACTERS ============

@router.get("/shows/{show_id}/characters")
async def list_show_characters(
    show_id: int,
    limit: int = Query(100, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    db: DatabaseManager = Depends(get_db),
):
    _require_show(db, show_id)
    characters, total = db.list_characters(limit=limit, offset=offset, show_id=show_id)
    return paginate(characters, total, limit, offset)


@router.post("/shows/{show_id}/characters", status_code=status.HTTP_201_CREATED)
async def create_character(
    show_id: int,
    body: CharacterCreate,
    db: DatabaseManager = Depends(get_db),
    upserts: UpsertEngine = Depends(get_upserts),
):
    """
    Create a character. actor_name finds or creates the actor by name.
    """
    character_id = upserts.create("character", {"show_id": show_id, **body.model_dump(exclude_unset=True)})
    return db.get_character(character_id)
