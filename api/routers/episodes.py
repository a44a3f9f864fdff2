"""
Episode endpoints and episode/character links.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_associations, get_db, get_upserts, paginate
from api.schemas.catalog import EpisodeCharacterLink, EpisodeUpdate
from tvcatalog.associations import AssociationManager
from tvcatalog.database import DatabaseManager
from tvcatalog.errors import NotFoundError, ValidationError
from tvcatalog.upsert import ABSENT, UpsertEngine

router = APIRouter()
logger = logging.getLogger("api.episodes")


def _require_episode(db: DatabaseManager, episode_id: int) -> dict:
    episode = db.get_episode(episode_id)
    if not episode:
        raise NotFoundError("Episode", episode_id)
    return episode


@router.get("/episodes")
async def list_episodes(
    limit: int = Query(100, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    show_id: Optional[int] = Query(None, description="Filter by show"),
    season_id: Optional[int] = Query(None, description="Filter by season"),
    db: DatabaseManager = Depends(get_db),
):
    episodes, total = db.list_episodes(limit=limit, offset=offset, show_id=show_id, season_id=season_id)
    return paginate(episodes, total, limit, offset)


@router.get("/episodes/{episode_id}")
async def get_episode(episode_id: int, db: DatabaseManager = Depends(get_db)):
    return _require_episode(db, episode_id)


@router.put("/episodes/{episode_id}")
async def update_episode(
    episode_id: int,
    body: EpisodeUpdate,
    db: DatabaseManager = Depends(get_db),
    upserts: UpsertEngine = Depends(get_upserts),
):
    """
    Partially update an episode. season_number moves it to another
    existing season of the same show.
    """
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("No fields to update")

    if "season_number" in changes:
        season_number = changes.pop("season_number")
        if season_number is None:
            raise ValidationError("season_number cannot be null")
        episode = _require_episode(db, episode_id)
        season = db.get_season_by_number(episode["show_id"], season_number)
        if not season:
            raise ValidationError(
                f"Season {season_number} does not exist for show {episode['show_id']}",
                details={"show_id": episode["show_id"], "season_number": season_number},
            )
        changes["season_id"] = season["id"]

    upserts.update("episode", episode_id, changes)
    return db.get_episode(episode_id)


@router.delete("/episodes/{episode_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_episode(episode_id: int, db: DatabaseManager = Depends(get_db)):
    if not db.delete_row("episodes", episode_id):
        raise NotFoundError("Episode", episode_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============ LINKS ============

@router.get("/episodes/{episode_id}/characters")
async def list_episode_characters(
    episode_id: int,
    limit: int = Query(100, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    db: DatabaseManager = Depends(get_db),
):
    _require_episode(db, episode_id)
    characters, total = db.list_episode_characters(episode_id, limit=limit, offset=offset)
    return paginate(characters, total, limit, offset)


@router.post("/episodes/{episode_id}/characters")
async def link_episode_character(
    episode_id: int,
    body: EpisodeCharacterLink,
    response: Response,
    associations: AssociationManager = Depends(get_associations),
):
    """
    Link a character to an episode.

    The character is given by id, or by name within the episode's show
    (created when missing). The actor is only changed when actor_name or
    actor_id is sent. Returns 201 for a new link and 200 when it existed.
    """
    sent = body.model_fields_set
    result = associations.link_character_to_episode(
        episode_id,
        character_name=body.character_name,
        actor_name=body.actor_name if "actor_name" in sent else ABSENT,
        character_id=body.character_id,
        actor_id=body.actor_id if "actor_id" in sent else ABSENT,
    )
    response.status_code = status.HTTP_201_CREATED if result.created else status.HTTP_200_OK
    return result.to_dict()


@router.delete("/episodes/{episode_id}/characters/{character_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unlink_episode_character(
    episode_id: int,
    character_id: int,
    associations: AssociationManager = Depends(get_associations),
):
    associations.unlink_character_from_episode(episode_id, character_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
