"""
Actor endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_db, get_upserts, paginate
from api.schemas.catalog import ActorCreate, ActorUpdate
from tvcatalog.database import DatabaseManager
from tvcatalog.errors import NotFoundError, ValidationError
from tvcatalog.upsert import UpsertEngine

router = APIRouter()
logger = logging.getLogger("api.actors")


@router.get("/actors")
async def list_actors(
    limit: int = Query(100, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    name: Optional[str] = Query(None, description="Exact name"),
    db: DatabaseManager = Depends(get_db),
):
    actors, total = db.list_actors(limit=limit, offset=offset, name=name)
    return paginate(actors, total, limit, offset)


@router.post("/actors", status_code=status.HTTP_201_CREATED)
async def create_actor(
    body: ActorCreate,
    db: DatabaseManager = Depends(get_db),
    upserts: UpsertEngine = Depends(get_upserts),
):
    actor_id = upserts.create("actor", body.model_dump(exclude_unset=True))
    return db.get_actor(actor_id)


@router.get("/actors/{actor_id}")
async def get_actor(actor_id: int, db: DatabaseManager = Depends(get_db)):
    actor = db.get_actor(actor_id)
    if not actor:
        raise NotFoundError("Actor", actor_id)
    return actor


@router.put("/actors/{actor_id}")
async def update_actor(
    actor_id: int,
    body: ActorUpdate,
    db: DatabaseManager = Depends(get_db),
    upserts: UpsertEngine = Depends(get_upserts),
):
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("No fields to update")
    upserts.update("actor", actor_id, changes)
    return db.get_actor(actor_id)


@router.delete("/actors/{actor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_actor(actor_id: int, db: DatabaseManager = Depends(get_db)):
    """
    Delete an actor. Their characters stay, with no actor.
    """
    if not db.delete_row("actors", actor_id):
        raise NotFoundError("Actor", actor_id)
    logger.info(f"Actor deleted: id={actor_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/actors/{actor_id}/characters")
async def list_actor_characters(
    actor_id: int,
    limit: int = Query(100, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    db: DatabaseManager = Depends(get_db),
):
    if not db.get_actor(actor_id):
        raise NotFoundError("Actor", actor_id)
    characters, total = db.list_characters(limit=limit, offset=offset, actor_id=actor_id)
    return paginate(characters, total, limit, offset)
