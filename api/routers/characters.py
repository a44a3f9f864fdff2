"""
Character endpoints. Characters are created under /shows/{show_id}/characters.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_db, get_upserts, paginate
from api.schemas.catalog import CharacterUpdate
from tvcatalog.database import DatabaseManager
from tvcatalog.errors import NotFoundError, ValidationError
from tvcatalog.upsert import UpsertEngine

router = APIRouter()


@router.get("/characters")
async def list_characters(
    limit: int = Query(100, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    show_id: Optional[int] = Query(None, description="Filter by show"),
    actor_id: Optional[int] = Query(None, description="Filter by actor"),
    db: DatabaseManager = Depends(get_db),
):
    characters, total = db.list_characters(limit=limit, offset=offset, show_id=show_id, actor_id=actor_id)
    return paginate(characters, total, limit, offset)


@router.get("/characters/{character_id}")
async def get_character(character_id: int, db: DatabaseManager = Depends(get_db)):
    character = db.get_character(character_id)
    if not character:
        raise NotFoundError("Character", character_id)
    return character


@router.put("/characters/{character_id}")
async def update_character(
    character_id: int,
    body: CharacterUpdate,
    db: DatabaseManager = Depends(get_db),
    upserts: UpsertEngine = Depends(get_upserts),
):
    """
    Partially update a character.

    "actor_name": null removes the actor; leaving actor_name out keeps it.
    """
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("No fields to update")
    upserts.update("character", character_id, changes)
    return db.get_character(character_id)


@router.delete("/characters/{character_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_character(character_id: int, db: DatabaseManager = Depends(get_db)):
    if not db.delete_row("characters", character_id):
        raise NotFoundError("Character", character_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
