"""
Request bodies for catalog entities.

Update models leave every field optional. Routers forward only the fields
the client sent (exclude_unset), so an omitted field is left alone while
an explicit null clears it.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ShowCreate(_Body):
    title: str = Field(..., min_length=1)
    year: Optional[int] = None
    description: Optional[str] = None


class ShowUpdate(_Body):
    title: Optional[str] = Field(None, min_length=1)
    year: Optional[int] = None
    description: Optional[str] = None


class SeasonCreate(_Body):
    season_number: int = Field(..., ge=0)
    year: Optional[int] = None


class SeasonUpdate(_Body):
    season_number: Optional[int] = Field(None, ge=0)
    year: Optional[int] = None


class EpisodeCreate(_Body):
    season_number: int = Field(..., ge=0, description="Season of the show; must already exist")
    title: str = Field(..., min_length=1)
    air_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    description: Optional[str] = None


class EpisodeUpdate(_Body):
    season_number: Optional[int] = Field(None, ge=0, description="Move to another season of the same show")
    title: Optional[str] = Field(None, min_length=1)
    air_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    description: Optional[str] = None


class ActorCreate(_Body):
    name: str = Field(..., min_length=1)


class ActorUpdate(_Body):
    name: Optional[str] = Field(None, min_length=1)


class CharacterCreate(_Body):
    name: str = Field(..., min_length=1)
    actor_id: Optional[int] = None
    actor_name: Optional[str] = None


class CharacterUpdate(_Body):
    name: Optional[str] = Field(None, min_length=1)
    actor_id: Optional[int] = None
    actor_name: Optional[str] = Field(None, description="null clears the actor; omit to keep it")


class EpisodeCharacterLink(_Body):
    """Link by character_id, or by character_name within the episode's show."""

    character_id: Optional[int] = None
    character_name: Optional[str] = None
    actor_id: Optional[int] = None
    actor_name: Optional[str] = None
