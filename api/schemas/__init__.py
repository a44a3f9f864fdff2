"""Pydantic schemas for API request and response validation."""

from api.schemas.common import (
    DeploymentVersion,
    ErrorResponse,
    HealthResponse,
    PaginatedResponse,
    PaginationMeta,
)
from api.schemas.catalog import (
    ActorCreate,
    ActorUpdate,
    CharacterCreate,
    CharacterUpdate,
    EpisodeCharacterLink,
    EpisodeCreate,
    EpisodeUpdate,
    SeasonCreate,
    SeasonUpdate,
    ShowCreate,
    ShowUpdate,
)
from api.schemas.jobs import QueryJobAccepted, QueryJobRequest

__all__ = [
    "DeploymentVersion",
    "ErrorResponse",
    "HealthResponse",
    "PaginatedResponse",
    "PaginationMeta",
    "ActorCreate",
    "ActorUpdate",
    "CharacterCreate",
    "CharacterUpdate",
    "EpisodeCharacterLink",
    "EpisodeCreate",
    "EpisodeUpdate",
    "SeasonCreate",
    "SeasonUpdate",
    "ShowCreate",
    "ShowUpdate",
    "QueryJobAccepted",
    "QueryJobRequest",
]
