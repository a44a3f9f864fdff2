"""
Query job schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class QueryJobRequest(BaseModel):
    """
    Body of POST /{entity}/query-jobs.

    Filter fields (title, show_id, year_min, ...) are passed at the top
    level next to include and delay_ms; which ones are accepted depends on
    the entity.
    """

    model_config = ConfigDict(extra="allow")

    include: Optional[str] = Field(None, description="Comma list of dotted include paths")
    delay_ms: Optional[int] = Field(None, ge=0, description="Simulated processing delay")

    @property
    def filters(self) -> dict:
        return dict(self.model_extra or {})


class QueryJobAccepted(BaseModel):
    job_id: str
    status: str
    eta_ms: int
    poll_url: str
    download_url: str
