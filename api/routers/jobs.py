"""
Query job endpoints.

A job is queued with POST /{entity}/query-jobs, polled at /jobs/{id} and
its rows fetched as a JSON attachment from /jobs/{id}/download.
"""

import json
import logging
from enum import Enum

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_jobs
from api.schemas.jobs import QueryJobAccepted, QueryJobRequest
from tvcatalog.jobs import JobManager

router = APIRouter()
logger = logging.getLogger("api.jobs")


class QueryEntity(str, Enum):
    """Entities that support query jobs."""

    shows = "shows"
    seasons = "seasons"
    episodes = "episodes"
    characters = "characters"
    actors = "actors"


@router.post(
    "/{entity}/query-jobs",
    response_model=QueryJobAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
async def create_query_job(
    entity: QueryEntity,
    body: QueryJobRequest,
    jobs: JobManager = Depends(get_jobs),
):
    """
    Queue a filtered query. Filters go at the top level of the body.
    """
    job = jobs.submit(entity.value, body.filters, body.include, body.delay_ms)
    return QueryJobAccepted(
        job_id=job.id,
        status=job.status,
        eta_ms=job.delay_ms,
        poll_url=f"/jobs/{job.id}",
        download_url=f"/jobs/{job.id}/download",
    )


@router.get("/jobs/{job_id}")
async def get_job(job_id: str, jobs: JobManager = Depends(get_jobs)):
    return jobs.get(job_id).to_dict()


@router.get("/jobs/{job_id}/download")
async def download_job(job_id: str, jobs: JobManager = Depends(get_jobs)):
    """
    Download job results; 409 until the job has completed.
    """
    payload = jobs.download(job_id)
    job = jobs.get(job_id)
    return Response(
        content=json.dumps(payload, indent=2, ensure_ascii=False),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{job.filename}"'},
    )


@router.delete("/jobs/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(job_id: str, jobs: JobManager = Depends(get_jobs)):
    jobs.delete(job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
