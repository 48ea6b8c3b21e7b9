from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import RedirectResponse

from jobboard.api.deps import get_job_service
from jobboard.auth import get_current_user_id
from jobboard.config import get_settings
from jobboard.schemas import JobListResponse, JobResponse
from jobboard.services.filters import parse_filter_params
from jobboard.services.job_service import JobService

router = APIRouter()


@router.get("", response_model=JobListResponse)
async def list_jobs(
    request: Request,
    service: JobService = Depends(get_job_service),
):
    settings = get_settings()
    filters = parse_filter_params(
        request.query_params.multi_items(),
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
    return await service.search(filters)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: str,
    service: JobService = Depends(get_job_service),
):
    job = await service.get_by_id(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    await service.increment_view(job_id)
    return job


@router.get("/{job_id}/similar", response_model=List[JobResponse])
async def similar_jobs(
    job_id: str,
    limit: Optional[int] = Query(None, ge=1, le=20),
    service: JobService = Depends(get_job_service),
):
    n = limit or get_settings().similar_jobs_limit
    return await service.get_similar(job_id, n)


@router.post("/{job_id}/apply")
async def apply_to_job(
    job_id: str,
    service: JobService = Depends(get_job_service),
    user_id: Optional[str] = Depends(get_current_user_id),
):
    url = await service.track_apply(job_id, user_id)
    return RedirectResponse(url=url, status_code=303)
