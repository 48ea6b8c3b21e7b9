from typing import List

from fastapi import APIRouter, Depends, HTTPException

from jobboard.api.deps import get_job_service, get_saved_job_service
from jobboard.auth import require_user
from jobboard.schemas import ActionResult, ApplicationResponse, JobResponse, SavedJobStatus
from jobboard.services.job_service import JobService
from jobboard.services.saved_jobs import SavedJobService

router = APIRouter()


@router.get("/saved-jobs", response_model=List[JobResponse])
async def list_saved_jobs(
    user_id: str = Depends(require_user),
    service: SavedJobService = Depends(get_saved_job_service),
):
    return await service.list_saved(user_id)


@router.get("/saved-jobs/{job_id}", response_model=SavedJobStatus)
async def saved_job_status(
    job_id: str,
    user_id: str = Depends(require_user),
    service: SavedJobService = Depends(get_saved_job_service),
):
    return SavedJobStatus(job_id=job_id, saved=await service.is_saved(user_id, job_id))


@router.post("/saved-jobs/{job_id}", response_model=ActionResult)
async def save_job(
    job_id: str,
    user_id: str = Depends(require_user),
    service: SavedJobService = Depends(get_saved_job_service),
):
    if not await service.save(user_id, job_id):
        raise HTTPException(status_code=404, detail="Job not found")
    return ActionResult(success=True, message="Job saved")


@router.delete("/saved-jobs/{job_id}", response_model=ActionResult)
async def unsave_job(
    job_id: str,
    user_id: str = Depends(require_user),
    service: SavedJobService = Depends(get_saved_job_service),
):
    removed = await service.unsave(user_id, job_id)
    return ActionResult(
        success=removed,
        message="Job removed from saved jobs" if removed else "Job was not saved",
    )


@router.get("/applications", response_model=List[ApplicationResponse])
async def list_applications(
    user_id: str = Depends(require_user),
    service: JobService = Depends(get_job_service),
):
    return await service.list_applications(user_id)
