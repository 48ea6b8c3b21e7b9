from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from jobboard.schemas.job import JobResponse


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    status: str
    notes: Optional[str] = None
    clicked_at: datetime
    status_updated_at: datetime
    job: Optional[JobResponse] = None


class SavedJobStatus(BaseModel):
    job_id: str
    saved: bool


class ActionResult(BaseModel):
    success: bool
    message: str
