"""
Saved Jobs Service - a signed-in user's bookmarked listings.

Saves are rows in the saved_jobs table keyed by (user_id, job_id), so
saving twice is a no-op and state survives restarts.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.repositories import JobRepository, SavedJobRepository
from jobboard.schemas.job import JobResponse
from jobboard.services.assembler import assemble_jobs

logger = logging.getLogger(__name__)


class SavedJobService:
    def __init__(self, session: AsyncSession):
        self.saved = SavedJobRepository(session)
        self.jobs = JobRepository(session)

    async def list_saved(self, user_id: str) -> List[JobResponse]:
        return assemble_jobs(await self.saved.list_jobs(user_id))

    async def is_saved(self, user_id: str, job_id: str) -> bool:
        return await self.saved.exists(user_id, job_id)

    async def save(self, user_id: str, job_id: str) -> bool:
        """
        Returns:
            False when the job does not exist, True once it is saved
        """
        if not await self.jobs.exists(job_id):
            logger.info(f"User {user_id} tried to save unknown job {job_id}")
            return False
        await self.saved.add(user_id, job_id)
        return True

    async def unsave(self, user_id: str, job_id: str) -> bool:
        return await self.saved.remove(user_id, job_id)
