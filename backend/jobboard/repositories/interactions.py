"""
Application and SavedJob Repositories

Both tables are keyed by (user_id, job_id). Writes use the dialect's native
``INSERT ... ON CONFLICT`` so duplicate concurrent submissions collapse into
one row instead of racing a check-then-insert.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import selectinload

from jobboard.models import Application, Job, SavedJob
from jobboard.repositories.base import BaseRepository, translate_storage_errors
from jobboard.repositories.jobs import JOB_RELATIONS
from jobboard.utils import utcnow

logger = logging.getLogger(__name__)

UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

USER_JOB_KEY = ["user_id", "job_id"]


class UpsertMixin:
    def _insert(self, model):
        insert = UPSERT_DIALECTS.get(self.dialect_name)
        if insert is None:
            raise NotImplementedError(f"Upsert not supported for dialect: {self.dialect_name}")
        return insert(model)


class ApplicationRepository(UpsertMixin, BaseRepository):
    @translate_storage_errors
    async def upsert_click(
        self,
        user_id: str,
        job_id: str,
        clicked_at: Optional[datetime] = None,
    ) -> None:
        """
        Create the (user, job) application in CLICKED state, or bump
        clicked_at/updated_at on an existing one. Status is left untouched
        on conflict.
        """
        at = clicked_at or utcnow()
        stmt = self._insert(Application).values(
            id=str(uuid.uuid4()),
            user_id=user_id,
            job_id=job_id,
            status="CLICKED",
            clicked_at=at,
            status_updated_at=at,
            created_at=at,
            updated_at=at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=USER_JOB_KEY,
            set_={
                "clicked_at": stmt.excluded.clicked_at,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.commit()

    @translate_storage_errors
    async def get(self, user_id: str, job_id: str) -> Optional[Application]:
        query = (
            select(Application)
            .where(Application.user_id == user_id, Application.job_id == job_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def list_for_user(self, user_id: str) -> List[Application]:
        query = (
            select(Application)
            .where(Application.user_id == user_id)
            .options(selectinload(Application.job).options(*JOB_RELATIONS))
            .order_by(Application.clicked_at.desc(), Application.id.asc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    @translate_storage_errors
    async def count_by_status(self) -> dict:
        query = select(Application.status, func.count(Application.id)).group_by(Application.status)
        result = await self.session.execute(query)
        return {row[0]: row[1] for row in result.all()}


class SavedJobRepository(UpsertMixin, BaseRepository):
    @translate_storage_errors
    async def add(self, user_id: str, job_id: str) -> None:
        stmt = self._insert(SavedJob).values(
            id=str(uuid.uuid4()),
            user_id=user_id,
            job_id=job_id,
            saved_at=utcnow(),
        )
        stmt = stmt.on_conflict_do_nothing(index_elements=USER_JOB_KEY)
        await self.session.execute(stmt)
        await self.session.commit()

    @translate_storage_errors
    async def remove(self, user_id: str, job_id: str) -> bool:
        result = await self.session.execute(
            delete(SavedJob).where(SavedJob.user_id == user_id, SavedJob.job_id == job_id)
        )
        await self.session.commit()
        return result.rowcount > 0

    @translate_storage_errors
    async def exists(self, user_id: str, job_id: str) -> bool:
        result = await self.session.execute(
            select(SavedJob.id).where(SavedJob.user_id == user_id, SavedJob.job_id == job_id)
        )
        return result.scalar_one_or_none() is not None

    @translate_storage_errors
    async def list_jobs(self, user_id: str) -> List[Job]:
        """Saved jobs for a user, most recently saved first."""
        query = (
            select(Job)
            .join(SavedJob, SavedJob.job_id == Job.id)
            .where(SavedJob.user_id == user_id)
            .options(*JOB_RELATIONS)
            .order_by(SavedJob.saved_at.desc(), Job.id.asc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
