from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.database import get_db
from jobboard.services.blob_storage import BlobStorage, get_blob_storage
from jobboard.services.cache import TaxonomyCache, get_cache
from jobboard.services.job_service import JobService
from jobboard.services.saved_jobs import SavedJobService
from jobboard.services.taxonomy import TaxonomyService


async def get_taxonomy_cache() -> Optional[TaxonomyCache]:
    return await get_cache()


def get_job_service(db: AsyncSession = Depends(get_db)) -> JobService:
    return JobService(db)


def get_taxonomy_service(
    db: AsyncSession = Depends(get_db),
    cache: Optional[TaxonomyCache] = Depends(get_taxonomy_cache),
) -> TaxonomyService:
    return TaxonomyService(db, cache)


def get_saved_job_service(db: AsyncSession = Depends(get_db)) -> SavedJobService:
    return SavedJobService(db)


def get_storage() -> BlobStorage:
    return get_blob_storage()
