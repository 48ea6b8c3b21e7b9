from jobboard.repositories.base import BaseRepository, translate_storage_errors
from jobboard.repositories.jobs import JobRepository, JOB_RELATIONS
from jobboard.repositories.companies import CompanyRepository
from jobboard.repositories.taxonomy import DomainRepository, SkillRepository
from jobboard.repositories.interactions import ApplicationRepository, SavedJobRepository

__all__ = [
    "BaseRepository",
    "translate_storage_errors",
    "JobRepository",
    "JOB_RELATIONS",
    "CompanyRepository",
    "DomainRepository",
    "SkillRepository",
    "ApplicationRepository",
    "SavedJobRepository",
]
