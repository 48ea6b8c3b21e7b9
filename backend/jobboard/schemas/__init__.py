from jobboard.schemas.job import (
    JobCreate,
    JobUpdate,
    JobResponse,
    JobListResponse,
    JobSkillInput,
    ShareImageUpdate,
)
from jobboard.schemas.company import CompanyCreate, CompanyUpdate, CompanyResponse
from jobboard.schemas.taxonomy import (
    DomainCreate,
    DomainUpdate,
    DomainResponse,
    PopularDomainResponse,
    SubdomainCreate,
    SubdomainResponse,
    SkillCreate,
    SkillUpdate,
    SkillResponse,
    SkillListResponse,
    PopularSkillResponse,
)
from jobboard.schemas.application import ApplicationResponse, SavedJobStatus, ActionResult
from jobboard.schemas.auth import CurrentUserResponse

__all__ = [
    "JobCreate",
    "JobUpdate",
    "JobResponse",
    "JobListResponse",
    "JobSkillInput",
    "ShareImageUpdate",
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    "DomainCreate",
    "DomainUpdate",
    "DomainResponse",
    "PopularDomainResponse",
    "SubdomainCreate",
    "SubdomainResponse",
    "SkillCreate",
    "SkillUpdate",
    "SkillResponse",
    "SkillListResponse",
    "PopularSkillResponse",
    "ApplicationResponse",
    "SavedJobStatus",
    "ActionResult",
    "CurrentUserResponse",
]
