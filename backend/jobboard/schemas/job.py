from pydantic import AnyHttpUrl, BaseModel, Field
from datetime import datetime
from typing import Literal, Optional

from jobboard.schemas.company import CompanyResponse

JobType = Literal["Full-time", "Part-time", "Contract", "Internship"]
ExperienceLevel = Literal["Entry", "Mid", "Senior", "Lead", "Executive"]
LocationType = Literal["Remote", "Hybrid", "On-site"]
SalaryPeriod = Literal["YEARLY", "MONTHLY", "HOURLY"]


class JobSkillInput(BaseModel):
    skill_id: str
    is_primary: bool = False


class JobCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: str = Field(..., min_length=1)
    responsibilities: Optional[str] = None
    requirements: Optional[str] = None
    preferred_skills: Optional[str] = None
    company_id: str
    location: Optional[str] = None
    location_type: LocationType = "On-site"
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)
    salary_currency: str = Field("USD", min_length=3, max_length=3)
    salary_period: SalaryPeriod = "YEARLY"
    job_type: JobType = "Full-time"
    experience_level: ExperienceLevel = "Mid"
    application_link: AnyHttpUrl
    application_deadline: Optional[datetime] = None
    posted_date: Optional[datetime] = None
    is_active: bool = True
    domain_ids: list[str] = []
    subdomain_ids: list[str] = []
    skills: list[JobSkillInput] = []


class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = Field(None, min_length=1)
    responsibilities: Optional[str] = None
    requirements: Optional[str] = None
    preferred_skills: Optional[str] = None
    company_id: Optional[str] = None
    location: Optional[str] = None
    location_type: Optional[LocationType] = None
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)
    salary_currency: Optional[str] = Field(None, min_length=3, max_length=3)
    salary_period: Optional[SalaryPeriod] = None
    job_type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None
    application_link: Optional[AnyHttpUrl] = None
    application_deadline: Optional[datetime] = None
    is_active: Optional[bool] = None
    domain_ids: Optional[list[str]] = None
    subdomain_ids: Optional[list[str]] = None
    skills: Optional[list[JobSkillInput]] = None


class ShareImageUpdate(BaseModel):
    image_url: Optional[str] = None
    qr_code_url: Optional[str] = None


class DomainRef(BaseModel):
    id: str
    name: str
    description: Optional[str] = None


class SubdomainRef(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    domain_id: str
    domain_name: Optional[str] = None


class JobSkillResponse(BaseModel):
    id: str
    name: str
    category: Optional[str] = None
    is_primary: bool = False


class JobResponse(BaseModel):
    id: str
    title: str
    description: str
    responsibilities: Optional[str] = None
    requirements: Optional[str] = None
    preferred_skills: Optional[str] = None
    company: Optional[CompanyResponse] = None
    location: Optional[str] = None
    location_type: str
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    salary_currency: str
    salary_period: str
    salary_display: str
    job_type: str
    experience_level: str
    application_link: str
    application_deadline: Optional[datetime] = None
    posted_date: datetime
    is_active: bool
    view_count: int
    click_count: int
    image_url: Optional[str] = None
    qr_code_url: Optional[str] = None
    domains: list[DomainRef] = []
    subdomains: list[SubdomainRef] = []
    skills: list[JobSkillResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobListResponse(BaseModel):
    items: list[JobResponse]
    total: int
    page: int
    page_size: int
    page_count: int
