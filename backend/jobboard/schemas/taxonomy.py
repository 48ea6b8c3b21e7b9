from pydantic import BaseModel, Field
from typing import Literal, Optional

SkillCategory = Literal["technical", "soft", "language", "business", "creative"]


class SubdomainCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None


class SubdomainResponse(SubdomainCreate):
    id: str
    domain_id: str

    class Config:
        from_attributes = True


class DomainCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    subdomains: list[SubdomainCreate] = []


class DomainUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None


class DomainResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    subdomains: list[SubdomainResponse] = []

    class Config:
        from_attributes = True


class PopularDomainResponse(DomainResponse):
    job_count: int


class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: Optional[SkillCategory] = None


class SkillUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[SkillCategory] = None


class SkillResponse(BaseModel):
    id: str
    name: str
    category: Optional[str] = None

    class Config:
        from_attributes = True


class PopularSkillResponse(SkillResponse):
    job_count: int


class SkillListResponse(BaseModel):
    skills: list[SkillResponse]
    total: int
    page: int
    page_size: int
    page_count: int
