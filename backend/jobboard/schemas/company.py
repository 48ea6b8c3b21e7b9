from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional

CompanySize = Literal["Small", "Medium", "Large", "Enterprise"]


class CompanyBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=300)
    logo: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    industry: list[str] = []
    size: Optional[CompanySize] = None
    location: Optional[str] = None


class CompanyCreate(CompanyBase):
    pass


class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=300)
    logo: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    industry: Optional[list[str]] = None
    size: Optional[CompanySize] = None
    location: Optional[str] = None


class CompanyResponse(CompanyBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
