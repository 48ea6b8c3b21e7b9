"""
Taxonomy Models - classification used to filter and relate jobs.

    Domain 1──* Subdomain
    Domain *──* Job        (job_domains)
    Subdomain *──* Job     (job_subdomains)
    Skill 1──* JobSkill *──1 Job
"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from jobboard.database import Base
import uuid


class Domain(Base):
    __tablename__ = "domains"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    subdomains = relationship(
        "Subdomain",
        back_populates="domain",
        cascade="all, delete-orphan",
        order_by="Subdomain.name",
    )
    jobs = relationship("Job", secondary="job_domains", back_populates="domains")


class Subdomain(Base):
    __tablename__ = "subdomains"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    domain_id = Column(String, ForeignKey("domains.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    domain = relationship("Domain", back_populates="subdomains")
    jobs = relationship("Job", secondary="job_subdomains", back_populates="subdomains")


class Skill(Base):
    __tablename__ = "skills"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False, unique=True)
    category = Column(String(50), nullable=True)  # technical | soft | language | business | creative
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    jobs = relationship("JobSkill", back_populates="skill", cascade="all, delete-orphan")
