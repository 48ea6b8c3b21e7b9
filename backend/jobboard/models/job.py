"""
Job Model - SQLAlchemy ORM model for job postings

Jobs are created by admins, belong to one Company, and are classified by
Domains, Subdomains and Skills. View and click counters are only ever
changed through atomic ``col = col + n`` updates.

Invariants enforced on creation (see JobService.create_job):
    - posted_date <= now
    - salary_min <= salary_max when both are present
    - at least one domain
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from jobboard.database import Base
from jobboard.utils import utcnow
import uuid


job_domains = Table(
    "job_domains",
    Base.metadata,
    Column("job_id", String, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True),
    Column("domain_id", String, ForeignKey("domains.id", ondelete="CASCADE"), primary_key=True),
)

job_subdomains = Table(
    "job_subdomains",
    Base.metadata,
    Column("job_id", String, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True),
    Column("subdomain_id", String, ForeignKey("subdomains.id", ondelete="CASCADE"), primary_key=True),
)


class Job(Base):
    """
    Job posting entity.

    Attributes:
        id: UUID primary key
        company_id: Owning company
        location_type: Remote | Hybrid | On-site
        salary_min/max: Salary range (nullable)
        salary_period: YEARLY | MONTHLY | HOURLY
        job_type: Full-time | Part-time | Contract | Internship
        experience_level: Entry | Mid | Senior | Lead | Executive
        application_link: External URL the apply action redirects to
        is_active: Only active jobs are publicly listed (indexed)
        view_count/click_count: Engagement counters
        image_url/qr_code_url: Uploaded share image assets
    """

    __tablename__ = "jobs"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=False)
    responsibilities = Column(Text, nullable=True)
    requirements = Column(Text, nullable=True)
    preferred_skills = Column(Text, nullable=True)
    company_id = Column(String, ForeignKey("companies.id"), nullable=False, index=True)
    location = Column(String(500), nullable=True)
    location_type = Column(String(20), nullable=False, default="On-site")
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    salary_currency = Column(String(3), nullable=False, default="USD")
    salary_period = Column(String(10), nullable=False, default="YEARLY")
    job_type = Column(String(20), nullable=False, default="Full-time")
    experience_level = Column(String(20), nullable=False, default="Mid")
    application_link = Column(String(2000), nullable=False)
    application_deadline = Column(DateTime, nullable=True)
    posted_date = Column(DateTime, nullable=False, default=utcnow, index=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    view_count = Column(Integer, nullable=False, default=0)
    click_count = Column(Integer, nullable=False, default=0)
    image_url = Column(String(2000), nullable=True)
    qr_code_url = Column(String(2000), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    company = relationship("Company", back_populates="jobs")
    domains = relationship("Domain", secondary=job_domains, back_populates="jobs", order_by="Domain.name")
    subdomains = relationship("Subdomain", secondary=job_subdomains, back_populates="jobs", order_by="Subdomain.name")
    skills = relationship(
        "JobSkill",
        back_populates="job",
        cascade="all, delete-orphan",
        order_by="JobSkill.position",
    )
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")
    saved_by = relationship("SavedJob", back_populates="job", cascade="all, delete-orphan")


class JobSkill(Base):
    """Join record between Job and Skill carrying the primary-skill flag."""

    __tablename__ = "job_skills"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    job_id = Column(String, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(String, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True)
    is_primary = Column(Boolean, nullable=False, default=False)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    job = relationship("Job", back_populates="skills")
    skill = relationship("Skill", back_populates="jobs")

    __table_args__ = (
        UniqueConstraint("job_id", "skill_id", name="uq_job_skills_job_skill"),
    )
