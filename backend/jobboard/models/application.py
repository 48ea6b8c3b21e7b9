"""
Application and SavedJob Models - per-user job interactions.

Users are identified by the opaque subject id of the identity provider;
there is no local users table.

Application Status Flow:
    CLICKED → APPLIED → INTERVIEWING → OFFERED/REJECTED

Both tables are unique on (user_id, job_id) so repeated clicks and saves
resolve to a single row through INSERT ... ON CONFLICT.
"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from jobboard.database import Base
from jobboard.utils import utcnow
import uuid


APPLICATION_STATUSES = ("CLICKED", "APPLIED", "INTERVIEWING", "OFFERED", "REJECTED")


class Application(Base):
    __tablename__ = "applications"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    job_id = Column(String, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="CLICKED", index=True)
    notes = Column(Text, nullable=True)
    clicked_at = Column(DateTime, nullable=False, default=utcnow)
    status_updated_at = Column(DateTime, nullable=False, default=utcnow)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    job = relationship("Job", back_populates="applications")

    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_applications_user_job"),
    )


class SavedJob(Base):
    __tablename__ = "saved_jobs"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    job_id = Column(String, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    saved_at = Column(DateTime, nullable=False, default=utcnow)

    job = relationship("Job", back_populates="saved_by")

    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_saved_jobs_user_job"),
    )
