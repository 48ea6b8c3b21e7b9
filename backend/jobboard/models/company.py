"""
Company Model - employers that own job listings.

A company owns zero or more jobs (one-to-many). Deleting a company that
still owns jobs is refused at the service layer.
"""

from sqlalchemy import Column, String, Text, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from jobboard.database import Base
import uuid


class Company(Base):
    __tablename__ = "companies"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(300), nullable=False, index=True)
    logo = Column(String(2000), nullable=True)
    website = Column(String(2000), nullable=True)
    description = Column(Text, nullable=True)
    industry = Column(JSON, nullable=False, default=list)
    size = Column(String(20), nullable=True)  # Small | Medium | Large | Enterprise
    location = Column(String(300), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    jobs = relationship("Job", back_populates="company")
