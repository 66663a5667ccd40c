"""
Database Models Package

Contains SQLAlchemy ORM models for the JobSeeker application.
"""

from jobseeker.core.database import Base
from jobseeker.models.job import Job
from jobseeker.models.user import User

__all__ = [
    "Base",
    "Job",
    "User",
]
