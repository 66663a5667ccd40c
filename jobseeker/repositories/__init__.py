"""
Repository Layer

Data access layer using the repository pattern for clean separation
of database operations from business logic.
"""

from .base_repository import BaseRepository
from .job_repository import JobRepository, JobStore
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "JobRepository",
    "JobStore",
    "UserRepository",
]
