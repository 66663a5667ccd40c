"""
Job Database Model

SQLAlchemy 2.0 model for job postings discovered by the scanner.
"""

from typing import Optional
from datetime import datetime

from sqlalchemy import (
    Integer, String, Text, DateTime, Boolean, ForeignKey,
    CheckConstraint, Index, UniqueConstraint
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from jobseeker.core.database import Base
from jobseeker.scrapers.base import JobSource, JobStatus, JobType


def _in_list(column: str, enum) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum)
    return f"{column} IN ({values})"


class Job(Base):
    """
    Job posting owned by one user.

    Scraped fields are written once by the scanner; the analysis and
    application columns belong to the analysis workflow.
    """

    __tablename__ = "jobs"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Ownership
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    user: Mapped["User"] = relationship(back_populates="jobs")

    # Scraped job information
    external_id: Mapped[str] = mapped_column(String(512), nullable=False)
    source: Mapped[str] = mapped_column(String(20), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    company: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    location: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    salary: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    job_type: Mapped[str] = mapped_column(String(20), default=JobType.UNKNOWN.value, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=JobStatus.DISCOVERED.value, nullable=False)

    # Analysis fields
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    requirements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    match_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    analysis: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_analyzed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    analyzed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Application
    applied_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    cover_letter: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Metadata
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    __table_args__ = (
        # A posting is stored at most once per user
        UniqueConstraint('user_id', 'external_id', name='uq_job_user_external_id'),

        CheckConstraint(
            'match_score >= 0 AND match_score <= 100 OR match_score IS NULL',
            name='ck_job_match_score_range'
        ),
        CheckConstraint(_in_list('source', JobSource), name='ck_job_source_valid'),
        CheckConstraint(_in_list('job_type', JobType), name='ck_job_type_valid'),
        CheckConstraint(_in_list('status', JobStatus), name='ck_job_status_valid'),

        Index('idx_job_source', 'source'),
        Index('idx_job_job_type', 'job_type'),
        Index('idx_job_status', 'status'),
        Index('idx_job_is_analyzed', 'is_analyzed'),
        Index('idx_job_user_created', 'user_id', 'created_at'),
    )

    def __repr__(self) -> str:
        """String representation of Job."""
        return f"<Job(id={self.id}, external_id='{self.external_id}', title='{self.title}')>"

    @property
    def is_contract_role(self) -> bool:
        return self.job_type == JobType.CONTRACT.value

    @property
    def is_permanent_role(self) -> bool:
        return self.job_type == JobType.PERMANENT.value
