"""
Base Scraper Types

Standardized job record structure and the enumerations shared by the
extractors, the persistence gate and the database models.
"""

from dataclasses import dataclass
from enum import Enum


class JobSource(str, Enum):
    """Job boards with an extractor."""
    SEEK = "seek"
    LINKEDIN = "linkedin"
    INDEED = "indeed"


class JobType(str, Enum):
    """Employment classification derived from posting text."""
    CONTRACT = "contract"
    PERMANENT = "permanent"
    UNKNOWN = "unknown"


class JobStatus(str, Enum):
    """Job lifecycle status; the scanner only ever sets DISCOVERED."""
    DISCOVERED = "discovered"
    RECOMMENDED = "recommended"
    APPROVED = "approved"
    APPLIED = "applied"
    REJECTED = "rejected"


@dataclass(frozen=True)
class RawJobRecord:
    """Standardized job record produced by an extractor."""

    source: JobSource
    url: str
    title: str
    external_id: str
    job_type: JobType
    company: str = ""
    location: str = ""
    salary_text: str = ""
    status: JobStatus = JobStatus.DISCOVERED

