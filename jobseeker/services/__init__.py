"""
Services Layer

Business logic layer: the persistence gate for scraped jobs and the scan
orchestrator that drives fetching, extraction and storage.
"""

from .job_service import JobService, SaveResult
from .scan_service import ScanReport, ScanService, SourceSummary

__all__ = [
    "JobService",
    "SaveResult",
    "ScanReport",
    "ScanService",
    "SourceSummary",
]
