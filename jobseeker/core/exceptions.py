"""
Custom Exceptions for JobSeeker

Structured exceptions for scraping, persistence and configuration errors.
None of the scraping or persistence errors terminate a scan; they are
logged by the component that catches them and the scan moves on.
"""

from typing import Optional, Dict, Any
from datetime import datetime
from enum import Enum


class ErrorCategory(Enum):
    """Error categories for classification and handling."""
    CONFIGURATION = "configuration"
    NETWORK = "network"
    SCRAPING = "scraping"
    DATABASE = "database"
    NOT_FOUND = "not_found"


class JobSeekerError(Exception):
    """
    Base exception for all application-specific errors.

    Carries a category and free-form details so log records stay structured.
    """

    category: ErrorCategory = ErrorCategory.SCRAPING

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
        }


class ConfigurationError(JobSeekerError):
    """Invalid or unreadable configuration."""

    category = ErrorCategory.CONFIGURATION


# Scraping Exceptions
class ScrapingError(JobSeekerError):
    """Base exception for scraping errors."""

    category = ErrorCategory.SCRAPING


class UnknownSourceError(ScrapingError):
    """Raised when no extractor exists for a source name."""

    def __init__(self, source: str):
        super().__init__(f"Unknown job source: {source}", details={"source": source})
        self.source = source


class FetchError(ScrapingError):
    """A search page could not be fetched (transport error or non-2xx)."""

    category = ErrorCategory.NETWORK

    def __init__(
        self,
        url: str,
        message: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, details={"url": url, "status_code": status_code})
        self.url = url
        self.status_code = status_code


class DisallowedDomainError(FetchError):
    """The URL's host is not on any domain group's allow-list."""

    def __init__(self, url: str, host: str):
        super().__init__(url, f"Domain not allowed: {host}")
        self.host = host


# Persistence Exceptions
class JobStoreError(JobSeekerError):
    """Job store failure other than a missing record."""

    category = ErrorCategory.DATABASE


class JobNotFoundError(JobStoreError):
    """No job exists for the given external ID and user."""

    category = ErrorCategory.NOT_FOUND

    def __init__(self, external_id: str, user_id: int):
        super().__init__(
            f"Job {external_id} not found for user {user_id}",
            details={"external_id": external_id, "user_id": user_id},
        )
        self.external_id = external_id
        self.user_id = user_id


class DuplicateJobError(JobStoreError):
    """Insert rejected by the (user_id, external_id) unique constraint."""

    def __init__(self, external_id: str, user_id: int):
        super().__init__(
            f"Job {external_id} already exists for user {user_id}",
            details={"external_id": external_id, "user_id": user_id},
        )
        self.external_id = external_id
        self.user_id = user_id


class UserNotFoundError(JobSeekerError):
    """No user exists for the given email."""

    category = ErrorCategory.NOT_FOUND

    def __init__(self, email: str):
        super().__init__(f"User not found: {email}", details={"email": email})
        self.email = email
