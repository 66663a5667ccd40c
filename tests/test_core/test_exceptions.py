"""
Tests for the application exception hierarchy.
"""

import pytest

from jobseeker.core.exceptions import (
    DisallowedDomainError,
    DuplicateJobError,
    ErrorCategory,
    FetchError,
    JobNotFoundError,
    JobSeekerError,
    JobStoreError,
    ScrapingError,
    UnknownSourceError,
)


@pytest.mark.unit
class TestExceptions:
    """Test exception classification and structured output."""

    def test_to_dict(self):
        error = FetchError("https://www.seek.com.au/jobs", "HTTP error 503", status_code=503)

        data = error.to_dict()

        assert data["error_type"] == "FetchError"
        assert data["message"] == "HTTP error 503"
        assert data["category"] == "network"
        assert data["details"] == {"url": "https://www.seek.com.au/jobs", "status_code": 503}
        assert "timestamp" in data

    def test_disallowed_domain_is_fetch_error(self):
        error = DisallowedDomainError("https://example.com/x", "example.com")

        assert isinstance(error, FetchError)
        assert isinstance(error, ScrapingError)
        assert error.host == "example.com"
        assert error.status_code is None

    def test_store_errors(self):
        not_found = JobNotFoundError("seek-1", 7)
        duplicate = DuplicateJobError("seek-1", 7)

        assert isinstance(not_found, JobStoreError)
        assert isinstance(duplicate, JobStoreError)
        assert not_found.category == ErrorCategory.NOT_FOUND
        assert duplicate.category == ErrorCategory.DATABASE
        assert not_found.details == {"external_id": "seek-1", "user_id": 7}

    def test_unknown_source(self):
        error = UnknownSourceError("monster")

        assert isinstance(error, JobSeekerError)
        assert "monster" in str(error)
