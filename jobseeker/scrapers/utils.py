"""
Scraper Utilities

Pure helpers shared by the extractors: external ID derivation for
deduplication and keyword-based job type classification.
"""

import re
from typing import Optional, Tuple
from urllib.parse import urlsplit

from jobseeker.scrapers.base import JobSource, JobType


CONTRACT_KEYWORDS: Tuple[str, ...] = (
    "contract",
    "contractor",
    "freelance",
    "hourly",
    "/hr",
    "per hour",
    "/day",
    "per day",
    "daily rate",
    "day rate",
    "temp",
    "temporary",
    "fixed term",
    "ftc",
)

PERMANENT_KEYWORDS: Tuple[str, ...] = (
    "permanent",
    "full-time",
    "full time",
    "perm",
    "per year",
    "per annum",
    "p.a.",
    "salary",
)

_INDEED_JOB_KEY = re.compile(r"(?:^|[?&;])jk=([^&#]*)")


def _segment_after(url: str, marker: str) -> Optional[str]:
    """Path segment following the first segment equal to ``marker``."""
    try:
        parts = urlsplit(url).path.split("/")
    except ValueError:
        return None
    for i, part in enumerate(parts[:-1]):
        if part == marker and parts[i + 1]:
            return parts[i + 1]
    return None


def derive_external_id(
    source: str,
    url: str,
    provider_key: Optional[str] = None,
) -> str:
    """
    Derive a source-scoped, stable deduplication key for a posting.

    Examples:
        https://www.seek.com.au/job/12345678 -> seek-12345678
        https://www.linkedin.com/jobs/view/12345678?trk=x -> linkedin-12345678
        https://au.indeed.com/viewjob?jk=abc123&from=serp -> indeed-abc123

    Args:
        source: Source name ("seek", "linkedin", "indeed")
        url: Absolute posting URL
        provider_key: Job key captured from the page, if any

    Returns:
        str: External ID; the raw URL for unknown sources
    """
    source = source.value if isinstance(source, JobSource) else source

    if provider_key:
        return f"{source}-{provider_key}"

    if source == JobSource.INDEED.value:
        match = _INDEED_JOB_KEY.search(url)
        if match and match.group(1):
            return f"indeed-{match.group(1)}"
        return f"indeed-{url}"

    if source == JobSource.LINKEDIN.value:
        segment = _segment_after(url, "view")
        if segment:
            return f"linkedin-{segment.split('?')[0]}"
        return f"linkedin-{url}"

    if source == JobSource.SEEK.value:
        segment = _segment_after(url, "job")
        if segment:
            return f"seek-{segment}"
        return f"seek-{url}"

    return url


def classify_job_type(title: str, salary_text: str, url: str) -> JobType:
    """
    Classify a posting as contract, permanent or unknown.

    Contract keywords are checked first and win even when a permanent
    keyword is also present.
    """
    combined = f"{title or ''} {salary_text or ''} {url or ''}".lower()

    if any(keyword in combined for keyword in CONTRACT_KEYWORDS):
        return JobType.CONTRACT

    if any(keyword in combined for keyword in PERMANENT_KEYWORDS):
        return JobType.PERMANENT

    return JobType.UNKNOWN
