"""
Job Scrapers Package

Extractors for SEEK, LinkedIn and Indeed search result pages, the polite
fetcher they run behind, and the pure helpers for deduplication keys and
job type classification.
"""

from typing import Dict, Union

from jobseeker.core.exceptions import UnknownSourceError

from .base import JobSource, JobType, JobStatus, RawJobRecord
from .extractor import AnchorRule, BaseExtractor, CardStrategy, FieldRule
from .fetcher import DomainGroup, FetchResult, PoliteFetcher, default_domain_groups
from .indeed import IndeedExtractor
from .linkedin import LinkedInExtractor
from .seek import SeekExtractor
from .utils import classify_job_type, derive_external_id

EXTRACTORS: Dict[JobSource, BaseExtractor] = {
    JobSource.SEEK: SeekExtractor(),
    JobSource.LINKEDIN: LinkedInExtractor(),
    JobSource.INDEED: IndeedExtractor(),
}


def get_extractor(source: Union[str, JobSource]) -> BaseExtractor:
    """
    Get the extractor for a source.

    Raises:
        UnknownSourceError: If no extractor exists for the source
    """
    try:
        return EXTRACTORS[JobSource(source)]
    except ValueError:
        raise UnknownSourceError(str(source)) from None


__all__ = [
    # Records
    'JobSource',
    'JobType',
    'JobStatus',
    'RawJobRecord',

    # Extraction
    'AnchorRule',
    'BaseExtractor',
    'CardStrategy',
    'FieldRule',
    'SeekExtractor',
    'LinkedInExtractor',
    'IndeedExtractor',
    'get_extractor',

    # Fetching
    'DomainGroup',
    'FetchResult',
    'PoliteFetcher',
    'default_domain_groups',

    # Utilities
    'classify_job_type',
    'derive_external_id',
]
