"""
SEEK Job Extractor

Extraction rules for SEEK search result pages. SEEK ships hashed class
names, so cards are located through ``data-testid`` attributes and the
shape of the links inside them.
"""

from jobseeker.scrapers.base import JobSource
from jobseeker.scrapers.extractor import (
    BaseExtractor,
    CardStrategy,
    attr_of,
    link_text_where,
    rule,
    text_of,
    text_where,
)

TITLE_LINK = "a[data-testid='job-card-title']"


def _is_company_link(href: str) -> bool:
    # Advertiser pages end with -jobs or carry an advertiserid parameter
    return href.endswith("-jobs") or "advertiserid=" in href


def _is_location_link(href: str) -> bool:
    # /jobs/in-Melbourne-VIC-3000, but not the "in All ..." catch-all link
    return "/in-" in href and "All" not in href


def _looks_like_salary(text: str) -> bool:
    return "$" in text and len(text) < 100


class SeekExtractor(BaseExtractor):
    """Extractor for www.seek.com.au search results."""

    source = JobSource.SEEK
    strategies = [
        CardStrategy(
            container="article[data-testid='job-card']",
            title=rule(text_of(TITLE_LINK)),
            url=rule(attr_of(TITLE_LINK, "href")),
            company=rule(link_text_where(_is_company_link)),
            location=rule(link_text_where(_is_location_link)),
            salary=rule(text_where("span", _looks_like_salary)),
        ),
    ]
