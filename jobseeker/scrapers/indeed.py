"""
Indeed Job Extractor

Extraction rules for Indeed search result pages. Indeed cards carry the
provider's job key in a ``data-jk`` attribute, which is preferred over the
URL for deduplication because result links are wrapped in tracking
redirects.
"""

from jobseeker.scrapers.base import JobSource
from jobseeker.scrapers.extractor import (
    AnchorRule,
    BaseExtractor,
    CardStrategy,
    attr_of,
    rule,
    text_of,
)


class IndeedExtractor(BaseExtractor):
    """Extractor for au.indeed.com / www.indeed.com search results."""

    source = JobSource.INDEED
    strategies = [
        # Mosaic provider layout; td.resultContent sits inside
        # div.job_seen_beacon on current pages, so cards are seen twice
        CardStrategy(
            container="div.job_seen_beacon, div.slider_container, td.resultContent",
            anchors=(
                AnchorRule("h2.jobTitle a, a.jcs-JobTitle", key_attrs=("data-jk", "id")),
                AnchorRule("h2 a[data-jk]", key_attrs=("data-jk",)),
            ),
            company=rule(text_of("span.companyName, span[data-testid='company-name']")),
            location=rule(text_of("div.companyLocation, div[data-testid='text-location']")),
            salary=rule(text_of("div.salary-snippet, div.metadata.salary-snippet-container")),
        ),
        # Card outline layout
        CardStrategy(
            container="div.cardOutline",
            url=rule(attr_of("a[data-jk]", "href")),
            title=rule(attr_of("h2 span[title]", "title")),
            company=rule(text_of("span.companyName")),
            location=rule(text_of("div.companyLocation")),
            salary=rule(text_of("div.salary-snippet")),
        ),
    ]
