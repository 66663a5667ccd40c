"""
LinkedIn Job Extractor

LinkedIn renders most of its job UI with JavaScript; only the public
(guest) job search pages carry usable markup. Two card layouts are in
circulation and both are matched.
"""

from jobseeker.scrapers.base import JobSource
from jobseeker.scrapers.extractor import (
    BaseExtractor,
    CardStrategy,
    attr_of,
    rule,
    text_of,
)

LOCATION = "span.job-search-card__location"


class LinkedInExtractor(BaseExtractor):
    """Extractor for LinkedIn guest job search results."""

    source = JobSource.LINKEDIN
    strategies = [
        # Base card layout
        CardStrategy(
            container="div.base-card",
            url=rule(attr_of(
                "a.base-card__full-link[href*='/jobs/view/'], "
                "a.base-card__full-link[href*='/jobs-guest/jobs/api/']",
                "href",
            )),
            title=rule(text_of("h3.base-search-card__title")),
            company=rule(text_of("h4.base-search-card__subtitle, a.hidden-nested-link")),
            location=rule(text_of(LOCATION)),
        ),
        # Results list layout
        CardStrategy(
            container="li.jobs-search__results-list div.job-search-card",
            url=rule(attr_of("a[href*='/jobs/view/'], a[href*='/jobs-guest/']", "href")),
            title=rule(text_of("h3")),
            company=rule(text_of("h4")),
            location=rule(text_of(LOCATION)),
        ),
    ]
