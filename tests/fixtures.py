"""
Shared test data: sample search result pages for each job board, a
politeness table without delays, mock HTTP transports and an in-memory
job store.
"""

from typing import Dict, List, Optional

import httpx

from jobseeker.core.exceptions import DuplicateJobError, JobNotFoundError
from jobseeker.repositories import JobStore
from jobseeker.scrapers import DomainGroup, JobSource, RawJobRecord, default_domain_groups
from jobseeker.scrapers.utils import classify_job_type, derive_external_id


SEEK_SEARCH_URL = "https://www.seek.com.au/python-jobs/in-Melbourne-VIC-3000"
LINKEDIN_SEARCH_URL = "https://www.linkedin.com/jobs/search?keywords=engineer&location=Melbourne"
INDEED_SEARCH_URL = "https://au.indeed.com/jobs?q=python&l=Melbourne"


SEEK_HTML = """
<html><body>
<div data-testid="search-results">
  <article data-testid="job-card">
    <h3><a data-testid="job-card-title" href="/job/80001234?type=standard">Senior Python Developer</a></h3>
    <a href="/Acme-Corp-jobs">Acme Corp</a>
    <a href="/python-jobs/in-All-Melbourne-VIC">All Melbourne VIC</a>
    <a href="/python-jobs/in-Melbourne-VIC-3000">Melbourne VIC</a>
    <span>Information &amp; Communication Technology</span>
    <span>$150,000 - $170,000 per annum</span>
  </article>
  <article data-testid="job-card">
    <h3><a data-testid="job-card-title" href="/job/80005678">Contract Data Engineer</a></h3>
    <a href="/jobs?advertiserid=12345">Data Co</a>
    <span>Sydney NSW</span>
    <span>$900 per day</span>
  </article>
  <article data-testid="job-card">
    <h3><a data-testid="job-card-title" href="/job/80009999">   </a></h3>
    <a href="/Ghost-jobs">Ghost Ltd</a>
  </article>
</div>
</body></html>
"""

LINKEDIN_HTML = """
<html><body>
<ul class="jobs-search__results-list">
  <li>
    <div class="base-card">
      <a class="base-card__full-link" href="https://au.linkedin.com/jobs/view/3900000111?trk=public_jobs">
        <span class="sr-only">Backend Engineer</span>
      </a>
      <h3 class="base-search-card__title">
        Backend Engineer
      </h3>
      <h4 class="base-search-card__subtitle">
        <a class="hidden-nested-link" href="https://au.linkedin.com/company/globex">Globex</a>
      </h4>
      <span class="job-search-card__location">Melbourne, Victoria, Australia</span>
    </div>
  </li>
  <li>
    <div class="base-card">
      <a class="base-card__full-link" href="https://au.linkedin.com/company/initech">Initech</a>
      <h3 class="base-search-card__title">Not A Job Link</h3>
    </div>
  </li>
</ul>
<ul>
  <li class="jobs-search__results-list">
    <div class="job-search-card">
      <a href="/jobs/view/3900000222/">View job</a>
      <h3>Frontend Engineer</h3>
      <h4>Hooli</h4>
      <span class="job-search-card__location">Sydney, New South Wales</span>
    </div>
  </li>
</ul>
</body></html>
"""

INDEED_HTML = """
<html><body>
<div class="mosaic-provider-jobcards">
  <div class="job_seen_beacon">
    <table><tbody><tr><td class="resultContent">
      <h2 class="jobTitle">
        <a class="jcs-JobTitle" data-jk="abc123xyz" href="/rc/clk?jk=abc123xyz&amp;from=serp">
          <span title="Python Developer">Python Developer</span>
        </a>
      </h2>
      <span data-testid="company-name">Umbrella Pty Ltd</span>
      <div data-testid="text-location">Melbourne VIC</div>
      <div class="metadata salary-snippet-container">$120,000 per year</div>
    </td></tr></tbody></table>
  </div>
  <div class="slider_container">
    <span class="companyName">No Title Co</span>
  </div>
  <div class="cardOutline">
    <h2><a data-jk="def456" href="/viewjob?jk=def456&amp;tk=1"><span title="Contract Analyst">Contract Analyst</span></a></h2>
    <span class="companyName">Wayne Enterprises</span>
    <div class="companyLocation">Remote</div>
    <div class="salary-snippet">$80 per hour</div>
  </div>
</div>
</body></html>
"""


def fast_domain_groups(**overrides) -> List[DomainGroup]:
    """Default politeness table with delay and jitter switched off."""
    per_group = {name: {"jitter": 0.0, **overrides} for name in ("seek", "linkedin", "indeed")}
    return default_domain_groups(delay=0.0, overrides=per_group)


def make_record(
    external_id: str = "seek-1",
    title: str = "Python Developer",
    source: JobSource = JobSource.SEEK,
    url: Optional[str] = None,
    salary_text: str = "",
) -> RawJobRecord:
    url = url or f"https://www.seek.com.au/job/{external_id.split('-', 1)[-1]}"
    return RawJobRecord(
        source=source,
        url=url,
        title=title,
        company="Acme Corp",
        location="Melbourne VIC",
        salary_text=salary_text,
        external_id=external_id or derive_external_id(source.value, url),
        job_type=classify_job_type(title, salary_text, url),
    )


def html_transport(pages: Dict[str, str], status_overrides: Optional[Dict[str, int]] = None):
    """
    Mock transport serving fixed pages by URL.

    Unknown URLs get a 404; ``status_overrides`` forces a status per URL.
    The returned transport records every request in ``transport.requests``.
    """
    status_overrides = status_overrides or {}
    requests: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        url = str(request.url)
        if url in status_overrides:
            return httpx.Response(status_overrides[url], text="error")
        if url in pages:
            return httpx.Response(200, text=pages[url], headers={"Content-Type": "text/html"})
        return httpx.Response(404, text="not found")

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport


class InMemoryJobStore(JobStore):
    """Job store double keyed by (external_id, user_id)."""

    def __init__(self):
        self.jobs: Dict[tuple, RawJobRecord] = {}
        self.lookup_errors: Dict[str, Exception] = {}
        self.insert_errors: Dict[str, Exception] = {}

    async def find_by_external_id_and_user(self, external_id: str, user_id: int):
        if external_id in self.lookup_errors:
            raise self.lookup_errors[external_id]
        try:
            return self.jobs[(external_id, user_id)]
        except KeyError:
            raise JobNotFoundError(external_id, user_id) from None

    async def insert(self, record: RawJobRecord, user_id: int):
        if record.external_id in self.insert_errors:
            raise self.insert_errors[record.external_id]
        key = (record.external_id, user_id)
        if key in self.jobs:
            raise DuplicateJobError(record.external_id, user_id)
        self.jobs[key] = record
        return record
