"""
Scan Service

Runs a full sweep of the configured job boards: fetch each search URL,
extract job records, and pass them through the persistence gate. Sources
are scanned one after another; the search URLs of one source are fetched
concurrently within that source's politeness limits. Per-URL and
per-record failures are logged and the sweep always completes.
"""

from typing import Dict, List, Sequence, Union
from dataclasses import dataclass, field

from jobseeker.core.config import JobBoardsConfig
from jobseeker.scrapers import get_extractor
from jobseeker.scrapers.base import JobSource, RawJobRecord
from jobseeker.scrapers.fetcher import FetchResult, PoliteFetcher
from jobseeker.services.job_service import JobService, SaveResult
from jobseeker.utils.logger import get_logger, log_scraping_activity, scan_context

logger = get_logger(__name__)

SOURCE_ORDER = (JobSource.SEEK, JobSource.LINKEDIN, JobSource.INDEED)


@dataclass
class SourceSummary:
    """Scan counts for one source."""

    source: str
    urls_scanned: int = 0
    urls_failed: int = 0
    jobs_found: int = 0
    saved: int = 0
    skipped: int = 0

    def add_save_result(self, result: SaveResult) -> None:
        self.saved += result.saved
        self.skipped += result.skipped


@dataclass
class ScanReport:
    """Scan counts across all sources."""

    sources: Dict[str, SourceSummary] = field(default_factory=dict)

    @property
    def total_found(self) -> int:
        return sum(s.jobs_found for s in self.sources.values())

    @property
    def total_saved(self) -> int:
        return sum(s.saved for s in self.sources.values())

    @property
    def total_skipped(self) -> int:
        return sum(s.skipped for s in self.sources.values())


class ScanService:
    """Orchestrates fetch, extraction and persistence for one user."""

    def __init__(self, fetcher: PoliteFetcher, job_service: JobService, user_id: int):
        self.fetcher = fetcher
        self.job_service = job_service
        self.user_id = user_id

    async def scrape_source(self, source: Union[str, JobSource], search_url: str) -> int:
        """
        Scrape one search URL and store its new jobs.

        Args:
            source: Source name
            search_url: Search results page URL

        Returns:
            int: Number of jobs found on the page, 0 if it could not be fetched

        Raises:
            UnknownSourceError: If no extractor exists for the source
        """
        source = get_extractor(source).source
        summary = SourceSummary(source=source.value)
        result = await self.fetcher.fetch(search_url)
        await self._process_result(source, result, summary)
        return summary.jobs_found

    async def scan_source(
        self,
        source: Union[str, JobSource],
        search_urls: Sequence[str],
    ) -> SourceSummary:
        """
        Scrape all search URLs for one source.

        All URLs are dispatched together and awaited before any page is
        processed; pages are then processed in configuration order.
        """
        source = get_extractor(source).source
        summary = SourceSummary(source=source.value)

        if not search_urls:
            logger.info("No search URLs configured", source=source.value)
            return summary

        with scan_context(source=source.value, user_id=self.user_id):
            logger.info("Scanning source", urls=len(search_urls))
            results = await self.fetcher.fetch_all(list(search_urls))

            for result in results:
                await self._process_result(source, result, summary)

        return summary

    async def scan(self, job_boards: JobBoardsConfig) -> ScanReport:
        """
        Scan every enabled job board in turn.

        Args:
            job_boards: Enabled flags and search URLs per source

        Returns:
            ScanReport: Per-source and total counts
        """
        report = ScanReport()

        for source in SOURCE_ORDER:
            board = job_boards.board(source.value)
            if not board.enabled:
                logger.debug("Source disabled", source=source.value)
                continue
            if not board.search_urls:
                logger.info("No search URLs configured", source=source.value)
                continue

            report.sources[source.value] = await self.scan_source(source, board.search_urls)

        logger.info(
            "Scan complete",
            found=report.total_found,
            saved=report.total_saved,
            skipped=report.total_skipped,
        )
        return report

    async def _process_result(
        self,
        source: JobSource,
        result: FetchResult,
        summary: SourceSummary,
    ) -> None:
        summary.urls_scanned += 1

        if not result.ok:
            summary.urls_failed += 1
            return

        records = self._extract(source, result)
        summary.jobs_found += len(records)

        log_scraping_activity(
            source.value,
            "page_scraped",
            url=result.url,
            jobs_found=len(records),
        )

        summary.add_save_result(await self.job_service.save_jobs(records, self.user_id))

    def _extract(self, source: JobSource, result: FetchResult) -> List[RawJobRecord]:
        records = []
        for record in get_extractor(source).extract(result.document, result.url):
            logger.debug(
                "Found job",
                source=source.value,
                title=record.title,
                company=record.company,
                external_id=record.external_id,
            )
            records.append(record)
        return records
