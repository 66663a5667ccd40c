"""
Job Service Layer

Persistence gate for scraped jobs: each record is checked against the job
store for the owning user and inserted only when it is new. Records are
handled one at a time; a failure on one record never stops the batch.
"""

from typing import Iterable
from dataclasses import dataclass

from jobseeker.core.exceptions import DuplicateJobError, JobNotFoundError, JobStoreError
from jobseeker.repositories.job_repository import JobStore
from jobseeker.scrapers.base import RawJobRecord
from jobseeker.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class SaveResult:
    """Counts from one persistence gate pass."""

    saved: int = 0
    skipped: int = 0


class JobService:
    """Service layer for storing scraped jobs."""

    def __init__(self, job_store: JobStore):
        self.job_store = job_store

    async def save_jobs(self, records: Iterable[RawJobRecord], user_id: int) -> SaveResult:
        """
        Save new jobs for a user, skipping ones already stored.

        The check-then-insert assumes a single writer per user; a concurrent
        insert that trips the unique constraint is counted as a skip.

        Args:
            records: Scraped job records
            user_id: Owning user

        Returns:
            SaveResult: Number of records saved and skipped
        """
        result = SaveResult()

        for record in records:
            try:
                await self.job_store.find_by_external_id_and_user(record.external_id, user_id)
                logger.info("Job already exists", title=record.title, external_id=record.external_id)
                result.skipped += 1
                continue
            except JobNotFoundError:
                pass
            except JobStoreError as e:
                logger.error(
                    "Database error checking job",
                    title=record.title,
                    external_id=record.external_id,
                    error=str(e),
                )
                result.skipped += 1
                continue

            try:
                await self.job_store.insert(record, user_id)
            except DuplicateJobError:
                logger.info("Job already exists", title=record.title, external_id=record.external_id)
                result.skipped += 1
                continue
            except JobStoreError as e:
                logger.error(
                    "Failed to save job",
                    title=record.title,
                    external_id=record.external_id,
                    error=str(e),
                )
                result.skipped += 1
                continue

            logger.info("Saved new job", title=record.title, external_id=record.external_id)
            result.saved += 1

        return result
