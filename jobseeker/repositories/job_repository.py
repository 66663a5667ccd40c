"""
Job Repository Implementation

Job store used by the persistence gate. Lookups distinguish "not found"
from every other failure, and inserts surface constraint violations as
duplicates so a concurrent writer is treated as a skip.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Type
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from jobseeker.core.exceptions import DuplicateJobError, JobNotFoundError, JobStoreError
from jobseeker.models.job import Job
from jobseeker.repositories.base_repository import BaseRepository
from jobseeker.scrapers.base import RawJobRecord
from jobseeker.utils.logger import get_logger

logger = get_logger(__name__)


class JobStore(ABC):
    """Storage capability required by the persistence gate."""

    @abstractmethod
    async def find_by_external_id_and_user(self, external_id: str, user_id: int) -> Job:
        """
        Find a stored job.

        Raises:
            JobNotFoundError: If no job matches
            JobStoreError: On any other storage failure
        """

    @abstractmethod
    async def insert(self, record: RawJobRecord, user_id: int) -> Job:
        """
        Store a new job for a user.

        Raises:
            DuplicateJobError: If the (user, external ID) pair already exists
            JobStoreError: On any other storage failure
        """


class JobRepository(BaseRepository[Job], JobStore):
    """Repository for job database operations."""

    @property
    def model(self) -> Type[Job]:
        return Job

    async def find_by_external_id_and_user(self, external_id: str, user_id: int) -> Job:
        async with self.get_session() as session:
            try:
                query = select(Job).where(
                    Job.external_id == external_id,
                    Job.user_id == user_id,
                )
                result = await session.execute(query)
                job = result.scalar_one_or_none()
            except SQLAlchemyError as e:
                raise JobStoreError(
                    f"Error looking up job {external_id}: {e}",
                    details={"external_id": external_id, "user_id": user_id},
                ) from e

        if job is None:
            raise JobNotFoundError(external_id, user_id)
        return job

    async def insert(self, record: RawJobRecord, user_id: int) -> Job:
        async with self.get_session() as session:
            job = Job(
                user_id=user_id,
                external_id=record.external_id,
                source=record.source.value,
                url=record.url,
                title=record.title,
                company=record.company,
                location=record.location,
                salary=record.salary_text,
                job_type=record.job_type.value,
                status=record.status.value,
            )
            try:
                session.add(job)
                await session.commit()
                await session.refresh(job)
                return job

            except IntegrityError as e:
                await session.rollback()
                if "unique" in str(e.orig).lower():
                    raise DuplicateJobError(record.external_id, user_id) from e
                raise JobStoreError(
                    f"Constraint violated inserting job {record.external_id}: {e.orig}",
                    details={"external_id": record.external_id, "user_id": user_id},
                ) from e
            except SQLAlchemyError as e:
                await session.rollback()
                raise JobStoreError(
                    f"Error inserting job {record.external_id}: {e}",
                    details={"external_id": record.external_id, "user_id": user_id},
                ) from e

    async def list_for_user(
        self,
        user_id: int,
        status: Optional[str] = None,
        job_type: Optional[str] = None,
        limit: Optional[int] = 10,
    ) -> List[Job]:
        """List a user's jobs, newest first."""
        async with self.get_session() as session:
            query = self._apply_filters(
                select(Job),
                {"user_id": user_id, "status": status, "job_type": job_type},
            )
            query = query.order_by(Job.created_at.desc(), Job.id.desc())
            if limit and limit > 0:
                query = query.limit(limit)

            try:
                result = await session.execute(query)
                return list(result.scalars().all())
            except SQLAlchemyError as e:
                raise JobStoreError(f"Error listing jobs: {e}", details={"user_id": user_id}) from e
