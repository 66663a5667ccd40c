"""
Tests for the job persistence gate.
"""

import pytest

from jobseeker.core.exceptions import DuplicateJobError, JobStoreError
from jobseeker.services import JobService, SaveResult
from tests.fixtures import make_record


@pytest.mark.unit
class TestSaveJobs:
    """Test check-then-insert behaviour of JobService.save_jobs."""

    @pytest.mark.asyncio
    async def test_saves_new_records(self, job_store):
        records = [make_record("seek-1"), make_record("seek-2")]

        result = await JobService(job_store).save_jobs(records, user_id=1)

        assert result == SaveResult(saved=2, skipped=0)
        assert set(job_store.jobs) == {("seek-1", 1), ("seek-2", 1)}

    @pytest.mark.asyncio
    async def test_skips_existing_records(self, job_store):
        service = JobService(job_store)
        await service.save_jobs([make_record("seek-1")], user_id=1)

        result = await service.save_jobs([make_record("seek-1"), make_record("seek-2")], user_id=1)

        assert result == SaveResult(saved=1, skipped=1)

    @pytest.mark.asyncio
    async def test_duplicates_within_one_batch(self, job_store):
        records = [make_record("indeed-abc"), make_record("indeed-abc")]

        result = await JobService(job_store).save_jobs(records, user_id=1)

        assert result == SaveResult(saved=1, skipped=1)
        assert len(job_store.jobs) == 1

    @pytest.mark.asyncio
    async def test_same_posting_for_another_user(self, job_store):
        service = JobService(job_store)
        await service.save_jobs([make_record("seek-1")], user_id=1)

        result = await service.save_jobs([make_record("seek-1")], user_id=2)

        assert result.saved == 1
        assert ("seek-1", 2) in job_store.jobs

    @pytest.mark.asyncio
    async def test_lookup_error_skips_record(self, job_store):
        job_store.lookup_errors["seek-1"] = JobStoreError("database is locked")
        records = [make_record("seek-1"), make_record("seek-2")]

        result = await JobService(job_store).save_jobs(records, user_id=1)

        assert result == SaveResult(saved=1, skipped=1)
        assert ("seek-1", 1) not in job_store.jobs

    @pytest.mark.asyncio
    async def test_insert_error_skips_record(self, job_store):
        job_store.insert_errors["seek-1"] = JobStoreError("disk full")
        records = [make_record("seek-1"), make_record("seek-2")]

        result = await JobService(job_store).save_jobs(records, user_id=1)

        assert result == SaveResult(saved=1, skipped=1)
        assert set(job_store.jobs) == {("seek-2", 1)}

    @pytest.mark.asyncio
    async def test_insert_race_counts_as_skip(self, job_store):
        job_store.insert_errors["seek-1"] = DuplicateJobError("seek-1", 1)

        result = await JobService(job_store).save_jobs([make_record("seek-1")], user_id=1)

        assert result == SaveResult(saved=0, skipped=1)

    @pytest.mark.asyncio
    async def test_empty_batch(self, job_store):
        result = await JobService(job_store).save_jobs([], user_id=1)

        assert result == SaveResult()
