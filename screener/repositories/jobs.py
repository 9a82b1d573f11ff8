"""Job openings: ``/jobs``."""
from __future__ import annotations

from screener.log import get_logger
from screener.models import Job, JobDraft
from screener.repositories.base import Repository

log = get_logger(__name__)


class JobRepository(Repository):
    resource = "jobs"

    async def list_jobs(self) -> list[Job]:
        endpoint = self._path()
        jobs = self._as_list(await self.api.get(endpoint), Job.from_api, endpoint)
        log.debug("Listed %d job(s)", len(jobs))
        return jobs

    async def get_job(self, job_id: int) -> Job:
        endpoint = self._path(job_id)
        return self._as_one(await self.api.get(endpoint), Job.from_api, endpoint)

    async def create_job(self, draft: JobDraft) -> Job:
        endpoint = self._path()
        payload = await self.api.post(endpoint, json=draft.to_payload())
        job = self._as_one(payload, Job.from_api, endpoint)
        log.info("Created job %s: %s", job.id, job.title)
        return job
