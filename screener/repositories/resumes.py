"""Candidate resumes: ``/resumes``."""
from __future__ import annotations

import mimetypes

from screener.log import get_logger
from screener.models import Resume
from screener.repositories.base import Repository

log = get_logger(__name__)


class ResumeRepository(Repository):
    resource = "resumes"

    async def list_resumes(self) -> list[Resume]:
        endpoint = self._path()
        resumes = self._as_list(await self.api.get(endpoint), Resume.from_api, endpoint)
        log.debug("Listed %d resume(s)", len(resumes))
        return resumes

    async def get_resume(self, resume_id: int) -> Resume:
        endpoint = self._path(resume_id)
        return self._as_one(await self.api.get(endpoint), Resume.from_api, endpoint)

    async def upload_resume(
        self,
        file_name: str,
        content: bytes,
        candidate_name: str | None = None,
        content_type: str | None = None,
    ) -> Resume:
        """Send the file as multipart; httpx sets the multipart content type."""
        endpoint = self._path("upload")
        mime = content_type or mimetypes.guess_type(file_name)[0] or "application/octet-stream"
        data = {"candidateName": candidate_name.strip()} if candidate_name and candidate_name.strip() else None
        payload = await self.api.post(
            endpoint,
            files={"file": (file_name, content, mime)},
            data=data,
        )
        resume = self._as_one(payload, Resume.from_api, endpoint)
        log.info("Uploaded %s (%d bytes) as resume %s", file_name, len(content), resume.id)
        return resume

    async def parse_resume(self, resume_id: int) -> Resume:
        endpoint = self._path(resume_id, "parse")
        resume = self._as_one(await self.api.post(endpoint), Resume.from_api, endpoint)
        log.info("Re-parsed resume %s", resume.id)
        return resume
