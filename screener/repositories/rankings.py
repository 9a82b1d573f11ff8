"""Per-job ranked matches: ``/ranking/{jobId}``."""
from __future__ import annotations

from screener.models import RankingResult
from screener.repositories.base import Repository


class RankingRepository(Repository):
    resource = "ranking"

    async def list_rankings(self, job_id: int) -> list[RankingResult]:
        endpoint = self._path(job_id)
        return self._as_list(await self.api.get(endpoint), RankingResult.from_api, endpoint)
