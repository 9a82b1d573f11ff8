from dataclasses import dataclass

from .base import Repository
from .jobs import JobRepository
from .rankings import RankingRepository
from .resumes import ResumeRepository

from screener.transport import ApiClient

__all__ = [
    "Repository", "JobRepository", "ResumeRepository", "RankingRepository",
    "Repositories", "get_repositories",
]


@dataclass
class Repositories:
    jobs: JobRepository
    resumes: ResumeRepository
    rankings: RankingRepository


def get_repositories(api: ApiClient) -> Repositories:
    return Repositories(
        jobs=JobRepository(api),
        resumes=ResumeRepository(api),
        rankings=RankingRepository(api),
    )
