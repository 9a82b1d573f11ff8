"""
Per-section view state with generation-guarded refreshes.

Every ``refresh(section)`` bumps the section's generation. A response is
applied only if its generation is still the latest one requested for that
section (last requested wins). Nothing is de-duplicated or cancelled:
overlapping refreshes run to completion and superseded results are dropped.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable

from screener.aggregator import build_dashboard_summary
from screener.config import Settings
from screener.errors import ScreenerError
from screener.log import get_logger
from screener.models import Job, JobDraft, Resume
from screener.presenter import RankedEntry, present_rankings
from screener.repositories import Repositories, get_repositories
from screener.transport import ApiClient

log = get_logger(__name__)

ApiFactory = Callable[[], ApiClient]

STATUS_LIVE = "Live & Ready"
STATUS_DOWN = "Connection Issue"


class Section(str, Enum):
    DASHBOARD = "dashboard"
    JOBS = "jobs"
    RESUMES = "resumes"
    RANKINGS = "rankings"


class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"


@dataclass
class SectionState:
    status: Status = Status.IDLE
    generation: int = 0
    applied_generation: int = 0
    data: Any = None
    error: str | None = None
    updated_at: datetime | None = None


@dataclass
class Notification:
    message: str
    level: str = "success"


@dataclass
class RankingsView:
    jobs: list[Job]
    job_id: int | None = None
    entries: list[RankedEntry] | None = None

    @property
    def selected_job(self) -> Job | None:
        return next((j for j in self.jobs if j.id == self.job_id), None)


@dataclass
class RefreshController:
    api_factory: ApiFactory
    parallel_rankings: bool = False
    activity_limit: int = 3
    trust_server_order: bool = False
    states: dict[Section, SectionState] = field(
        default_factory=lambda: {s: SectionState() for s in Section}
    )
    notifications: list[Notification] = field(default_factory=list)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RefreshController":
        return cls(
            api_factory=lambda: ApiClient.from_settings(settings),
            parallel_rankings=settings.parallel_rankings,
            activity_limit=settings.activity_limit,
        )

    # ── state & notifications ───────────────────────────────────────────

    def state(self, section: Section | str) -> SectionState:
        return self.states[Section(section)]

    def data(self, section: Section | str) -> Any:
        return self.state(section).data

    def is_loading(self, section: Section | str) -> bool:
        return self.state(section).status is Status.LOADING

    def notify(self, message: str, level: str = "success") -> None:
        self.notifications.append(Notification(message, level))

    def drain_notifications(self) -> list[Notification]:
        out, self.notifications = self.notifications, []
        return out

    # ── refresh ─────────────────────────────────────────────────────────

    async def refresh(self, section: Section | str, **params: Any) -> bool:
        """Reload one section. Returns True when this call's result was applied."""
        section = Section(section)
        state = self.states[section]
        state.generation += 1
        generation = state.generation
        state.status = Status.LOADING
        log.debug("Refresh %s gen=%d", section.value, generation)

        try:
            data = await self._load(section, **params)
        except ScreenerError as exc:
            if generation != state.generation:
                log.info(
                    "Dropping stale %s error (gen %d < %d): %s",
                    section.value, generation, state.generation, exc.message,
                )
                return False
            log.error("Refresh %s failed: %s", section.value, exc)
            state.error = exc.message
            self.notify(exc.message, "error")
            return False
        finally:
            if generation == state.generation:
                state.status = Status.IDLE

        if generation != state.generation:
            log.info(
                "Dropping stale %s result (gen %d < %d)",
                section.value, generation, state.generation,
            )
            return False

        state.data = data
        state.error = None
        state.applied_generation = generation
        state.updated_at = datetime.now(timezone.utc)
        return True

    async def _load(self, section: Section, **params: Any) -> Any:
        loader = self._loaders()[section]
        async with self.api_factory() as api:
            return await loader(get_repositories(api), **params)

    def _loaders(self) -> dict[Section, Callable[..., Awaitable[Any]]]:
        return {
            Section.DASHBOARD: self._load_dashboard,
            Section.JOBS: self._load_jobs,
            Section.RESUMES: self._load_resumes,
            Section.RANKINGS: self._load_rankings,
        }

    async def _load_dashboard(self, repos: Repositories) -> Any:
        return await build_dashboard_summary(
            repos.jobs,
            repos.resumes,
            repos.rankings,
            parallel=self.parallel_rankings,
            activity_limit=self.activity_limit,
        )

    async def _load_jobs(self, repos: Repositories) -> list[Job]:
        return await repos.jobs.list_jobs()

    async def _load_resumes(self, repos: Repositories) -> list[Resume]:
        return await repos.resumes.list_resumes()

    async def _load_rankings(self, repos: Repositories, job_id: int | None = None) -> RankingsView:
        jobs = await repos.jobs.list_jobs()
        if job_id is None:
            return RankingsView(jobs=jobs)
        rankings = await repos.rankings.list_rankings(job_id)
        entries = present_rankings(rankings, trust_server_order=self.trust_server_order)
        return RankingsView(jobs=jobs, job_id=job_id, entries=entries)

    # ── mutations ───────────────────────────────────────────────────────

    async def create_job(self, draft: JobDraft) -> Job | None:
        problems = draft.validate()
        if problems:
            for p in problems:
                self.notify(p, "error")
            return None
        try:
            async with self.api_factory() as api:
                job = await get_repositories(api).jobs.create_job(draft)
        except ScreenerError as exc:
            log.error("Create job failed: %s", exc)
            self.notify(exc.message, "error")
            return None
        self.notify("Role created successfully")
        await self.refresh(Section.JOBS)
        return job

    async def upload_resume(
        self,
        file_name: str,
        content: bytes,
        candidate_name: str | None = None,
        content_type: str | None = None,
    ) -> Resume | None:
        if not content:
            self.notify("Please select a file", "error")
            return None
        try:
            async with self.api_factory() as api:
                resume = await get_repositories(api).resumes.upload_resume(
                    file_name, content, candidate_name, content_type
                )
        except ScreenerError as exc:
            log.error("Upload %s failed: %s", file_name, exc)
            self.notify(exc.message, "error")
            return None
        self.notify("Profile indexed successfully")
        await self.refresh(Section.RESUMES)
        return resume

    async def reparse_resume(self, resume_id: int) -> Resume | None:
        try:
            async with self.api_factory() as api:
                resume = await get_repositories(api).resumes.parse_resume(resume_id)
        except ScreenerError as exc:
            log.error("Re-parse of resume %s failed: %s", resume_id, exc)
            self.notify(exc.message, "error")
            return None
        self.notify(f"Re-parsed {resume.display_name}")
        await self.refresh(Section.RESUMES)
        return resume

    async def check_status(self) -> str:
        async with self.api_factory() as api:
            return STATUS_LIVE if await api.ping() else STATUS_DOWN
