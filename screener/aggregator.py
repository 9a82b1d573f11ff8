"""
Dashboard aggregation.

Runs: jobs + resumes (joint, fatal) → per-job rankings (fan-out, recoverable)
→ fold into a DashboardSummary.

A failed ranking fetch contributes nothing to the totals, so the published
numbers cannot tell "no rankings yet" apart from "ranking fetch failed". The
summary's ``failed_job_ids`` records the skipped jobs for the log only.
"""
from __future__ import annotations

import asyncio
from typing import Sequence

from screener.envelope import Err, Ok, Result
from screener.errors import ErrorKind, ScreenerError
from screener.log import get_logger
from screener.models import ActivityItem, DashboardSummary, Job, RankingResult, Resume
from screener.repositories import JobRepository, RankingRepository, ResumeRepository

log = get_logger(__name__)

DEFAULT_ACTIVITY_LIMIT = 3


async def _fetch_rankings(rankings: RankingRepository, job: Job) -> Result:
    if job.id is None:
        return Err(ErrorKind.DECODE, "job has no identifier")
    try:
        return Ok(await rankings.list_rankings(job.id))
    except ScreenerError as exc:
        return Err.from_exception(exc)
    except Exception as exc:
        log.debug("Unexpected ranking failure for job %s", job.id, exc_info=True)
        return Err(ErrorKind.DECODE, str(exc) or exc.__class__.__name__)


async def fetch_job_rankings(
    rankings: RankingRepository,
    jobs: Sequence[Job],
    *,
    parallel: bool = False,
) -> list[tuple[Job, Result]]:
    """One ``(job, Ok(list) | Err)`` per job, in listing order. Never raises
    for API, transport or decode failures."""
    if parallel:
        results = await asyncio.gather(*(_fetch_rankings(rankings, job) for job in jobs))
        return list(zip(jobs, results))

    out: list[tuple[Job, Result]] = []
    for job in jobs:
        out.append((job, await _fetch_rankings(rankings, job)))
    return out


def recent_activity(
    jobs: Sequence[Job],
    resumes: Sequence[Resume],
    limit: int = DEFAULT_ACTIVITY_LIMIT,
) -> list[ActivityItem]:
    """First ``limit`` jobs then first ``limit`` resumes; listing order is
    assumed to be newest first already."""
    items: list[ActivityItem] = [
        ActivityItem(kind="job", title=j.title, occurred_at=j.created_at)
        for j in jobs[:limit]
    ]
    items.extend(
        ActivityItem(kind="resume", title=r.display_name, occurred_at=r.uploaded_at)
        for r in resumes[:limit]
    )
    return items


def summarize(
    jobs: Sequence[Job],
    resumes: Sequence[Resume],
    job_rankings: Sequence[tuple[Job, Result]],
    *,
    activity_limit: int = DEFAULT_ACTIVITY_LIMIT,
) -> DashboardSummary:
    total_score = 0.0
    count = 0
    peak = 0
    failed: list[int | None] = []

    for job, result in job_rankings:
        if not result.ok:
            log.warning(
                "Rankings for job %s (%s) skipped: %s",
                job.id, job.title, result.message,
            )
            failed.append(job.id)
            continue
        ranking_list: list[RankingResult] = result.value or []
        for r in ranking_list:
            total_score += r.final_score
            count += 1
        peak = max(peak, len(ranking_list))

    average = total_score / count if count > 0 else 0.0

    return DashboardSummary(
        total_jobs=len(jobs),
        total_resumes=len(resumes),
        average_final_score=average,
        peak_ranking_count=peak,
        recent_activity=recent_activity(jobs, resumes, activity_limit),
        ranking_count=count,
        failed_job_ids=failed,
    )


async def build_dashboard_summary(
    jobs_repo: JobRepository,
    resumes_repo: ResumeRepository,
    rankings_repo: RankingRepository,
    *,
    parallel: bool = False,
    activity_limit: int = DEFAULT_ACTIVITY_LIMIT,
) -> DashboardSummary:
    # 1. Jobs and resumes together; both settle, either failing aborts the summary
    jobs, resumes = await asyncio.gather(
        jobs_repo.list_jobs(),
        resumes_repo.list_resumes(),
        return_exceptions=True,
    )
    for outcome in (jobs, resumes):
        if isinstance(outcome, BaseException):
            log.error("Dashboard aborted: %s", outcome)
            raise outcome

    # 2. Rankings per job
    job_rankings = await fetch_job_rankings(rankings_repo, jobs, parallel=parallel)

    # 3-5. Fold
    summary = summarize(jobs, resumes, job_rankings, activity_limit=activity_limit)
    log.info(
        "Dashboard — jobs=%d, resumes=%d, rankings=%d, avg=%.1f, peak=%d, skipped=%d",
        summary.total_jobs, summary.total_resumes, summary.ranking_count,
        summary.average_final_score, summary.peak_ranking_count,
        len(summary.failed_job_ids),
    )
    return summary
