#!/usr/bin/env python3
"""Print the dashboard summary (and optionally one job's ranking) to the log."""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from screener.config import load_settings
from screener.controller import RefreshController, Section
from screener.log import get_logger
from screener.presenter import describe_activity, format_score

log = get_logger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--job", type=int, default=None, help="also show the ranking for this job id")
    parser.add_argument("--parallel", action="store_true", help="fetch per-job rankings concurrently")
    parser.add_argument("--detailed", action="store_true", help="one decimal place for scores")
    return parser.parse_args(argv)


async def _main(args: argparse.Namespace) -> int:
    settings = load_settings()
    if args.parallel:
        settings.parallel_rankings = True
    ctl = RefreshController.from_settings(settings)

    log.info("API: %s (%s)", settings.api_url, await ctl.check_status())

    if not await ctl.refresh(Section.DASHBOARD):
        for n in ctl.drain_notifications():
            log.error("%s", n.message)
        return 1

    summary = ctl.data(Section.DASHBOARD)
    log.info("Dashboard summary")
    log.info("  Total jobs: %d", summary.total_jobs)
    log.info("  Total resumes: %d", summary.total_resumes)
    log.info("  Average score: %s", format_score(summary.average_final_score, args.detailed))
    log.info("  Top ranked: %d", summary.peak_ranking_count)
    for item in summary.recent_activity:
        log.info("  [%s] %s — %s", item.kind, item.title, describe_activity(item))

    if args.job is None:
        return 0

    if not await ctl.refresh(Section.RANKINGS, job_id=args.job):
        for n in ctl.drain_notifications():
            log.error("%s", n.message)
        return 1

    view = ctl.data(Section.RANKINGS)
    job = view.selected_job
    log.info("Ranking for job %d%s", args.job, f" ({job.title})" if job else "")
    if not view.entries:
        log.info("  No matches found")
    for e in view.entries:
        scores = e.scores(args.detailed)
        log.info(
            "  #%d %-6s %-30s relevancy=%s%% skills=%s exp=%s edu=%s | %s",
            e.position, e.badge, e.name[:30], scores["Relevancy"],
            scores["Skills"], scores["Experience"], scores["Education"], e.matched_text,
        )
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(_main(_parse_args())))
