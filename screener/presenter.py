"""Turn raw ranking lists and entities into display-ready records."""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Sequence

from screener.models import (
    ActivityItem,
    RankingResult,
    Resume,
    SkillOverlap,
    coerce_score,
    join_skills,
)

BADGE_TIERS: tuple[str, ...] = ("gold", "silver", "bronze")
OTHER_TIER = "other"

NO_OVERLAP_TEXT = "No skill overlap detected"
PENDING_OVERLAP_TEXT = "Skill match pending"
PARSING_TAG = "Parsing..."
UNKNOWN_DATE = "Recently"

_ACTIVITY_TEXT: dict[str, str] = {
    "job": "New opening created",
    "resume": "Resume parsed and indexed",
}
_ACTIVITY_ICONS: dict[str, str] = {"job": "💼", "resume": "📄"}


def badge_tier(position: int) -> str:
    """0-based list position → gold / silver / bronze / other."""
    if 0 <= position < len(BADGE_TIERS):
        return BADGE_TIERS[position]
    return OTHER_TIER


def format_score(value: Any, detailed: bool = False) -> str:
    """Whole percentage points for summaries, one decimal for breakdowns."""
    number = coerce_score(value)
    return f"{number:.1f}" if detailed else f"{number:.0f}"


def overlap_text(result: RankingResult) -> str:
    state = result.skill_overlap
    if state is SkillOverlap.PENDING:
        return PENDING_OVERLAP_TEXT
    if state is SkillOverlap.NONE:
        return NO_OVERLAP_TEXT
    return join_skills(result.matched_skills or [])


@dataclass
class RankedEntry:
    position: int
    badge: str
    name: str
    resume_id: int | None
    final_score: float
    skill_score: float
    experience_score: float
    education_score: float
    project_score: float
    skill_overlap: SkillOverlap
    matched_text: str
    missing_skills: list[str]
    server_rank: int | None = None

    def scores(self, detailed: bool = False) -> dict[str, str]:
        return {
            "Skills": format_score(self.skill_score, detailed),
            "Experience": format_score(self.experience_score, detailed),
            "Education": format_score(self.education_score, detailed),
            "Projects": format_score(self.project_score, detailed),
            "Relevancy": format_score(self.final_score, detailed),
        }

    def as_row(self, detailed: bool = False) -> dict[str, Any]:
        row: dict[str, Any] = {"rank": self.position, "badge": self.badge, "candidate": self.name}
        row.update({k.lower(): v for k, v in self.scores(detailed).items()})
        row["matched_skills"] = self.matched_text
        return row


def _order_key(item: tuple[int, RankingResult]) -> tuple:
    index, r = item
    missing_id = r.resume_id is None
    return (
        -coerce_score(r.final_score),
        -coerce_score(r.skill_score),
        -coerce_score(r.experience_score),
        -len(r.matched_skills or []),
        missing_id,
        r.resume_id or 0,
        index,
    )


def order_rankings(
    rankings: Sequence[RankingResult],
    *,
    trust_server_order: bool = False,
) -> list[RankingResult]:
    """Final, skill and experience score descending, then matched-skill count
    descending, then resume id ascending (missing ids last), then input
    position. ``trust_server_order`` keeps the input as-is."""
    if trust_server_order:
        return list(rankings)
    return [r for _, r in sorted(enumerate(rankings), key=_order_key)]


def present_rankings(
    rankings: Sequence[RankingResult],
    *,
    trust_server_order: bool = False,
) -> list[RankedEntry]:
    ordered = order_rankings(rankings, trust_server_order=trust_server_order)
    return [
        RankedEntry(
            position=i + 1,
            badge=badge_tier(i),
            name=r.display_name,
            resume_id=r.resume_id,
            final_score=coerce_score(r.final_score),
            skill_score=coerce_score(r.skill_score),
            experience_score=coerce_score(r.experience_score),
            education_score=coerce_score(r.education_score),
            project_score=coerce_score(r.project_score),
            skill_overlap=r.skill_overlap,
            matched_text=overlap_text(r),
            missing_skills=list(r.missing_skills or []),
            server_rank=r.rank,
        )
        for i, r in enumerate(ordered)
    ]


# ── Entity display helpers ──────────────────────────────────────────────


def format_date(value: str | None) -> str:
    """``"Mar 4"`` style date, or ``"Recently"`` when missing/unparseable."""
    if not value:
        return UNKNOWN_DATE
    # fractional seconds may carry nanoseconds
    text = re.sub(r"\.\d+", "", value.strip())
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return UNKNOWN_DATE
    return f"{dt.strftime('%b')} {dt.day}"


def format_file_size(size: int | None) -> str:
    return f"{(size or 0) / 1024:.0f}KB"


def resume_skill_tags(resume: Resume) -> list[str]:
    if not resume.is_parsed:
        return [PARSING_TAG]
    return resume.skill_list


def describe_activity(item: ActivityItem) -> str:
    text = _ACTIVITY_TEXT.get(item.kind, "Updated")
    return f"{text} • {format_date(item.occurred_at)}"


def activity_icon(item: ActivityItem) -> str:
    return _ACTIVITY_ICONS.get(item.kind, "•")
