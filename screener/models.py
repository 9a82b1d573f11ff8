"""Data models for jobs, resumes, rankings and the dashboard summary."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from screener.errors import DecodeError


def coerce_score(value: Any) -> float:
    """Best-effort float for a score field; anything unusable becomes 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def _to_int(value: Any, default: int | None = None) -> int | None:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return default


def _to_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _to_skill_list(value: Any) -> list[str] | None:
    """None stays None (field absent); a string is split on commas."""
    if value is None:
        return None
    if isinstance(value, str):
        return split_skills(value)
    if isinstance(value, (list, tuple, set)):
        return [str(s).strip() for s in value if str(s).strip()]
    return None


def split_skills(text: str | None) -> list[str]:
    if not text:
        return []
    return [s.strip() for s in text.split(",") if s.strip()]


def join_skills(skills: list[str]) -> str:
    return ", ".join(s.strip() for s in skills if s and s.strip())


def _require_mapping(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise DecodeError(f"expected a {what} object, got {type(data).__name__}")
    return data


@dataclass
class Job:
    id: int | None
    title: str
    description: str = ""
    required_skills: str = ""
    preferred_skills: str | None = None
    min_experience_years: int = 0
    education_level: str | None = None
    job_type: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def required_skill_list(self) -> list[str]:
        return split_skills(self.required_skills)

    @property
    def preferred_skill_list(self) -> list[str]:
        return split_skills(self.preferred_skills)

    @classmethod
    def from_api(cls, data: Any) -> "Job":
        data = _require_mapping(data, "job")
        return cls(
            id=_to_int(data.get("id")),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            required_skills=str(data.get("requiredSkills") or ""),
            preferred_skills=_to_text(data.get("preferredSkills")),
            min_experience_years=max(0, _to_int(data.get("minExperienceYears"), 0) or 0),
            education_level=_to_text(data.get("educationLevel")),
            job_type=_to_text(data.get("jobType")),
            created_at=_to_text(data.get("createdAt")),
            updated_at=_to_text(data.get("updatedAt")),
        )


@dataclass
class JobDraft:
    """Fields a user submits to open a new role."""

    title: str
    description: str
    required_skills: str
    min_experience_years: int = 0
    preferred_skills: str = ""
    education_level: str = ""
    job_type: str = ""

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.title.strip():
            errors.append("Job title is required")
        elif len(self.title) > 255:
            errors.append("Job title must not exceed 255 characters")
        if not self.description.strip():
            errors.append("Job description is required")
        if not split_skills(self.required_skills):
            errors.append("Required skills are mandatory")
        if self.min_experience_years is None:
            errors.append("Minimum experience years is required")
        elif self.min_experience_years < 0:
            errors.append("Minimum experience years cannot be negative")
        if len(self.education_level) > 50:
            errors.append("Education level must not exceed 50 characters")
        if len(self.job_type) > 50:
            errors.append("Job type must not exceed 50 characters")
        return errors

    def to_payload(self) -> dict[str, Any]:
        return {
            "title": self.title.strip(),
            "description": self.description.strip(),
            "requiredSkills": join_skills(split_skills(self.required_skills)),
            "preferredSkills": join_skills(split_skills(self.preferred_skills)) or None,
            "minExperienceYears": self.min_experience_years,
            "educationLevel": self.education_level.strip() or None,
            "jobType": self.job_type.strip() or None,
        }


@dataclass
class Resume:
    id: int | None
    file_name: str
    candidate_name: str | None = None
    file_size: int = 0
    file_type: str | None = None
    parsed_skills: str | None = None
    experience_years: int | None = None
    education_level: str | None = None
    education_field: str | None = None
    uploaded_at: str | None = None
    parsed_at: str | None = None

    @property
    def display_name(self) -> str:
        return self.candidate_name or self.file_name

    @property
    def is_parsed(self) -> bool:
        return self.parsed_skills is not None

    @property
    def skill_list(self) -> list[str]:
        return split_skills(self.parsed_skills)

    @classmethod
    def from_api(cls, data: Any) -> "Resume":
        data = _require_mapping(data, "resume")
        return cls(
            id=_to_int(data.get("id")),
            file_name=str(data.get("fileName") or ""),
            candidate_name=_to_text(data.get("candidateName")),
            file_size=max(0, _to_int(data.get("fileSize"), 0) or 0),
            file_type=_to_text(data.get("fileType")),
            parsed_skills=_to_text(data.get("parsedSkills")),
            experience_years=_to_int(data.get("experienceYears")),
            education_level=_to_text(data.get("educationLevel")),
            education_field=_to_text(data.get("educationField")),
            uploaded_at=_to_text(data.get("uploadedAt")),
            parsed_at=_to_text(data.get("parsedAt")),
        )


class SkillOverlap(str, Enum):
    MATCHED = "matched"
    NONE = "none"
    PENDING = "pending"


@dataclass
class RankingResult:
    resume_id: int | None
    candidate_name: str | None = None
    file_name: str = ""
    skill_score: float = 0.0
    experience_score: float = 0.0
    education_score: float = 0.0
    project_score: float = 0.0
    final_score: float = 0.0
    matched_skills: list[str] | None = None
    missing_skills: list[str] | None = None
    rank: int | None = None

    @property
    def display_name(self) -> str:
        return self.candidate_name or self.file_name or f"Resume #{self.resume_id}"

    @property
    def skill_overlap(self) -> SkillOverlap:
        if self.matched_skills is None:
            return SkillOverlap.PENDING
        return SkillOverlap.MATCHED if self.matched_skills else SkillOverlap.NONE

    @classmethod
    def from_api(cls, data: Any) -> "RankingResult":
        data = _require_mapping(data, "ranking")
        return cls(
            resume_id=_to_int(data.get("resumeId")),
            candidate_name=_to_text(data.get("candidateName")),
            file_name=str(data.get("fileName") or ""),
            skill_score=coerce_score(data.get("skillScore")),
            experience_score=coerce_score(data.get("experienceScore")),
            education_score=coerce_score(data.get("educationScore")),
            project_score=coerce_score(data.get("projectScore")),
            final_score=coerce_score(data.get("finalScore")),
            matched_skills=_to_skill_list(data.get("matchedSkills")),
            missing_skills=_to_skill_list(data.get("missingSkills")),
            rank=_to_int(data.get("rank")),
        )


@dataclass
class ActivityItem:
    kind: str
    title: str
    occurred_at: str | None = None


@dataclass
class DashboardSummary:
    total_jobs: int
    total_resumes: int
    average_final_score: float
    peak_ranking_count: int
    recent_activity: list[ActivityItem] = field(default_factory=list)
    ranking_count: int = 0
    failed_job_ids: list[int | None] = field(default_factory=list)
