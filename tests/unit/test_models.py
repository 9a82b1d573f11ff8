"""Unit tests for model coercion and skill helpers."""

import math

import pytest

from screener.errors import DecodeError
from screener.models import (
    Job,
    JobDraft,
    RankingResult,
    Resume,
    SkillOverlap,
    coerce_score,
    join_skills,
    split_skills,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [
        (91.4, 91.4),
        ("62.0", 62.0),
        (0, 0.0),
        (None, 0.0),
        ("n/a", 0.0),
        ([], 0.0),
        (True, 0.0),
        (-5, 0.0),
        (math.nan, 0.0),
        (math.inf, 0.0),
        (10**400, 0.0),
    ],
)
def test_coerce_score(raw, expected):
    assert coerce_score(raw) == expected


@pytest.mark.unit
def test_split_skills_trims_and_drops_empties():
    assert split_skills(" Python, Java ,,SQL , ") == ["Python", "Java", "SQL"]
    assert split_skills("") == []
    assert split_skills(None) == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    ["Python,Java,SQL", " spring boot ,  docker", "Go", "React, , Node.js,"],
)
def test_skill_text_round_trip(text):
    """Rendering then re-parsing keeps the trimmed skills in order."""
    skills = split_skills(text)
    assert split_skills(join_skills(skills)) == skills


@pytest.mark.unit
def test_ranking_from_api_coerces_bad_scores():
    r = RankingResult.from_api({
        "resumeId": 3,
        "candidateName": "Ada",
        "skillScore": "80.5",
        "experienceScore": None,
        "educationScore": "bad",
        "finalScore": -1,
        "matchedSkills": ["Python", " SQL "],
        "rank": "2",
    })
    assert r.resume_id == 3
    assert r.skill_score == 80.5
    assert r.experience_score == 0.0
    assert r.education_score == 0.0
    assert r.project_score == 0.0
    assert r.final_score == 0.0
    assert r.matched_skills == ["Python", "SQL"]
    assert r.missing_skills is None
    assert r.rank == 2


@pytest.mark.unit
def test_ranking_from_api_tolerates_out_of_range_numbers():
    """Integers too large for a float zero the score and an infinite rank is dropped."""
    r = RankingResult.from_api({"resumeId": 3, "finalScore": 10**400, "skillScore": 55, "rank": math.inf})
    assert r.final_score == 0.0
    assert r.skill_score == 55.0
    assert r.resume_id == 3
    assert r.rank is None


@pytest.mark.unit
def test_ranking_id_is_not_a_resume_id():
    """A ranking row's own ``id`` never stands in for a missing ``resumeId``."""
    assert RankingResult.from_api({"id": 77, "finalScore": 60}).resume_id is None
    assert RankingResult.from_api({"id": 77, "resumeId": 5}).resume_id == 5


@pytest.mark.unit
def test_skill_overlap_three_states():
    assert RankingResult.from_api({"matchedSkills": ["Go"]}).skill_overlap is SkillOverlap.MATCHED
    assert RankingResult.from_api({"matchedSkills": []}).skill_overlap is SkillOverlap.NONE
    assert RankingResult.from_api({}).skill_overlap is SkillOverlap.PENDING


@pytest.mark.unit
def test_entity_payload_must_be_object():
    with pytest.raises(DecodeError):
        Job.from_api(["not", "a", "job"])
    with pytest.raises(DecodeError):
        RankingResult.from_api("82.5")


@pytest.mark.unit
def test_job_from_api_maps_camel_case():
    job = Job.from_api({
        "id": 1,
        "title": "Backend Engineer",
        "description": "APIs",
        "requiredSkills": "Java, Spring",
        "preferredSkills": "",
        "minExperienceYears": 3,
        "educationLevel": "Bachelor",
        "createdAt": "2024-03-04T10:15:00",
        "somethingNew": True,
    })
    assert job.id == 1
    assert job.required_skill_list == ["Java", "Spring"]
    assert job.preferred_skills is None
    assert job.min_experience_years == 3
    assert job.education_level == "Bachelor"
    assert job.job_type is None


@pytest.mark.unit
def test_resume_parsed_state_and_display_name():
    pending = Resume.from_api({"id": 4, "fileName": "cv.pdf", "fileSize": 2048})
    assert not pending.is_parsed
    assert pending.display_name == "cv.pdf"

    parsed = Resume.from_api({"id": 5, "fileName": "x.pdf", "candidateName": "Grace", "parsedSkills": "COBOL"})
    assert parsed.is_parsed
    assert parsed.display_name == "Grace"
    assert parsed.skill_list == ["COBOL"]


@pytest.mark.unit
def test_job_draft_validation():
    draft = JobDraft(title=" ", description="", required_skills=" , ", min_experience_years=-1)
    assert draft.validate() == [
        "Job title is required",
        "Job description is required",
        "Required skills are mandatory",
        "Minimum experience years cannot be negative",
    ]

    ok = JobDraft(title="Data Engineer", description="Pipelines", required_skills="Python,Spark")
    assert ok.validate() == []


@pytest.mark.unit
def test_job_draft_payload():
    draft = JobDraft(
        title=" Data Engineer ",
        description="Pipelines",
        required_skills="Python ,Spark",
        min_experience_years=2,
    )
    assert draft.to_payload() == {
        "title": "Data Engineer",
        "description": "Pipelines",
        "requiredSkills": "Python, Spark",
        "preferredSkills": None,
        "minExperienceYears": 2,
        "educationLevel": None,
        "jobType": None,
    }
