"""End-to-end flow: controller → repositories → HTTP client → fake API."""

import asyncio
import json

import httpx
import pytest

from screener.controller import RefreshController, Section
from screener.models import JobDraft
from screener.presenter import describe_activity, format_score


class ScreenerApi:
    """Stateful stand-in for the screener REST API."""

    def __init__(self):
        self.jobs = []
        self.resumes = []
        self.rankings = {}
        self.broken_rankings = set()

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if request.method == "GET" and path == "/api/jobs":
            return httpx.Response(200, json=self.jobs)
        if request.method == "POST" and path == "/api/jobs":
            body = json.loads(request.content)
            job = {"id": len(self.jobs) + 1, "createdAt": "2024-05-0%dT09:00:00" % (len(self.jobs) + 1), **body}
            self.jobs.insert(0, job)
            return httpx.Response(201, json=job)
        if request.method == "GET" and path == "/api/resumes":
            return httpx.Response(200, json=self.resumes)
        if request.method == "POST" and path == "/api/resumes/upload":
            if b'filename="' not in request.content:
                return httpx.Response(400, json={"message": "File is required"})
            resume = {"id": len(self.resumes) + 1, "fileName": "cv.pdf", "fileSize": 3072,
                      "uploadedAt": "2024-05-10T12:00:00"}
            if b'name="candidateName"' in request.content:
                resume["candidateName"] = request.content.split(b'name="candidateName"\r\n\r\n')[1].split(b"\r\n")[0].decode()
            self.resumes.insert(0, resume)
            return httpx.Response(201, json=resume)
        if request.method == "GET" and path.startswith("/api/ranking/"):
            job_id = int(path.rsplit("/", 1)[1])
            if job_id in self.broken_rankings:
                return httpx.Response(500, json={"message": "Scoring failed"})
            return httpx.Response(200, json=self.rankings.get(job_id, []))
        return httpx.Response(404, json={"message": "Not found"})


@pytest.fixture
def api(server):
    fake = ScreenerApi()
    server.add("GET", "/api/jobs", fake.handle)
    server.add("POST", "/api/jobs", fake.handle)
    server.add("GET", "/api/resumes", fake.handle)
    server.add("POST", "/api/resumes/upload", fake.handle)
    for job_id in range(1, 5):
        server.add("GET", f"/api/ranking/{job_id}", fake.handle)
    return fake


@pytest.mark.integration
@pytest.mark.parametrize("parallel", [False, True])
def test_full_dashboard_cycle(server, api, parallel):
    ctl = RefreshController(api_factory=server.client, parallel_rankings=parallel)

    async def scenario():
        await ctl.create_job(JobDraft(title="Backend Engineer", description="APIs", required_skills="Java, Spring"))
        await ctl.create_job(JobDraft(title="Data Engineer", description="ETL", required_skills="Python"))
        await ctl.upload_resume("cv.pdf", b"%PDF-1.4", "Ada Lovelace")

        api.rankings[1] = [
            {"resumeId": 1, "candidateName": "Ada Lovelace", "finalScore": 91.4, "matchedSkills": ["Java"]},
            {"resumeId": 2, "fileName": "anon.pdf", "finalScore": 62.0, "matchedSkills": []},
        ]
        api.broken_rankings.add(2)

        await ctl.refresh(Section.DASHBOARD)
        await ctl.refresh(Section.RANKINGS, job_id=1)

    asyncio.run(scenario())

    summary = ctl.data(Section.DASHBOARD)
    assert summary.total_jobs == 2
    assert summary.total_resumes == 1
    assert format_score(summary.average_final_score) == "77"
    assert summary.peak_ranking_count == 2
    assert summary.failed_job_ids == [2]
    assert [(a.kind, a.title) for a in summary.recent_activity] == [
        ("job", "Data Engineer"), ("job", "Backend Engineer"), ("resume", "Ada Lovelace"),
    ]
    assert describe_activity(summary.recent_activity[0]) == "New opening created • May 2"

    entries = ctl.data(Section.RANKINGS).entries
    assert [(e.name, e.badge, e.matched_text) for e in entries] == [
        ("Ada Lovelace", "gold", "Java"),
        ("anon.pdf", "silver", "No skill overlap detected"),
    ]

    messages = [n.message for n in ctl.drain_notifications()]
    assert messages == ["Role created successfully", "Role created successfully", "Profile indexed successfully"]
