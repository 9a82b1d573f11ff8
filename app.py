"""Streamlit UI for the Resume Screener dashboard."""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pandas as pd
import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from screener.config import load_settings
from screener.controller import RefreshController, Section
from screener.log import get_logger
from screener.models import JobDraft
from screener.presenter import (
    activity_icon,
    describe_activity,
    format_date,
    format_file_size,
    format_score,
    resume_skill_tags,
)

log = get_logger(__name__)

# ── Constants ────────────────────────────────────────────────────────────

EDUCATION_LEVELS: list[str] = ["", "High School", "Diploma", "Bachelor", "Master", "PhD"]

_BADGE_COLORS: dict[str, str] = {
    "gold": "#f5b700",
    "silver": "#a8a9ad",
    "bronze": "#cd7f32",
    "other": "#5c6bc0",
}

_CSS = """
<style>
[data-testid="stMetric"] {
    background: rgba(255,255,255,0.6);
    padding: 0.75rem 1rem;
    border-radius: 12px;
    border: 1px solid rgba(0,0,0,0.05);
    box-shadow: 0 4px 16px rgba(0,0,0,0.06);
}
.skill-tag {
    display: inline-block; padding: 0.1rem 0.55rem; margin: 0 0.25rem 0.25rem 0;
    border-radius: 999px; background: rgba(92,107,192,0.12); font-size: 0.8rem;
}
.rank-badge {
    display: inline-block; width: 2rem; height: 2rem; line-height: 2rem;
    border-radius: 50%; text-align: center; color: white; font-weight: 700;
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _controller() -> RefreshController:
    if "controller" not in st.session_state:
        st.session_state["controller"] = RefreshController.from_settings(load_settings())
    return st.session_state["controller"]


def _run(coro):
    return asyncio.run(coro)


def _refresh(section: Section, **params) -> None:
    ctl = _controller()
    with st.spinner("Loading…"):
        _run(ctl.refresh(section, **params))


def _show_notifications() -> None:
    for n in _controller().drain_notifications():
        st.toast(n.message, icon="⚠️" if n.level == "error" else "✅")


def _tags(skills: list[str]) -> str:
    return "".join(f'<span class="skill-tag">{s}</span>' for s in skills)


# ── Page: Dashboard ──────────────────────────────────────────────────────


def page_dashboard() -> None:
    st.header("Dashboard")
    if st.button("Refresh", use_container_width=False) or _controller().data(Section.DASHBOARD) is None:
        _refresh(Section.DASHBOARD)
    _show_notifications()

    summary = _controller().data(Section.DASHBOARD)
    if summary is None:
        st.info("Dashboard unavailable — check the API connection in the sidebar.")
        return

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Jobs", summary.total_jobs)
    c2.metric("Total Resumes", summary.total_resumes)
    c3.metric("Avg Score", format_score(summary.average_final_score))
    c4.metric("Top Ranked", summary.peak_ranking_count)

    st.divider()
    st.subheader("Recent Activity")
    if not summary.recent_activity:
        st.info("No operations logged yet")
        return
    for item in summary.recent_activity:
        st.markdown(f"{activity_icon(item)} **{item.title}**  \n{describe_activity(item)}")


# ── Page: Jobs ───────────────────────────────────────────────────────────


def page_jobs() -> None:
    st.header("Job Openings")

    with st.expander("Create a new opening"):
        with st.form("create_job", clear_on_submit=True):
            title = st.text_input("Job title *")
            description = st.text_area("Description *", height=120)
            c1, c2 = st.columns(2)
            with c1:
                required = st.text_input("Required skills * (comma separated)")
                min_exp = st.number_input("Minimum experience (years)", 0, 50, 0)
            with c2:
                preferred = st.text_input("Preferred skills (comma separated)")
                education = st.selectbox("Education level", EDUCATION_LEVELS)
            submitted = st.form_submit_button("Create Role", type="primary", use_container_width=True)

    if submitted:
        draft = JobDraft(
            title=title,
            description=description,
            required_skills=required,
            preferred_skills=preferred,
            min_experience_years=int(min_exp),
            education_level=education,
        )
        with st.spinner("Creating role…"):
            _run(_controller().create_job(draft))
    elif st.button("Refresh") or _controller().data(Section.JOBS) is None:
        _refresh(Section.JOBS)
    _show_notifications()

    jobs = _controller().data(Section.JOBS) or []
    if not jobs:
        st.info("No active openings found")
        return

    for j in jobs:
        with st.container(border=True):
            st.markdown(f"### {j.title}")
            st.write(j.description)
            st.markdown(_tags(j.required_skill_list), unsafe_allow_html=True)
            st.caption(f"📅 {format_date(j.created_at)}  ·  📍 {j.min_experience_years}+ Years")


# ── Page: Resumes ────────────────────────────────────────────────────────


def page_resumes() -> None:
    st.header("Resumes")

    with st.expander("Upload a resume"):
        with st.form("upload_resume", clear_on_submit=True):
            uploaded = st.file_uploader("Resume file (PDF, DOCX or TXT)", type=["pdf", "docx", "doc", "txt"])
            candidate = st.text_input("Candidate name (optional)")
            submitted = st.form_submit_button("Upload", type="primary", use_container_width=True)

    if submitted:
        with st.spinner("Uploading…"):
            if uploaded is None:
                _controller().notify("Please select a file", "error")
            else:
                _run(_controller().upload_resume(
                    uploaded.name, uploaded.getvalue(), candidate or None, uploaded.type,
                ))
    elif st.button("Refresh") or _controller().data(Section.RESUMES) is None:
        _refresh(Section.RESUMES)
    _show_notifications()

    resumes = _controller().data(Section.RESUMES) or []
    if not resumes:
        st.info("Database is empty")
        return

    for r in resumes:
        with st.container(border=True):
            st.markdown(f"### {r.display_name}")
            st.markdown(_tags(resume_skill_tags(r)), unsafe_allow_html=True)
            c1, c2 = st.columns([4, 1])
            c1.caption(f"📄 {r.file_name}  ·  📏 {format_file_size(r.file_size)}")
            if not r.is_parsed and r.id is not None and c2.button("Re-parse", key=f"parse_{r.id}"):
                _run(_controller().reparse_resume(r.id))
                st.rerun()


# ── Page: Rankings ───────────────────────────────────────────────────────


def page_rankings() -> None:
    st.header("Rankings")

    view = _controller().data(Section.RANKINGS)
    if view is None:
        _refresh(Section.RANKINGS)
        view = _controller().data(Section.RANKINGS)
    _show_notifications()

    jobs = view.jobs if view else []
    options = [None] + [j.id for j in jobs]
    titles = {j.id: j.title for j in jobs}
    job_id = st.selectbox(
        "Job opening",
        options,
        format_func=lambda jid: "Select an active role..." if jid is None else titles.get(jid, str(jid)),
    )
    detailed = st.toggle("Detailed breakdown", value=False)

    if job_id is None:
        st.info("No job selected — select a job opening above to see matching candidates.")
        return

    if view is None or view.job_id != job_id or st.button("Refresh"):
        _refresh(Section.RANKINGS, job_id=job_id)
        _show_notifications()
        view = _controller().data(Section.RANKINGS)

    if view is None or view.job_id != job_id or view.entries is None:
        return
    if not view.entries:
        st.info("No matches found — try uploading more resumes or broadening job criteria.")
        return

    top = view.entries[:3]
    cols = st.columns(len(top))
    for col, entry in zip(cols, top):
        color = _BADGE_COLORS[entry.badge]
        col.markdown(
            f'<span class="rank-badge" style="background:{color}">{entry.position}</span> '
            f"**{entry.name}**",
            unsafe_allow_html=True,
        )
        col.metric("Relevancy", f"{format_score(entry.final_score, detailed)}%")
        col.caption(entry.matched_text)

    df = pd.DataFrame([e.as_row(detailed) for e in view.entries])
    for c in ("skills", "experience", "education", "projects", "relevancy"):
        df[c] = pd.to_numeric(df[c], errors="coerce")
    st.dataframe(
        df,
        use_container_width=True,
        column_config={
            "relevancy": st.column_config.ProgressColumn(
                "Relevancy", min_value=0, max_value=100,
                format="%.1f%%" if detailed else "%.0f%%",
            ),
        },
        hide_index=True,
    )


# ── Main ─────────────────────────────────────────────────────────────────


def _inject_css() -> None:
    st.markdown(_CSS, unsafe_allow_html=True)


def _sidebar_status() -> None:
    with st.sidebar:
        st.divider()
        st.markdown("**API Status**")
        if "api_status" not in st.session_state or st.button("Check again", use_container_width=True):
            st.session_state["api_status"] = _run(_controller().check_status())
        st.markdown(st.session_state["api_status"])


def _wrap(page):
    def _page() -> None:
        _inject_css()
        _sidebar_status()
        page()

    _page.__name__ = page.__name__
    return _page


pages = [
    st.Page(_wrap(page_dashboard), title="Dashboard", icon="📊", url_path="dashboard", default=True),
    st.Page(_wrap(page_jobs), title="Jobs", icon="💼", url_path="jobs"),
    st.Page(_wrap(page_resumes), title="Resumes", icon="📄", url_path="resumes"),
    st.Page(_wrap(page_rankings), title="Rankings", icon="🏆", url_path="rankings"),
]

nav = st.navigation(pages)
nav.run()
