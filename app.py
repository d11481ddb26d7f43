"""Streamlit form for the résumé-to-job matching agent."""
from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from jobagent.agent import run
from jobagent.config import Settings, load_lookups
from jobagent.log import get_logger
from jobagent.models import WORKPLACE_CHOICES, AgentState, MatchResult
from jobagent.report import to_json

log = get_logger(__name__)

# ── Constants ────────────────────────────────────────────────────────────

_WORKPLACE_LABELS: dict[str, str] = {
    "any": "Any",
    "remote": "Remote",
    "onsite": "On-site",
    "hybrid": "Hybrid",
}

_GLASS_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: linear-gradient(135deg, #e8eaf6 0%, #f3e5f5 40%, #e0f2f1 100%);
}
.block-container {
    padding-top: 2rem;
}
[data-testid="stMetric"],
[data-testid="stForm"],
[data-testid="stExpander"] {
    background: rgba(255,255,255,0.55);
    backdrop-filter: blur(10px);
    -webkit-backdrop-filter: blur(10px);
    border-radius: 12px;
    border: 1px solid rgba(255,255,255,0.4);
    box-shadow: 0 4px 16px rgba(0,0,0,0.05);
}
.stButton > button[kind="primary"] {
    border-radius: 8px;
    font-weight: 600;
}
h1, h2, h3 {
    color: #1a1a2e;
}
</style>
"""

# ── Rendering ────────────────────────────────────────────────────────────


def _render_match(rank: int, match: MatchResult) -> None:
    job = match.job
    label = f"{rank}. {job.title} — {job.company or 'Unknown company'}  ·  {match.match_score * 100:.0f}%"
    with st.expander(label, expanded=rank == 1):
        c1, c2, c3 = st.columns(3)
        c1.metric("Match", f"{match.match_score * 100:.1f}%")
        c2.metric("Keywords", len(match.matched_keywords))
        c3.metric("Workplace", job.workplace_type or "n/a")
        st.markdown(f"**{job.location or 'Location n/a'}** · [Open listing]({job.url})")
        if not job.description:
            st.caption("Description unavailable; scored on the title only.")
        if match.matched_keywords:
            st.markdown("**Matched:** " + ", ".join(f"`{k}`" for k in match.matched_keywords))

        tab_profile, tab_answers, tab_letter = st.tabs(["Autofill", "Quick answers", "Cover note"])
        with tab_profile:
            profile = match.autofill_profile
            st.text_input("Headline", value=profile.headline, key=f"headline-{job.job_id}")
            st.text_area("Summary", value=profile.summary, key=f"summary-{job.job_id}")
            for bullet in profile.experience_bullets:
                st.markdown(f"- {bullet}")
        with tab_answers:
            if not match.recommended_responses:
                st.info("No suggested answers for this listing.")
            for response in match.recommended_responses:
                st.markdown(f"**{response.question}**  \n{response.answer}")
        with tab_letter:
            st.text_area("Cover note", value=match.cover_letter, height=260, key=f"letter-{job.job_id}")


def _render_state(state: AgentState) -> None:
    if state.status == "error":
        st.error(state.message)
        return
    if state.status == "cancelled":
        st.warning(state.message or "Run cancelled.")
        return
    result = state.result
    if result is None:
        return

    resume = result.resume
    c1, c2, c3 = st.columns(3)
    c1.metric("Candidate", resume.contact.name or "Unknown")
    c2.metric("Listings harvested", result.harvested)
    c3.metric("Top matches", len(result.jobs))
    if result.degraded_details:
        st.caption(f"{result.degraded_details} listing(s) could not be loaded in full.")
    if resume.keywords:
        st.markdown("**Résumé keywords:** " + ", ".join(resume.keywords[:15]))

    if not result.jobs:
        st.info("No matching listings this time. Try broader keywords or another location.")
        return
    for rank, match in enumerate(result.jobs, start=1):
        _render_match(rank, match)
    st.download_button(
        "Download results (JSON)", data=to_json(result), file_name="job_matches.json",
        mime="application/json",
    )


# ── Page ─────────────────────────────────────────────────────────────────


def main() -> None:
    st.set_page_config(page_title="Job Match Agent", page_icon="🚀", layout="wide")
    st.markdown(_GLASS_CSS, unsafe_allow_html=True)
    st.title("Job Match Agent")
    st.caption("Upload a résumé, pick your search, and get ranked listings with draft application material.")

    lookups = load_lookups()
    with st.form("agent-form"):
        uploaded = st.file_uploader("Résumé (PDF, DOCX or TXT)", type=["pdf", "docx", "txt"])
        c1, c2 = st.columns(2)
        with c1:
            keywords = st.text_input("Keywords", placeholder="e.g. frontend engineer")
        with c2:
            location = st.text_input("Location", placeholder="e.g. Berlin, Germany")
        c3, c4 = st.columns(2)
        with c3:
            workplace = st.selectbox(
                "Workplace", WORKPLACE_CHOICES, format_func=lambda w: _WORKPLACE_LABELS.get(w, w),
            )
        with c4:
            levels = st.multiselect("Experience levels", list(lookups.experience_codes))
        submitted = st.form_submit_button("Run Agent", type="primary")

    if submitted:
        with st.status("Running agent…", expanded=True) as sw:
            sw.write("Reading résumé and searching listings…")
            state = run(
                uploaded.getvalue() if uploaded is not None else None,
                uploaded.name if uploaded is not None else "",
                keywords=keywords,
                location=location,
                workplace=workplace,
                experience_levels=levels,
                size=uploaded.size if uploaded is not None else None,
                settings=Settings.from_env(),
                lookups=lookups,
            )
            st.session_state["last_state"] = state
            if state.ok:
                sw.update(label="Agent run complete!", state="complete")
            else:
                sw.update(label="Agent run failed", state="error")

    state = st.session_state.get("last_state")
    if state is not None:
        st.divider()
        _render_state(state)


main()
