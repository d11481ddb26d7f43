"""Render a run's ranked matches as Markdown or JSON."""
from __future__ import annotations

import json
from urllib.parse import urlparse

from jobagent.models import AgentResult, MatchResult


def _short_url_label(url: str) -> str:
    host = (urlparse(url).hostname or "").replace("www.", "")
    parts = host.split(".")
    return parts[0].capitalize() if parts and parts[0] else "Link"


def _job_section(rank: int, match: MatchResult) -> list[str]:
    job = match.job
    lines = [
        f"### {rank}. {job.title} — {job.company or 'Unknown company'}",
        "",
        f"- **Score:** {match.match_score * 100:.1f}%",
        f"- **Location:** {job.location or 'n/a'}"
        + (f" ({job.workplace_type})" if job.workplace_type else ""),
    ]
    if job.listed_at:
        lines.append(f"- **Listed:** {job.listed_at}")
    lines.append(f"- **Link:** [{_short_url_label(job.url)}]({job.url})")
    if match.matched_keywords:
        lines.append(f"- **Matched keywords:** {', '.join(match.matched_keywords)}")
    if not job.description:
        lines.append("- _Description unavailable; scored on the title only._")

    profile = match.autofill_profile
    lines += ["", "**Autofill**", "", f"- Headline: {profile.headline}", f"- Summary: {profile.summary}"]
    for bullet in profile.experience_bullets:
        lines.append(f"  - {bullet}")

    if match.recommended_responses:
        lines += ["", "**Suggested answers**", ""]
        lines += [f"- *{r.question}:* {r.answer}" for r in match.recommended_responses]

    lines += ["", "**Cover note**", "", "```", match.cover_letter, "```", ""]
    return lines


def build_report(result: AgentResult) -> str:
    resume = result.resume
    lines = [
        "# Job Matches",
        "",
        f"**Candidate:** {resume.contact.name or 'Unknown'}",
        f"**Top keywords:** {', '.join(resume.keywords[:10]) or 'none'}",
        f"**Listings harvested:** {result.harvested}"
        + (f" ({result.degraded_details} without details)" if result.degraded_details else ""),
        "",
    ]
    if resume.summary:
        lines += [f"> {resume.summary}", ""]

    if not result.jobs:
        lines.append("_No matching listings this time. Try broader keywords or another location._")
        return "\n".join(lines)

    lines += ["## Ranked listings", ""]
    for rank, match in enumerate(result.jobs, start=1):
        lines += _job_section(rank, match)
    return "\n".join(lines)


def to_json(result: AgentResult, indent: int = 2) -> str:
    return json.dumps(result.to_dict(), indent=indent, ensure_ascii=False)
