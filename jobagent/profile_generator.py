"""Build autofill fields and quick-answer suggestions for one posting."""
from __future__ import annotations

import re

from jobagent.models import AutofillProfile, JobPosting, ParsedResume, RecommendedResponse

EMPLOYMENT_TYPE_LABEL = "Employment type"
SENIORITY_LABEL = "Seniority level"

_TRAILING_PERIOD_RE = re.compile(r"\.$")


def build_autofill_profile(resume: ParsedResume, job: JobPosting, matched: list[str]) -> AutofillProfile:
    key_skills = list(matched[:10])
    bullets = [_TRAILING_PERIOD_RE.sub("", line) for line in resume.experience_highlights[:5]]

    name = resume.contact.name
    top_skills = " · ".join(key_skills[:3])
    if name and top_skills:
        headline = f"{name} · {top_skills}"
    else:
        headline = name or top_skills

    summary_parts = [
        resume.summary,
        f"Core strengths: {', '.join(key_skills[:6])}." if key_skills else "",
        f"Target role: {job.title} at {job.company}.",
    ]
    return AutofillProfile(
        headline=headline,
        summary=" ".join(part for part in summary_parts if part),
        key_skills=tuple(key_skills),
        experience_bullets=tuple(bullets),
    )


def recommend_responses(resume: ParsedResume, job: JobPosting, matched: list[str]) -> list[RecommendedResponse]:
    """Only answers whose trigger is present; never placeholders."""
    responses: list[RecommendedResponse] = []

    employment = job.metadata.get(EMPLOYMENT_TYPE_LABEL)
    if employment:
        responses.append(RecommendedResponse("Preferred employment type", employment))

    seniority = job.metadata.get(SENIORITY_LABEL)
    if seniority:
        count = len(resume.experience_highlights)
        responses.append(
            RecommendedResponse(
                "Seniority alignment",
                f"Aligned with {seniority} roles based on {count} notable achievements.",
            )
        )

    if matched:
        responses.append(
            RecommendedResponse(
                "Key skills fit",
                f"Direct experience with {', '.join(matched[:6])} highlighted in CV.",
            )
        )
    return responses
