"""Compose a short, tailored cover note from the résumé and posting."""
from __future__ import annotations

import re

from jobagent.models import JobPosting, ParsedResume

_BULLET_RE = re.compile(r"^(?:-|•)\s*")

CLOSING_LINES = ("Ready to move quickly on next steps.", "Thanks for the consideration!")


def _top_highlights(highlights: tuple[str, ...], count: int = 2) -> list[str]:
    lines = (_BULLET_RE.sub("", entry).strip() for entry in highlights[:count])
    return [f"{index}. {line}" for index, line in enumerate(lines, start=1)]


def compose_cover_letter(resume: ParsedResume, job: JobPosting) -> str:
    greeting = f"Hi {job.company or 'there'},"

    first_name = resume.contact.first_name
    if first_name:
        intro = f"{first_name} here, an applicant for the {job.title} role."
    else:
        # No name to sign with, so the opener switches to first person.
        intro = f"I'm an applicant for the {job.title} role."

    strengths = ""
    top_keywords = resume.keywords[:4]
    if top_keywords:
        strengths = (
            f"I bring hands-on strength in {', '.join(top_keywords)} "
            "that map tightly to the scope outlined."
        )

    highlights = _top_highlights(resume.experience_highlights)
    highlight_block = "Recent highlights:\n" + "\n".join(highlights) if highlights else ""

    closing_parts = []
    if job.workplace_type:
        closing_parts.append(f"Comfortable with the {job.workplace_type.lower()} setup.")
    closing_parts.extend(CLOSING_LINES)
    closing = " ".join(closing_parts)

    segments = [greeting, intro, strengths, highlight_block, closing]
    return "\n\n".join(s for s in segments if s and s.strip())
