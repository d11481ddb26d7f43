"""Data models for résumés, postings and match results."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from jobagent.errors import MissingKeywords

WORKPLACE_CHOICES: tuple[str, ...] = ("any", "remote", "onsite", "hybrid")


@dataclass(frozen=True)
class Contact:
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    links: tuple[str, ...] = ()

    @property
    def first_name(self) -> str | None:
        if not self.name:
            return None
        return self.name.split()[0]


@dataclass(frozen=True)
class ParsedResume:
    raw_text: str
    summary: str = ""
    keywords: tuple[str, ...] = ()
    experience_highlights: tuple[str, ...] = ()
    education_highlights: tuple[str, ...] = ()
    contact: Contact = field(default_factory=Contact)

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "keywords": list(self.keywords),
            "experience_highlights": list(self.experience_highlights),
            "education_highlights": list(self.education_highlights),
            "contact": {
                "name": self.contact.name,
                "email": self.contact.email,
                "phone": self.contact.phone,
                "location": self.contact.location,
                "links": list(self.contact.links),
            },
        }


@dataclass(frozen=True)
class SearchCriteria:
    keywords: str
    location: str | None = None
    workplace: str = "any"
    experience_levels: tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        keywords: str | None,
        location: str | None = None,
        workplace: str | None = "any",
        experience_levels: list[str] | tuple[str, ...] | None = None,
    ) -> SearchCriteria:
        """Normalize raw form values; blank keywords are rejected."""
        kw = (keywords or "").strip()
        if not kw:
            raise MissingKeywords()
        levels = tuple(
            dict.fromkeys(lvl.strip().lower() for lvl in experience_levels or () if lvl and lvl.strip())
        )
        return cls(
            keywords=kw,
            location=(location or "").strip() or None,
            workplace=(workplace or "any").strip().lower() or "any",
            experience_levels=levels,
        )


@dataclass
class JobPosting:
    """A listing. Harvested as a stub, then filled in once by the detail fetch."""

    job_id: str
    title: str
    company: str
    location: str
    url: str
    listed_at: str | None = None
    workplace_type: str | None = None
    description: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
    source: str = "linkedin"

    def apply_details(self, details: DetailResult) -> None:
        self.description = details.description
        self.metadata = dict(details.metadata)


@dataclass(frozen=True)
class DetailResult:
    description: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
    degraded: bool = False
    error: str | None = None

    @classmethod
    def degraded_result(cls, error: str) -> DetailResult:
        return cls(description="", metadata={}, degraded=True, error=error)


@dataclass(frozen=True)
class AutofillProfile:
    headline: str
    summary: str
    key_skills: tuple[str, ...] = ()
    experience_bullets: tuple[str, ...] = ()


@dataclass(frozen=True)
class RecommendedResponse:
    question: str
    answer: str


@dataclass(frozen=True)
class MatchResult:
    job: JobPosting
    match_score: float
    matched_keywords: tuple[str, ...]
    autofill_profile: AutofillProfile
    recommended_responses: tuple[RecommendedResponse, ...] = ()
    cover_letter: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self.job)
        data.update(
            {
                "match_score": self.match_score,
                "matched_keywords": list(self.matched_keywords),
                "cover_letter": self.cover_letter,
                "autofill_profile": {
                    "headline": self.autofill_profile.headline,
                    "summary": self.autofill_profile.summary,
                    "key_skills": list(self.autofill_profile.key_skills),
                    "experience_bullets": list(self.autofill_profile.experience_bullets),
                },
                "recommended_responses": [
                    {"question": r.question, "answer": r.answer}
                    for r in self.recommended_responses
                ],
            }
        )
        return data


@dataclass(frozen=True)
class AgentResult:
    resume: ParsedResume
    jobs: tuple[MatchResult, ...] = ()
    harvested: int = 0
    degraded_details: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "cv": self.resume.to_dict(),
            "jobs": [j.to_dict() for j in self.jobs],
            "harvested": self.harvested,
            "degraded_details": self.degraded_details,
        }


@dataclass(frozen=True)
class AgentState:
    status: str = "idle"  # idle | running | completed | error | cancelled
    message: str | None = None
    result: AgentResult | None = None

    @property
    def ok(self) -> bool:
        return self.status == "completed"
