"""Heuristic extraction of structured résumé data from plain text.

The parser never raises: anything it cannot find is left empty. The patterns
are tuned for a conventional single-column résumé (name on top, contact line,
"Experience" and "Education" section headers).
"""
from __future__ import annotations

import re

from jobagent.config import Lookups
from jobagent.keywords import extract_keywords, split_sentences
from jobagent.log import get_logger
from jobagent.models import Contact, ParsedResume

log = get_logger(__name__)

# ── Contact block ────────────────────────────────────────────────────────

_EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
_PHONE_RE = re.compile(r"(?:\+\d{1,3}[-. ]?)?\(?\d{2,4}\)?[-. ]?\d{3,4}[-. ]?\d{3,4}")
_URL_RE = re.compile(r"(?:https?://|www\.)\S+", re.IGNORECASE)
_NAME_RE = re.compile(r"[A-Z][A-Za-z' -]+")
# "Austin, TX" / "Berlin, Germany"
_LOCATION_RE = re.compile(r"\b[A-Z][a-z]+(?: [A-Z][a-z]+)*, ?(?:[A-Z]{2}|[A-Z][a-z]+)\b")

MAX_LINKS = 10

# ── Sections ─────────────────────────────────────────────────────────────

_HEADER_PATTERNS: dict[str, str] = {
    "experience": r"experience",
    "education": r"education",
    "skills": r"skills",
    "projects": r"projects",
    "certifications": r"certifications?",
}
_BULLET_RE = re.compile(r"^[-*•]\s*")

MAX_HIGHLIGHTS = 10
MIN_HIGHLIGHT_LEN = 4
SUMMARY_SENTENCES = 3
MIN_SUMMARY_WORDS = 5


def _header_re(*names: str) -> re.Pattern[str]:
    """Header-only line, optionally qualified: "Experience", "Work Experience:", "Technical Skills"."""
    alternation = "|".join(_HEADER_PATTERNS[n] for n in names)
    return re.compile(
        rf"^[^\S\n]*(?:[A-Za-z&]+[^\S\n]+){{0,2}}(?:{alternation})[^\S\n]*:?[^\S\n]*$",
        re.IGNORECASE | re.MULTILINE,
    )


def extract_contact(text: str) -> Contact:
    email = _EMAIL_RE.search(text)
    phone = _PHONE_RE.search(text)
    links = tuple(m.group(0) for m in _URL_RE.finditer(text))[:MAX_LINKS]
    location = _LOCATION_RE.search(text)
    return Contact(
        name=_extract_name(text),
        email=email.group(0) if email else None,
        phone=phone.group(0) if phone else None,
        location=location.group(0) if location else None,
        links=links,
    )


def _extract_name(text: str) -> str | None:
    for raw in text.splitlines():
        line = raw.strip()
        if (
            _NAME_RE.fullmatch(line)
            and len(line.split()) <= 4
            and len(line) >= 5
            and "resume" not in line.lower()
        ):
            return line
    return None


def extract_section(text: str, header: str) -> str:
    """Body between the *header* line and the next recognised header."""
    normalized = text.replace("\r\n", "\n")
    match = _header_re(header).search(normalized)
    if not match:
        return ""
    rest = normalized[match.end():]
    others = [name for name in _HEADER_PATTERNS if name != header]
    stop = _header_re(*others).search(rest)
    body = rest[: stop.start()] if stop else rest
    return body.strip()


def extract_highlights(section: str) -> list[str]:
    lines = (_BULLET_RE.sub("", line).strip() for line in re.split(r"\n+", section))
    return [line for line in lines if len(line) >= MIN_HIGHLIGHT_LEN][:MAX_HIGHLIGHTS]


def summarize(text: str) -> str:
    sentences = (s.strip() for s in split_sentences(text))
    candidates = [s for s in sentences if len(s.split()) >= MIN_SUMMARY_WORDS]
    return ". ".join(candidates[:SUMMARY_SENTENCES])


# ── Public API ───────────────────────────────────────────────────────────


def parse_resume(text: str, lookups: Lookups) -> ParsedResume:
    """Build a :class:`ParsedResume`; identical text gives an identical result."""
    text = text or ""
    resume = ParsedResume(
        raw_text=text,
        summary=summarize(text),
        keywords=tuple(extract_keywords(text, lookups.stop_words)),
        experience_highlights=tuple(extract_highlights(extract_section(text, "experience"))),
        education_highlights=tuple(extract_highlights(extract_section(text, "education"))),
        contact=extract_contact(text),
    )
    log.info(
        "Parsed resume — name=%s, keywords=%d, experience=%d, education=%d",
        resume.contact.name, len(resume.keywords),
        len(resume.experience_highlights), len(resume.education_highlights),
    )
    return resume
