"""Score postings against a parsed résumé and rank the results."""
from __future__ import annotations

import dataclasses

from jobagent.config import Lookups
from jobagent.cover_letter import compose_cover_letter
from jobagent.keywords import normalize, split_sentences, tokenize
from jobagent.log import get_logger
from jobagent.models import JobPosting, MatchResult, ParsedResume
from jobagent.profile_generator import build_autofill_profile, recommend_responses

log = get_logger(__name__)

KEYWORD_WEIGHT = 0.6
EXPERIENCE_WEIGHT = 0.3
RECENCY_BOOST = 0.1

_MIN_SENTENCE_LEN = 10
_HIGHLIGHT_PREFIX_LEN = 30
_EXPERIENCE_SATURATION = 10

DEFAULT_TOP_N = 5


def keyword_match(
    resume_keywords: tuple[str, ...] | list[str],
    listing_text: str,
    stop_words: frozenset[str] = frozenset(),
) -> tuple[list[str], float]:
    """Return (matched keywords in résumé order, overlap score)."""
    listing_tokens = set(tokenize(listing_text, stop_words))
    matched = [kw for kw in resume_keywords if kw in listing_tokens]
    if not matched:
        return [], 0.0
    return matched, min(1.0, len(matched) / max(len(listing_tokens), 1))


def experience_overlap(highlights: tuple[str, ...] | list[str], description: str) -> float:
    """Share of description sentences echoing a résumé highlight, saturating at 10."""
    prefixes = [p for p in (normalize(h)[:_HIGHLIGHT_PREFIX_LEN] for h in highlights) if p]
    if not prefixes:
        return 0.0
    overlap = 0
    for sentence in split_sentences(description):
        normalized = normalize(sentence)
        if len(normalized) < _MIN_SENTENCE_LEN:
            continue
        if any(prefix in normalized for prefix in prefixes):
            overlap += 1
    return min(1.0, overlap / _EXPERIENCE_SATURATION)


def compute_match(resume: ParsedResume, job: JobPosting, lookups: Lookups) -> tuple[float, list[str]]:
    matched, keyword_score = keyword_match(
        resume.keywords, job.description or job.title, lookups.stop_words,
    )
    experience_score = experience_overlap(resume.experience_highlights, job.description)
    recency = RECENCY_BOOST if job.listed_at else 0.0

    score = keyword_score * KEYWORD_WEIGHT + experience_score * EXPERIENCE_WEIGHT + recency
    score = round(min(1.0, max(0.0, score)), 3)
    return score, matched


def score_job(resume: ParsedResume, job: JobPosting, lookups: Lookups) -> MatchResult:
    score, matched = compute_match(resume, job, lookups)
    snapshot = dataclasses.replace(job, metadata=dict(job.metadata))
    result = MatchResult(
        job=snapshot,
        match_score=score,
        matched_keywords=tuple(matched),
        autofill_profile=build_autofill_profile(resume, snapshot, matched),
        recommended_responses=tuple(recommend_responses(resume, snapshot, matched)),
        cover_letter=compose_cover_letter(resume, snapshot),
    )
    log.debug("Scored %s @ %s → %.3f (%d keyword(s))", job.title, job.company, score, len(matched))
    return result


def filter_and_rank(results: list[MatchResult], top_n: int = DEFAULT_TOP_N) -> list[MatchResult]:
    """Drop zero-signal results, sort by score (stable), keep the top *top_n*."""
    kept = [r for r in results if r.match_score > 0 or r.matched_keywords]
    ranked = sorted(kept, key=lambda r: -r.match_score)[:top_n]
    log.info("Ranked %d result(s) → %d kept, top %d returned", len(results), len(kept), len(ranked))
    return ranked
