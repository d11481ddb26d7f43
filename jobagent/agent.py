"""
Résumé-to-job matching agent.

Runs: extract → parse résumé → harvest listings → fetch details → score/compose → rank.
"""
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from jobagent.config import Lookups, Settings, load_lookups
from jobagent.errors import InputError, RunCancelled
from jobagent.extractor import extract_text
from jobagent.log import get_logger
from jobagent.models import AgentResult, AgentState, DetailResult, JobPosting, SearchCriteria
from jobagent.resume_parser import parse_resume
from jobagent.scorer import filter_and_rank, score_job
from jobagent.sources import JobSearchBase, get_source

log = get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Unexpected error while running the agent."


def fetch_all_details(
    source: JobSearchBase,
    stubs: Sequence[JobPosting],
    *,
    max_workers: int = 1,
    cancel_event: threading.Event | None = None,
) -> list[DetailResult]:
    """Fill in every stub in place; results come back in harvest order."""
    if max_workers <= 1 or len(stubs) <= 1:
        details = [source.fetch_details(stub.url, cancel_event) for stub in stubs]
    else:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(stubs))) as pool:
            details = list(pool.map(lambda stub: source.fetch_details(stub.url, cancel_event), stubs))

    for stub, detail in zip(stubs, details):
        stub.apply_details(detail)
    return details


def run_pipeline(
    payload: bytes,
    filename: str,
    criteria: SearchCriteria,
    *,
    size: int | None = None,
    settings: Settings | None = None,
    lookups: Lookups | None = None,
    source: JobSearchBase | None = None,
    cancel_event: threading.Event | None = None,
) -> AgentResult:
    """Run one pipeline pass. Input problems raise before any network call."""
    settings = settings or Settings.from_env()
    lookups = lookups or load_lookups()

    # 1. Résumé
    text = extract_text(payload, filename, size)
    resume = parse_resume(text, lookups)

    # 2. Harvest, then details
    source = source or get_source(settings, lookups)
    stubs = source.search(criteria, settings.harvest_limit, cancel_event)
    details = fetch_all_details(
        source, stubs, max_workers=settings.detail_workers, cancel_event=cancel_event,
    )
    degraded = sum(1 for d in details if d.degraded)
    if degraded:
        log.warning("%d of %d detail fetch(es) degraded to empty data", degraded, len(details))

    # 3. Score and rank
    scored = [score_job(resume, job, lookups) for job in stubs]
    ranked = filter_and_rank(scored, top_n=settings.top_n)

    log.info(
        "Run complete — harvested=%d, degraded=%d, returned=%d",
        len(stubs), degraded, len(ranked),
    )
    return AgentResult(
        resume=resume,
        jobs=tuple(ranked),
        harvested=len(stubs),
        degraded_details=degraded,
    )


def run(
    payload: bytes | None,
    filename: str,
    *,
    keywords: str | None,
    location: str | None = None,
    workplace: str | None = "any",
    experience_levels: list[str] | None = None,
    size: int | None = None,
    settings: Settings | None = None,
    lookups: Lookups | None = None,
    source: JobSearchBase | None = None,
    cancel_event: threading.Event | None = None,
) -> AgentState:
    """Form-facing wrapper: every outcome becomes an :class:`AgentState`."""
    try:
        if payload is None:
            raise InputError("Please attach your CV before running the agent.")
        criteria = SearchCriteria.build(keywords, location, workplace, experience_levels)
        result = run_pipeline(
            payload,
            filename,
            criteria,
            size=size,
            settings=settings,
            lookups=lookups,
            source=source,
            cancel_event=cancel_event,
        )
    except InputError as exc:
        log.warning("Run rejected: %s", exc)
        return AgentState(status="error", message=str(exc))
    except RunCancelled:
        log.info("Run cancelled by caller")
        return AgentState(status="cancelled", message="Run cancelled.")
    except Exception:
        log.exception("Agent run failed")
        return AgentState(status="error", message=UNEXPECTED_ERROR_MESSAGE)
    return AgentState(status="completed", result=result)
