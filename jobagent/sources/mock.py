"""Offline job source for demos and tests (``JOB_SOURCE=mock``)."""
from __future__ import annotations

import threading
from datetime import datetime, timezone

from jobagent.log import get_logger
from jobagent.models import DetailResult, JobPosting, SearchCriteria
from jobagent.sources.base import JobSearchBase

log = get_logger(__name__)

_BASE_URL = "https://example.com/jobs"


def _mock_id(suffix: str) -> str:
    return f"mock-{suffix}"


class MockSource(JobSearchBase):
    name = "mock"

    def __init__(self) -> None:
        self._details: dict[str, DetailResult] = {}

    def _samples(self, criteria: SearchCriteria) -> list[tuple[JobPosting, DetailResult]]:
        role = criteria.keywords.strip().title()
        where = criteria.location or "Remote"
        today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        return [
            (
                JobPosting(
                    job_id=_mock_id("1"),
                    title=f"Senior {role}",
                    company="Northwind Labs",
                    location=where,
                    url=f"{_BASE_URL}/1",
                    listed_at=today,
                    workplace_type="Remote",
                    source=self.name,
                ),
                DetailResult(
                    description=(
                        f"Northwind Labs is hiring a senior {criteria.keywords} engineer. "
                        "You will build React and TypeScript front ends backed by Node services. "
                        "Experience with AWS, Docker and CI pipelines is a plus."
                    ),
                    metadata={"Seniority level": "Mid-Senior level", "Employment type": "Full-time"},
                ),
            ),
            (
                JobPosting(
                    job_id=_mock_id("2"),
                    title=f"{role} Developer",
                    company="Contoso Health",
                    location=where,
                    url=f"{_BASE_URL}/2",
                    workplace_type="Hybrid",
                    source=self.name,
                ),
                DetailResult(
                    description=(
                        f"Contoso Health needs a {criteria.keywords} developer to maintain Python "
                        "and PostgreSQL services for patient scheduling."
                    ),
                    metadata={"Employment type": "Contract"},
                ),
            ),
            (
                JobPosting(
                    job_id=_mock_id("3"),
                    title="Warehouse Associate",
                    company="Fabrikam Logistics",
                    location=where,
                    url=f"{_BASE_URL}/3",
                    source=self.name,
                ),
                DetailResult(description=""),
            ),
        ]

    def search(
        self,
        criteria: SearchCriteria,
        limit: int,
        cancel_event: threading.Event | None = None,
    ) -> list[JobPosting]:
        self._check_cancelled(cancel_event)
        log.info("MockSource generating sample listings")
        postings: list[JobPosting] = []
        for posting, details in self._samples(criteria)[: max(limit, 0)]:
            self._details[posting.url] = details
            postings.append(posting)
        return postings

    def fetch_details(
        self,
        url: str,
        cancel_event: threading.Event | None = None,
    ) -> DetailResult:
        self._check_cancelled(cancel_event)
        details = self._details.get(url)
        if details is None:
            return DetailResult.degraded_result(f"unknown mock listing {url}")
        return details
