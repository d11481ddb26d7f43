from __future__ import annotations

import pytest
import requests

from jobagent.config import Settings, load_lookups
from jobagent.models import Contact, ParsedResume

SAMPLE_RESUME = """Jane Doe
Austin, TX
jane.doe@example.com | +1 512-555-0142
https://github.com/janedoe www.janedoe.dev

Summary
Frontend engineer with eight years building React and TypeScript products.

Professional Experience
- Built React dashboards used by 40k customers.
- Led migration from JavaScript to TypeScript across six services.
- Mentored four engineers
Education
B.S. Computer Science, University of Texas
Skills
React, TypeScript, Node, GraphQL
"""


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Stands in for requests.Session; replays queued responses or exceptions."""

    def __init__(self, responses=None) -> None:
        self.responses = list(responses or [])
        self.calls: list[tuple[str, dict]] = []
        self.headers: dict[str, str] = {}

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params or {})))
        item = self.responses.pop(0) if self.responses else FakeResponse("")
        if isinstance(item, BaseException):
            raise item
        return item


def search_card(job_id: str, title: str, href: str, *, company: str = "Acme",
                location: str = "Austin, TX", listed: str = "2024-05-01",
                workplace: str = "", use_urn: bool = False) -> str:
    id_attr = "" if use_urn else f' data-occludable-job-id="{job_id}"'
    urn = f' data-entity-urn="urn:li:jobPosting:{job_id}"' if use_urn else ""
    workplace_html = f'<span class="job-search-card__workplace-type">{workplace}</span>' if workplace else ""
    time_html = f'<time datetime="{listed}">1 week ago</time>' if listed else ""
    return f"""<li{id_attr}>
  <div class="base-card"{urn}>
    <a class="base-card__full-link" href="{href}"><span>{title}</span></a>
    <h3 class="base-search-card__title">  {title}  </h3>
    <h4 class="base-search-card__subtitle"><a>{company}</a></h4>
    <span class="job-search-card__location">{location}</span>
    {workplace_html}
    {time_html}
  </div>
</li>"""


def search_page(cards: list[str]) -> str:
    return "\n".join(cards)


@pytest.fixture(autouse=True)
def no_retry_sleep(monkeypatch):
    monkeypatch.setattr("jobagent.retry.time.sleep", lambda _seconds: None)


@pytest.fixture
def lookups():
    return load_lookups()


@pytest.fixture
def settings():
    return Settings(harvest_limit=12, top_n=5, request_timeout=5.0, detail_workers=1, job_source="mock")


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def resume() -> ParsedResume:
    return ParsedResume(
        raw_text="",
        summary="Frontend engineer with eight years building React products",
        keywords=("react", "typescript", "node", "graphql", "aws"),
        experience_highlights=(
            "Built React dashboards used by 40k customers.",
            "Led migration from JavaScript to TypeScript across six services.",
            "Mentored four engineers",
        ),
        education_highlights=("B.S. Computer Science",),
        contact=Contact(name="Jane Doe", email="jane.doe@example.com"),
    )
