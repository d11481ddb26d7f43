import threading

import pytest

from conftest import SAMPLE_RESUME
from jobagent.agent import UNEXPECTED_ERROR_MESSAGE, fetch_all_details, run, run_pipeline
from jobagent.config import Settings
from jobagent.models import DetailResult, JobPosting, SearchCriteria
from jobagent.sources import JobSearchBase, MockSource

PAYLOAD = SAMPLE_RESUME.encode("utf-8")


def _stub(i: int, title: str = "React Developer") -> JobPosting:
    return JobPosting(
        job_id=str(i), title=title, company=f"Company {i}", location="Remote",
        url=f"https://example.com/jobs/{i}",
    )


class StubSource(JobSearchBase):
    name = "stub"

    def __init__(self, stubs=(), details=None, search_error=None):
        self.stubs = list(stubs)
        self.details = details or {}
        self.search_error = search_error
        self.search_calls = 0
        self.detail_calls: list[str] = []
        self._lock = threading.Lock()

    def search(self, criteria, limit, cancel_event=None):
        self.search_calls += 1
        if self.search_error is not None:
            raise self.search_error
        return self.stubs[:limit]

    def fetch_details(self, url, cancel_event=None):
        self._check_cancelled(cancel_event)
        with self._lock:
            self.detail_calls.append(url)
        return self.details.get(url, DetailResult.degraded_result("not found"))


def test_offline_run_completes(settings, lookups):
    state = run(PAYLOAD, "cv.txt", keywords="react", settings=settings, lookups=lookups, source=MockSource())
    assert state.ok
    result = state.result
    assert result.resume.contact.name == "Jane Doe"
    assert result.harvested == 3
    assert result.degraded_details == 0
    assert [m.job.job_id for m in result.jobs] == ["mock-1", "mock-2"]
    scores = [m.match_score for m in result.jobs]
    assert scores == sorted(scores, reverse=True)
    assert all(0.0 <= s <= 1.0 for s in scores)
    assert result.jobs[0].job.metadata["Employment type"] == "Full-time"


def test_default_source_comes_from_settings(settings, lookups):
    state = run(PAYLOAD, "cv.txt", keywords="react", settings=settings, lookups=lookups)
    assert state.ok
    assert state.result.harvested == 3


def test_blank_keywords_stop_before_search(settings, lookups):
    source = StubSource()
    state = run(PAYLOAD, "cv.txt", keywords="   ", settings=settings, lookups=lookups, source=source)
    assert state.status == "error"
    assert state.message == "Enter a search keyword to target relevant roles."
    assert source.search_calls == 0


def test_missing_file(settings, lookups):
    state = run(None, "", keywords="react", settings=settings, lookups=lookups, source=StubSource())
    assert state.status == "error"
    assert state.message == "Please attach your CV before running the agent."


@pytest.mark.parametrize(
    "payload, filename, size, message",
    [
        (b"", "cv.txt", None, "Please provide a non-empty CV file."),
        (PAYLOAD, "cv.txt", 0, "Please provide a non-empty CV file."),
        (PAYLOAD, "cv.rtf", None, "Unsupported CV format. Please upload PDF, DOCX, or TXT."),
    ],
)
def test_input_errors_stop_before_search(settings, lookups, payload, filename, size, message):
    source = StubSource()
    state = run(payload, filename, keywords="react", size=size, settings=settings, lookups=lookups, source=source)
    assert state.status == "error"
    assert state.message == message
    assert state.result is None
    assert source.search_calls == 0


def test_unexpected_failure_gets_generic_message(settings, lookups):
    source = StubSource(search_error=RuntimeError("selector exploded"))
    state = run(PAYLOAD, "cv.txt", keywords="react", settings=settings, lookups=lookups, source=source)
    assert state.status == "error"
    assert state.message == UNEXPECTED_ERROR_MESSAGE
    assert "selector" not in state.message


def test_cancelled_run(settings, lookups):
    event = threading.Event()
    event.set()
    state = run(
        PAYLOAD, "cv.txt", keywords="react", settings=settings, lookups=lookups,
        source=MockSource(), cancel_event=event,
    )
    assert state.status == "cancelled"
    assert state.result is None


def test_degraded_details_are_still_scored_by_title(settings, lookups):
    source = StubSource(stubs=[_stub(1), _stub(2, title="Warehouse Associate")])
    result = run_pipeline(PAYLOAD, "cv.txt", SearchCriteria.build("react"), settings=settings,
                          lookups=lookups, source=source)
    assert result.harvested == 2
    assert result.degraded_details == 2
    assert [m.job.job_id for m in result.jobs] == ["1"]
    assert result.jobs[0].matched_keywords == ("react",)
    assert result.jobs[0].job.description == ""


def test_harvest_limit_and_top_n_come_from_settings(lookups):
    stubs = [_stub(i) for i in range(10)]
    source = StubSource(stubs=stubs)
    small = Settings(harvest_limit=7, top_n=3, job_source="mock")
    result = run_pipeline(PAYLOAD, "cv.txt", SearchCriteria.build("react"), settings=small,
                          lookups=lookups, source=source)
    assert result.harvested == 7
    assert len(result.jobs) == 3
    assert [m.job.job_id for m in result.jobs] == ["0", "1", "2"]


def test_concurrent_detail_fetch_keeps_harvest_order():
    stubs = [_stub(i) for i in range(6)]
    details = {s.url: DetailResult(description=f"posting {s.job_id}") for s in stubs}
    source = StubSource(stubs=stubs, details=details)
    results = fetch_all_details(source, stubs, max_workers=4)
    assert [r.description for r in results] == [f"posting {i}" for i in range(6)]
    assert [s.description for s in stubs] == [f"posting {i}" for i in range(6)]
    assert sorted(source.detail_calls) == sorted(s.url for s in stubs)
