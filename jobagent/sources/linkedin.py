"""LinkedIn public job listings via the logged-out "jobs-guest" endpoints.

No API key or login: search result pages and posting pages are fetched as
HTML and scraped. LinkedIn's markup is not a contract, so every lookup is
best-effort and a failure only ever shortens or empties the data.
"""
from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from urllib.parse import urljoin, urlsplit, urlunsplit

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag

from jobagent.config import Lookups, Settings
from jobagent.log import get_logger
from jobagent.models import DetailResult, JobPosting, SearchCriteria
from jobagent.retry import retry
from jobagent.sources.base import JobSearchBase

log = get_logger(__name__)

LINKEDIN_BASE = "https://www.linkedin.com"
SEARCH_URL = f"{LINKEDIN_BASE}/jobs-guest/jobs/api/seeMoreJobPostings/search"
PAGE_SIZE = 25

_WS_RE = re.compile(r"\s+")
_SHOW_MORE_RE = re.compile(r"show (?:more|less)", re.IGNORECASE)


def _sanitize(text: str) -> str:
    return _WS_RE.sub(" ", text or "").strip()


def _text(node: Tag | None) -> str:
    return _sanitize(node.get_text(" ")) if node is not None else ""


def canonical_url(href: str) -> str:
    """Absolute URL without query string or fragment."""
    href = (href or "").strip()
    if not href:
        return ""
    parts = urlsplit(urljoin(LINKEDIN_BASE + "/", href))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


@dataclass(frozen=True)
class ExtractionStrategy:
    """One place a posting description may live on the detail page."""

    name: str
    selector: str
    attribute: str | None = None

    def extract(self, soup: BeautifulSoup) -> str:
        node = soup.select_one(self.selector)
        if node is None:
            return ""
        raw = node.get(self.attribute) if self.attribute else node.get_text(" ")
        if isinstance(raw, list):
            raw = " ".join(raw)
        return _sanitize(_SHOW_MORE_RE.sub(" ", raw or ""))


# Tried in order; the first non-empty text wins.
DESCRIPTION_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    ExtractionStrategy("details-content", ".decorated-job-posting__details-content"),
    ExtractionStrategy("show-more-markup", ".show-more-less-html__markup"),
    ExtractionStrategy("job-details", "#job-details"),
    ExtractionStrategy("meta-description", "meta[name='description']", attribute="content"),
)


def parse_detail_page(
    html: str,
    strategies: tuple[ExtractionStrategy, ...] = DESCRIPTION_STRATEGIES,
) -> DetailResult:
    soup = BeautifulSoup(html or "", "html.parser")

    description = ""
    for strategy in strategies:
        description = strategy.extract(soup)
        if description:
            log.debug("Description found via %s (%d chars)", strategy.name, len(description))
            break

    metadata: dict[str, str] = {}
    for item in soup.select(".description__job-criteria-item"):
        label = _text(item.select_one(".description__job-criteria-subheader"))
        value = _text(item.select_one(".description__job-criteria-text"))
        if label and value:
            metadata[label] = value

    return DetailResult(description=description, metadata=metadata)


def _card_job_id(card: Tag) -> str:
    job_id = card.get("data-occludable-job-id") or ""
    if job_id:
        return str(job_id).strip()
    urn_node = card if card.get("data-entity-urn") else card.find(attrs={"data-entity-urn": True})
    if urn_node is None:
        return ""
    # urn:li:jobPosting:3812345678
    return str(urn_node.get("data-entity-urn", "")).rsplit(":", 1)[-1].strip()


def parse_card(card: Tag, source: str = "linkedin") -> JobPosting | None:
    """Listing stub from one search result card, or None if it is incomplete."""
    job_id = _card_job_id(card)
    title = _text(card.find("h3"))
    link = card.select_one("a.base-card__full-link")
    url = canonical_url(str(link.get("href", ""))) if link is not None else ""
    if not job_id or not title or not url:
        return None

    time_node = card.find("time")
    listed_at = _sanitize(str(time_node.get("datetime", ""))) if time_node is not None else ""
    workplace = _text(card.select_one(".job-search-card__workplace-type"))

    return JobPosting(
        job_id=job_id,
        title=title,
        company=_text(card.select_one(".base-search-card__subtitle")),
        location=_text(card.select_one(".job-search-card__location")),
        url=url,
        listed_at=listed_at or None,
        workplace_type=workplace or None,
        source=source,
    )


class LinkedInGuestSource(JobSearchBase):
    name = "linkedin"

    def __init__(
        self,
        lookups: Lookups,
        settings: Settings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.lookups = lookups
        self.settings = settings or Settings()
        self._shared_session = session
        if session is not None:
            session.headers.update(self.settings.headers)
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """The injected session, else one ``requests.Session`` per calling thread."""
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.settings.headers)
            self._local.session = session
        return session

    def build_search_params(self, criteria: SearchCriteria, start: int = 0) -> dict[str, str]:
        params: dict[str, str] = {"keywords": criteria.keywords}
        if criteria.location:
            params["location"] = criteria.location
        params["start"] = str(start)
        params["refresh"] = "true"

        workplace = self.lookups.workplace_code(criteria.workplace)
        if workplace:
            params["f_WT"] = workplace
        codes = self.lookups.experience_code_list(criteria.experience_levels)
        if codes:
            params["f_E"] = ",".join(codes)
        return params

    @retry(max_attempts=2, base_delay=1.0, retryable=(requests.ConnectionError, requests.Timeout))
    def _get(self, url: str, params: dict[str, str] | None = None) -> requests.Response:
        r = self.session.get(url, params=params, timeout=self.settings.request_timeout)
        r.raise_for_status()
        return r

    def search(
        self,
        criteria: SearchCriteria,
        limit: int,
        cancel_event: threading.Event | None = None,
    ) -> list[JobPosting]:
        postings: list[JobPosting] = []
        seen_ids: set[str] = set()

        for start in range(0, max(limit, 0), PAGE_SIZE):
            self._check_cancelled(cancel_event)
            params = self.build_search_params(criteria, start)
            try:
                r = self._get(SEARCH_URL, params=params)
            except requests.RequestException as exc:
                log.warning("LinkedIn search page start=%d failed (%s); keeping %d listing(s)",
                            start, exc, len(postings))
                break

            html = r.text or ""
            if not html.strip():
                log.debug("LinkedIn search page start=%d is blank", start)
                break
            cards = BeautifulSoup(html, "html.parser").find_all("li")
            if not cards:
                log.debug("LinkedIn search page start=%d has no cards", start)
                break

            for card in cards:
                if len(postings) >= limit:
                    break
                posting = parse_card(card, source=self.name)
                if posting is None or posting.job_id in seen_ids:
                    continue
                seen_ids.add(posting.job_id)
                postings.append(posting)
            if len(postings) >= limit:
                break

        log.info("LinkedIn harvest for %r returned %d listing(s)", criteria.keywords, len(postings))
        return postings

    def fetch_details(
        self,
        url: str,
        cancel_event: threading.Event | None = None,
    ) -> DetailResult:
        self._check_cancelled(cancel_event)
        if not url:
            return DetailResult.degraded_result("listing has no URL")
        try:
            r = self._get(url)
        except requests.RequestException as exc:
            log.warning("Detail fetch failed for %s: %s", url, exc)
            return DetailResult.degraded_result(str(exc))
        try:
            return parse_detail_page(r.text)
        except Exception as exc:
            log.warning("Detail page parse failed for %s: %s", url, exc)
            return DetailResult.degraded_result(str(exc))
