from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from jobagent.errors import RunCancelled
from jobagent.models import DetailResult, JobPosting, SearchCriteria


class JobSearchBase(ABC):
    name: str = "base"

    @abstractmethod
    def search(
        self,
        criteria: SearchCriteria,
        limit: int,
        cancel_event: threading.Event | None = None,
    ) -> list[JobPosting]:
        """Harvest listing stubs; network trouble truncates, never raises."""

    @abstractmethod
    def fetch_details(
        self,
        url: str,
        cancel_event: threading.Event | None = None,
    ) -> DetailResult:
        """Full description + criteria metadata; failures return a degraded result."""

    @staticmethod
    def _check_cancelled(cancel_event: threading.Event | None) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise RunCancelled("Run cancelled by caller")
