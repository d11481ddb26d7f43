from .base import JobSearchBase
from .linkedin import LinkedInGuestSource
from .mock import MockSource

from jobagent.config import Lookups, Settings
from jobagent.log import get_logger

log = get_logger(__name__)

__all__ = [
    "JobSearchBase", "LinkedInGuestSource", "MockSource", "get_source",
]


def get_source(settings: Settings, lookups: Lookups) -> JobSearchBase:
    if settings.job_source == "mock":
        log.info("Using source: MockSource (offline sample listings)")
        return MockSource()
    if settings.job_source != "linkedin":
        log.warning("Unknown JOB_SOURCE=%r, falling back to LinkedIn", settings.job_source)
    log.info("Using source: LinkedIn (public guest listings)")
    return LinkedInGuestSource(lookups, settings)
