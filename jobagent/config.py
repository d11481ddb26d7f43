"""Load env settings and the read-only lookup tables."""
from __future__ import annotations

import functools
import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from jobagent.log import get_logger

log = get_logger(__name__)

load_dotenv()

PACKAGE_DIR: Path = Path(__file__).resolve().parent
LOOKUPS_PATH: Path = PACKAGE_DIR / "data" / "lookups.yaml"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.9"


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _int_env(key: str, default: int, minimum: int = 1) -> int:
    raw = get_env(key)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        log.warning("Ignoring %s=%r (not an integer), using %d", key, raw, default)
        return default
    if value < minimum:
        log.warning("Ignoring %s=%d (below %d), using %d", key, value, minimum, default)
        return default
    return value


def _float_env(key: str, default: float) -> float:
    raw = get_env(key)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        log.warning("Ignoring %s=%r (not a number), using %.1f", key, raw, default)
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    harvest_limit: int = 12
    top_n: int = 5
    request_timeout: float = 20.0
    detail_workers: int = 1
    job_source: str = "linkedin"
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            harvest_limit=_int_env("HARVEST_LIMIT", cls.harvest_limit),
            top_n=_int_env("RESULTS_TOP_N", cls.top_n),
            request_timeout=_float_env("REQUEST_TIMEOUT", cls.request_timeout),
            detail_workers=_int_env("DETAIL_WORKERS", cls.detail_workers),
            job_source=(get_env("JOB_SOURCE", cls.job_source) or cls.job_source).lower(),
            user_agent=get_env("USER_AGENT") or DEFAULT_USER_AGENT,
            accept_language=get_env("ACCEPT_LANGUAGE") or DEFAULT_ACCEPT_LANGUAGE,
        )

    @property
    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept-Language": self.accept_language}


@dataclass(frozen=True)
class Lookups:
    stop_words: frozenset[str]
    workplace_codes: Mapping[str, str]
    experience_codes: Mapping[str, str]

    def workplace_code(self, workplace: str | None) -> str | None:
        if not workplace:
            return None
        return self.workplace_codes.get(workplace.lower())

    def experience_code_list(self, levels: tuple[str, ...] | list[str]) -> list[str]:
        """Map level tags to board codes, silently dropping unknown tags."""
        codes: list[str] = []
        for level in levels:
            code = self.experience_codes.get(level.lower())
            if code and code not in codes:
                codes.append(code)
        return codes


def _lookups_from_dict(data: dict[str, Any]) -> Lookups:
    return Lookups(
        stop_words=frozenset(str(w).lower() for w in data.get("stop_words", [])),
        workplace_codes=MappingProxyType(
            {str(k).lower(): str(v) for k, v in (data.get("workplace_codes") or {}).items()}
        ),
        experience_codes=MappingProxyType(
            {str(k).lower(): str(v) for k, v in (data.get("experience_codes") or {}).items()}
        ),
    )


@functools.lru_cache(maxsize=None)
def load_lookups(path: Path | None = None) -> Lookups:
    """Parse the lookup YAML once per process (per path)."""
    path = path or LOOKUPS_PATH
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    lookups = _lookups_from_dict(data)
    log.debug(
        "Loaded lookups from %s — %d stop words, %d workplace codes, %d experience codes",
        path, len(lookups.stop_words), len(lookups.workplace_codes), len(lookups.experience_codes),
    )
    return lookups
