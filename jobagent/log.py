"""Process-wide logging setup for jobagent (stdlib logging).

Console output goes to stderr so the CLI can print reports on stdout. Set
``LOG_DIR`` to also keep a daily DEBUG log file.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """Named logger; the root logger is set up on the first call only."""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _file_handler(log_dir: str, formatter: logging.Formatter) -> logging.Handler:
    path = Path(log_dir).expanduser()
    path.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path / f"jobagent_{datetime.now():%Y-%m-%d}.log", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def _configure() -> None:
    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    # An embedding host (pytest, streamlit) may already own the handlers.
    if root.handlers:
        return

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    log_dir = os.environ.get("LOG_DIR", "").strip()
    if not log_dir:
        return
    try:
        root.addHandler(_file_handler(log_dir, formatter))
    except OSError as exc:
        root.warning("Could not open a log file in %s: %s", log_dir, exc)
