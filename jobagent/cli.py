"""Command line entry point.

    jobagent --resume cv.pdf --keywords "frontend engineer" --workplace remote --experience senior
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from jobagent.agent import run
from jobagent.config import Settings
from jobagent.log import get_logger
from jobagent.models import WORKPLACE_CHOICES
from jobagent.report import build_report, to_json

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobagent",
        description="Match a résumé against LinkedIn listings and draft application material.",
    )
    parser.add_argument("--resume", "-r", required=True, type=Path, help="PDF, DOCX or TXT résumé")
    parser.add_argument("--keywords", "-k", required=True, help="Search keywords, e.g. 'data engineer'")
    parser.add_argument("--location", "-l", help="Location filter")
    parser.add_argument("--workplace", "-w", choices=WORKPLACE_CHOICES, default="any")
    parser.add_argument(
        "--experience", "-e", action="append", default=[], metavar="LEVEL",
        help="Experience level (repeatable): internship, entry, associate, mid, senior, director, executive",
    )
    parser.add_argument("--limit", "-n", type=int, help="Max listings to harvest (default: HARVEST_LIMIT or 12)")
    parser.add_argument("--top", "-t", type=int, help="Results to keep (default: RESULTS_TOP_N or 5)")
    parser.add_argument("--format", "-f", choices=["markdown", "json"], default="markdown")
    parser.add_argument("--offline", action="store_true", help="Use sample listings instead of LinkedIn")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = Settings.from_env()
    overrides = {}
    if args.limit:
        overrides["harvest_limit"] = args.limit
    if args.top:
        overrides["top_n"] = args.top
    if args.offline:
        overrides["job_source"] = "mock"
    settings = replace(settings, **overrides)

    try:
        payload = args.resume.read_bytes()
    except OSError as exc:
        print(f"Could not read {args.resume}: {exc}", file=sys.stderr)
        return 1

    state = run(
        payload,
        args.resume.name,
        keywords=args.keywords,
        location=args.location,
        workplace=args.workplace,
        experience_levels=args.experience,
        settings=settings,
    )
    if not state.ok or state.result is None:
        print(state.message or "Run failed.", file=sys.stderr)
        return 1

    print(to_json(state.result) if args.format == "json" else build_report(state.result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
