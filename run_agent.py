#!/usr/bin/env python3
"""Entry point to run the matching agent from a checkout."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from jobagent.cli import main

if __name__ == "__main__":
    sys.exit(main())
