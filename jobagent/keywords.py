"""Keyword tokenizer shared by the résumé parser and the scorer."""
from __future__ import annotations

import re
from collections import Counter
from typing import Iterable

_NON_KEYWORD_RE = re.compile(r"[^a-z0-9+.# ]")
_SENTENCE_SPLIT_RE = re.compile(r"[\n.]+")

MAX_KEYWORDS = 40
MIN_TOKEN_LEN = 3


def normalize(text: str) -> str:
    """Lowercase and blank out everything but letters, digits, ``+ . #``."""
    return _NON_KEYWORD_RE.sub(" ", (text or "").lower())


def tokenize(text: str, stop_words: Iterable[str] = frozenset()) -> list[str]:
    stop = stop_words if isinstance(stop_words, (set, frozenset)) else frozenset(stop_words)
    return [
        token
        for token in normalize(text).split()
        if len(token) >= MIN_TOKEN_LEN and token not in stop
    ]


def extract_keywords(text: str, stop_words: Iterable[str] = frozenset(), limit: int = MAX_KEYWORDS) -> list[str]:
    """Most frequent tokens first; ties keep first-seen order."""
    counts = Counter(tokenize(text, stop_words))
    # sorted() is stable and Counter keeps insertion order.
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [token for token, _ in ranked[:limit]]


def split_sentences(text: str) -> list[str]:
    return _SENTENCE_SPLIT_RE.split((text or "").replace("\r\n", "\n"))
