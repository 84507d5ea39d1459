"""Utility functions for wordmatch application."""

from typing import Iterable

from .config import WORD_DELIMITER, WORD_FIELD_COUNT
from .models import WordPair


def parse_word_lines(lines: Iterable[str], delimiter: str = WORD_DELIMITER) -> list[WordPair]:
    """Parse `term_a,term_b,hint` records into WordPairs.

    Blank lines are skipped. The hint may itself contain the delimiter; any
    line that does not split into exactly three fields is dropped. Ids are
    the 0-based position among the retained lines.
    """
    pairs = []
    for line in lines:
        if not line.strip():
            continue
        parts = line.split(delimiter, WORD_FIELD_COUNT - 1)
        if len(parts) != WORD_FIELD_COUNT:
            continue
        term_a, term_b, hint = (p.strip() for p in parts)
        pairs.append(WordPair(len(pairs), term_a, term_b, hint))
    return pairs


def format_session_time(seconds: int) -> str:
    """Format elapsed seconds as m:ss."""
    minutes, remaining = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{remaining:02d}"
