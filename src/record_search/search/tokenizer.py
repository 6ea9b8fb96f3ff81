"""
Query Tokenizer

Turns a raw query string into normalized match tokens.
"""

import re
from enum import Enum


class SearchMode(str, Enum):
    """Matching policy across query tokens."""

    ANY = "any"  # OR
    ALL = "all"  # AND
    PHRASE = "phrase"  # exact contiguous substring


WHITESPACE_PATTERN = re.compile(r"\s+")
PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")

STOP_WORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "but", "by", "for", "if",
        "in", "into", "is", "it", "no", "not", "of", "on", "or", "s", "such",
        "t", "that", "the", "their", "then", "there", "these", "they", "this",
        "to", "was", "will", "with",
    }
)


def parse_search_mode(value: str | None, default: SearchMode = SearchMode.ANY) -> SearchMode:
    """Map a raw ``mode`` parameter to a SearchMode, falling back to ``default``."""
    if not value:
        return default
    try:
        return SearchMode(value.strip().lower())
    except ValueError:
        return default


def normalize(text: str) -> str:
    """Trim, lower-case and collapse whitespace runs to single spaces."""
    return WHITESPACE_PATTERN.sub(" ", text).strip().lower()


def tokenize_query(query: str | None, mode: SearchMode) -> list[str]:
    """
    Tokenize a search query for the given mode.

    ``any``/``all`` split on whitespace; ``phrase`` keeps the whole normalized
    query as a single token. A blank query yields no tokens, which callers
    must treat as "no possible match".
    """
    normalized = normalize(query or "")
    if not normalized:
        return []
    if mode == SearchMode.PHRASE:
        return [normalized]
    return normalized.split(" ")


def tokenize(text: str | None, remove_stop_words: bool = True) -> list[str]:
    """
    Analyze free text into word tokens.

    Punctuation is stripped, single-character tokens are dropped and, unless
    disabled, common English stop words are removed.
    """
    if not text:
        return []
    words = PUNCTUATION_PATTERN.sub(" ", text.lower()).split()
    return [
        w
        for w in words
        if len(w) > 1 and not (remove_stop_words and w in STOP_WORDS)
    ]
