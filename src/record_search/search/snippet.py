"""
Snippet Highlighting for Search Results

Generates KWIC (Key Word In Context) snippets with every query term
occurrence wrapped in a highlight tag. Nearby occurrences share one window;
each snippet's visible text (ellipses included, tags excluded) is at most
``max_length`` characters.
"""

import re
from typing import Any

from record_search.search.fields import FieldKind
from record_search.search.scoring import stringify, value_matches
from record_search.search.tokenizer import SearchMode, normalize

ELLIPSIS = "..."
MIN_SNIPPET_LENGTH = 16

Span = tuple[int, int]


def _term_pattern(term: str) -> re.Pattern:
    # Terms are whitespace-normalized; let a single space match any run.
    parts = [re.escape(p) for p in term.lower().split(" ") if p]
    return re.compile(r"\s+".join(parts))


def _lowered(text: str) -> tuple[str, list[int]]:
    """Lower-cased text plus the source index of every lowered character."""
    offsets = []
    for i, ch in enumerate(text):
        offsets.extend([i] * len(ch.lower()))
    lowered = text.lower()
    # Context-sensitive lowering (final sigma) keeps per-character lengths.
    if len(lowered) != len(offsets):
        lowered = "".join(ch.lower() for ch in text)
    return lowered, offsets


def find_matches(text: str, terms: list[str]) -> list[Span]:
    """
    Sorted occurrence spans of all terms, overlapping/adjacent ones merged.

    Matching runs on the lower-cased text, the same folding the scorer uses;
    spans are mapped back to positions in the original text.
    """
    lowered, offsets = _lowered(text)
    spans: list[Span] = []
    for term in dict.fromkeys(terms):
        if not term.strip():
            continue
        for m in _term_pattern(term).finditer(lowered):
            if m.end() > m.start():
                spans.append((offsets[m.start()], offsets[m.end() - 1] + 1))

    spans.sort()
    merged: list[Span] = []
    for start, end in spans:
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def _wrap(text: str, spans: list[Span], tag: str) -> str:
    out = []
    pos = 0
    for start, end in spans:
        out.append(text[pos:start])
        out.append(f"<{tag}>{text[start:end]}</{tag}>")
        pos = end
    out.append(text[pos:])
    return "".join(out)


def _snap_to_words(text: str, start: int, end: int, keep: Span) -> Span:
    """Shrink a window so it doesn't cut words, never uncovering ``keep``."""
    keep_start, keep_end = keep

    if start > 0 and not text[start - 1].isspace():
        for i in range(start, keep_start):
            if text[i].isspace():
                start = i + 1
                break
    while start < keep_start and text[start].isspace():
        start += 1

    if end < len(text) and not text[end].isspace():
        for i in range(end - 1, keep_end - 1, -1):
            if text[i].isspace():
                end = i
                break
    while end > keep_end and text[end - 1].isspace():
        end -= 1

    return start, end


def _render(text: str, start: int, end: int, spans: list[Span], tag: str) -> str:
    visible = [
        (max(s, start) - start, min(e, end) - start)
        for s, e in spans
        if s < end and e > start
    ]
    snippet = _wrap(text[start:end], visible, tag)
    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(text):
        snippet = snippet + ELLIPSIS
    return snippet


def build_snippets(
    text: str,
    spans: list[Span],
    tag: str = "mark",
    max_length: int = 150,
) -> list[str]:
    """
    Cut highlighted windows out of ``text`` around the given match spans.

    Text that fits within ``max_length`` is returned whole as one snippet.
    Otherwise spans are grouped greedily into windows, each centered on its
    group and trimmed back to word boundaries.
    """
    if not spans:
        return []
    if len(text) <= max_length:
        return [_wrap(text, spans, tag)]

    budget = max(max_length - 2 * len(ELLIPSIS), 1)
    snippets = []
    lower = 0
    i = 0
    while i < len(spans):
        group_start, group_end = spans[i]
        j = i + 1
        while j < len(spans) and spans[j][1] - group_start <= budget:
            group_end = spans[j][1]
            j += 1
        # A single occurrence longer than the window is clipped.
        group_end = min(group_end, group_start + budget)

        pad = budget - (group_end - group_start)
        start = group_start - pad // 2
        end = start + budget
        if start < lower:
            end += lower - start
            start = lower
        if end > len(text):
            start = max(lower, start - (end - len(text)))
            end = len(text)
        if j < len(spans) and spans[j][0] < end:
            end = spans[j][0]

        start, end = _snap_to_words(text, start, end, (group_start, group_end))
        snippets.append(_render(text, start, end, spans[i:j], tag))
        lower = end
        i = j

    return snippets


def _truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max(max_length - len(ELLIPSIS), 1)] + ELLIPSIS


def highlight_text(
    text: str,
    terms: list[str],
    tag: str = "mark",
    max_length: int = 150,
) -> list[str]:
    """
    Highlight a single matching value.

    When no literal occurrence exists (a keyword value equal to the query
    only after normalization) the whole value is wrapped as one snippet.
    """
    spans = find_matches(text, terms)
    if spans:
        return build_snippets(text, spans, tag=tag, max_length=max_length)
    if not text:
        return []
    return [f"<{tag}>{_truncate(text, max_length)}</{tag}>"]


def generate_highlights(
    value: Any,
    tokens: list[str],
    mode: SearchMode,
    kind: FieldKind = FieldKind.TEXT,
    tag: str = "mark",
    max_length: int = 150,
) -> list[str]:
    """
    Highlighted snippets for one matched field value.

    Array values produce snippets per matching element, in element order.
    Elements (or scalar values) that don't match any token are skipped.
    """
    if value is None or not tokens:
        return []

    terms = tokens[:1] if mode == SearchMode.PHRASE else list(dict.fromkeys(tokens))

    if kind == FieldKind.ARRAY and isinstance(value, (list, tuple, set, frozenset)):
        elements = [stringify(v) for v in value if v is not None]
    else:
        elements = [stringify(value)]

    snippets: list[str] = []
    for text in elements:
        normalized = normalize(text)
        if not any(value_matches(normalized, t, kind) for t in terms):
            continue
        snippets.extend(highlight_text(text, terms, tag=tag, max_length=max_length))
    return snippets
