"""Grapheme-aware text helpers."""

import regex

DM_MAX_GRAPHEMES = 1000

_GRAPHEME = regex.compile(r"\X")


def grapheme_length(text: str) -> int:
    """Number of user-perceived characters in ``text``."""
    return len(_GRAPHEME.findall(text))


def truncate_graphemes(text: str, limit: int = DM_MAX_GRAPHEMES) -> str:
    """Cut ``text`` to at most ``limit`` grapheme clusters."""
    if limit <= 0:
        return ""
    clusters = _GRAPHEME.findall(text)
    if len(clusters) <= limit:
        return text
    return "".join(clusters[:limit])
