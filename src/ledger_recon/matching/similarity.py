"""
Name similarity scoring for transaction descriptions.

The blend of word overlap and character overlap below is kept stable so
scores stay comparable with earlier reconciliation runs; it is not an
edit-distance metric.
"""

import re

WORD_WEIGHT = 0.7
CHAR_WEIGHT = 0.3
CONTAINMENT_SCORE = 0.9

_DISALLOWED = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_name(text: str) -> str:
    """Lowercase, keep only [a-z0-9 ] and collapse whitespace."""
    text = _DISALLOWED.sub("", (text or "").lower())
    return _WHITESPACE.sub(" ", text).strip()


def word_overlap(a: str, b: str) -> float:
    """Dice coefficient over whitespace-separated words of a and b."""
    words_a = a.split(" ")
    words_b = b.split(" ")
    common = [w for w in words_a if w in words_b]
    return (2.0 * len(common)) / (len(words_a) + len(words_b))


def char_overlap(a: str, b: str) -> float:
    """Share of positions in a whose character occurs anywhere in b."""
    matches = sum(1 for ch in a if ch in b)
    return matches / max(len(a), len(b))


def similarity(a: str, b: str) -> float:
    """
    Score how alike two free-text names are.

    Args:
        a: First name
        b: Second name

    Returns:
        Score in [0, 1]: 1 for equal normalized names, 0.9 when one
        contains the other, otherwise the weighted word/character overlap
    """
    a = normalize_name(a)
    b = normalize_name(b)

    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    if a in b or b in a:
        return CONTAINMENT_SCORE

    return WORD_WEIGHT * word_overlap(a, b) + CHAR_WEIGHT * char_overlap(a, b)
