"""
String similarity scoring.

Normalized Levenshtein distance, used by the block-anchor replacer to score
how closely the interior of a candidate block matches the requested text.
"""

from rapidfuzz.distance import Levenshtein


def levenshtein(a: str, b: str) -> int:
    """
    Compute the edit distance between two strings.

    Unit cost for insertions, deletions and substitutions.

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of single-character edits turning ``a`` into ``b``
    """
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """
    Return a similarity ratio in [0, 1]; higher means more similar.

    Two empty strings are considered identical.
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1 - levenshtein(a, b) / max_len
