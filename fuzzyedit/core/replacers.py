"""
Replacement strategies for fuzzy search-and-replace.

Each replacer is a generator ``(content, find) -> Iterator[str]`` yielding
candidate substrings of ``content`` believed to be the place the caller meant
by ``find``. Replacers are tried in pipeline order, from exact to heuristic;
the engine stops at the first candidate that passes the occurrence policy.

Candidates are sliced out of the document itself (except for the exact
replacer), so bytes outside the matched span are never altered.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator

from fuzzyedit.core.similarity import similarity

Replacer = Callable[[str, str], Iterator[str]]

SINGLE_CANDIDATE_SIMILARITY_THRESHOLD = 0.0
MULTIPLE_CANDIDATES_SIMILARITY_THRESHOLD = 0.3

_WHITESPACE_RE = re.compile(r"\s+")
_ESCAPE_RE = re.compile(r"\\([ntr'\"`\\\n$])")
_UNESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "'": "'",
    '"': '"',
    "`": "`",
    "\\": "\\",
    "\n": "\n",
    "$": "$",
}


def _search_lines(find: str) -> list[str]:
    """Split ``find`` into lines, dropping the empty line left by a trailing newline."""
    lines = find.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _slice_lines(lines: list[str], start: int, end: int, find: str) -> str:
    """
    Join ``lines[start:end]`` back into a candidate.

    When ``find`` ends with a newline and the window is not at the end of the
    document, the newline after the window belongs to the candidate too.
    """
    block = "\n".join(lines[start:end])
    if find.endswith("\n") and end < len(lines):
        block += "\n"
    return block


# =============================================================================
# 1. Exact
# =============================================================================


def simple_replacer(content: str, find: str) -> Iterator[str]:
    """Yield ``find`` unchanged; matches only a verbatim occurrence."""
    yield find


# =============================================================================
# 2. Line-trimmed
# =============================================================================


def line_trimmed_replacer(content: str, find: str) -> Iterator[str]:
    """
    Match line blocks whose lines are equal after stripping each one.

    Tolerates stray leading/trailing whitespace per line and yields the
    original, untrimmed lines so surrounding indentation survives.
    """
    original_lines = content.split("\n")
    search_lines = _search_lines(find)
    if not search_lines:
        return

    trimmed_search = [line.strip() for line in search_lines]
    size = len(search_lines)

    for i in range(len(original_lines) - size + 1):
        window = original_lines[i : i + size]
        if all(line.strip() == wanted for line, wanted in zip(window, trimmed_search)):
            yield _slice_lines(original_lines, i, i + size, find)


# =============================================================================
# 3. Block anchor
# =============================================================================


def _interior_similarity(
    original_lines: list[str], start: int, end: int, search_lines: list[str]
) -> float:
    """Average per-line similarity of the lines strictly between the anchors."""
    lines_to_check = min(len(search_lines) - 2, end - start - 1)
    if lines_to_check <= 0:
        return 1.0

    total = 0.0
    for j in range(1, lines_to_check + 1):
        total += similarity(original_lines[start + j].strip(), search_lines[j].strip())
    return total / lines_to_check


def block_anchor_replacer(
    content: str,
    find: str,
    *,
    single_threshold: float = SINGLE_CANDIDATE_SIMILARITY_THRESHOLD,
    multiple_threshold: float = MULTIPLE_CANDIDATES_SIMILARITY_THRESHOLD,
) -> Iterator[str]:
    """
    Match a block by its first and last lines, scoring the interior.

    Only applies to finds of three or more lines. Every document line equal
    (after strip) to the first search line is paired with the nearest line at
    least two lines further down that equals the last search line.

    A lone candidate block is accepted when its score reaches
    ``single_threshold`` (0.0 by default, so anchors alone suffice). With
    several candidates, the best-scoring one is accepted only when it reaches
    ``multiple_threshold``.
    """
    original_lines = content.split("\n")
    search_lines = _search_lines(find)
    if len(search_lines) < 3:
        return

    first_line = search_lines[0].strip()
    last_line = search_lines[-1].strip()

    candidates: list[tuple[int, int]] = []
    for i, line in enumerate(original_lines):
        if line.strip() != first_line:
            continue
        for j in range(i + 2, len(original_lines)):
            if original_lines[j].strip() == last_line:
                candidates.append((i, j))
                break

    if not candidates:
        return

    if len(candidates) == 1:
        start, end = candidates[0]
        score = _interior_similarity(original_lines, start, end, search_lines)
        if score >= single_threshold:
            yield _slice_lines(original_lines, start, end + 1, find)
        return

    best: tuple[int, int] | None = None
    best_score = -1.0
    for start, end in candidates:
        score = _interior_similarity(original_lines, start, end, search_lines)
        if score > best_score:
            best, best_score = (start, end), score

    if best is not None and best_score >= multiple_threshold:
        start, end = best
        yield _slice_lines(original_lines, start, end + 1, find)


# =============================================================================
# 4. Whitespace-normalized
# =============================================================================


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space and strip the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def whitespace_normalized_replacer(content: str, find: str) -> Iterator[str]:
    """
    Match text that differs only in the amount or kind of whitespace.

    Single lines are matched whole or, when the find is a fragment of the
    line, via a regex built from its words joined by ``\\s+``. Multi-line
    finds are also matched against same-height windows of lines.
    """
    normalized_find = normalize_whitespace(find)
    lines = content.split("\n")

    for line in lines:
        normalized_line = normalize_whitespace(line)
        if normalized_line == normalized_find:
            yield line
        elif normalized_find in normalized_line:
            words = find.split()
            if words:
                pattern = r"\s+".join(re.escape(word) for word in words)
                match = re.search(pattern, line)
                if match:
                    yield match.group(0)

    find_lines = find.split("\n")
    if len(find_lines) > 1:
        size = len(find_lines)
        for i in range(len(lines) - size + 1):
            block = "\n".join(lines[i : i + size])
            if normalize_whitespace(block) == normalized_find:
                yield block


# =============================================================================
# 5. Indentation-flexible
# =============================================================================


def remove_indentation(text: str) -> str:
    """Strip the indentation shared by all non-blank lines."""
    lines = text.split("\n")
    non_blank = [line for line in lines if line.strip()]
    if not non_blank:
        return text

    min_indent = min(len(line) - len(line.lstrip()) for line in non_blank)
    return "\n".join(line[min_indent:] if line.strip() else line for line in lines)


def indentation_flexible_replacer(content: str, find: str) -> Iterator[str]:
    """Match blocks that are identical once their common indentation is removed."""
    normalized_find = remove_indentation(find)
    content_lines = content.split("\n")
    size = len(find.split("\n"))

    for i in range(len(content_lines) - size + 1):
        block = "\n".join(content_lines[i : i + size])
        if remove_indentation(block) == normalized_find:
            yield block


# =============================================================================
# 6. Escape-normalized
# =============================================================================


def unescape(text: str) -> str:
    """Turn escape sequences such as ``\\n`` or ``\\"`` into the characters they denote."""
    return _ESCAPE_RE.sub(lambda m: _UNESCAPES[m.group(1)], text)


def escape_normalized_replacer(content: str, find: str) -> Iterator[str]:
    """
    Match text that was written with string-literal escapes.

    Yields the unescaped find when it occurs verbatim, then any window of
    document lines that unescapes to the same text.
    """
    unescaped_find = unescape(find)
    if unescaped_find in content:
        yield unescaped_find

    lines = content.split("\n")
    size = len(unescaped_find.split("\n"))
    for i in range(len(lines) - size + 1):
        block = "\n".join(lines[i : i + size])
        if unescape(block) == unescaped_find:
            yield block


# =============================================================================
# Pipeline
# =============================================================================

PIPELINE: tuple[tuple[str, Replacer], ...] = (
    ("simple", simple_replacer),
    ("line_trimmed", line_trimmed_replacer),
    ("block_anchor", block_anchor_replacer),
    ("whitespace_normalized", whitespace_normalized_replacer),
    ("indentation_flexible", indentation_flexible_replacer),
    ("escape_normalized", escape_normalized_replacer),
)

STRATEGY_NAMES: tuple[str, ...] = tuple(name for name, _ in PIPELINE)
