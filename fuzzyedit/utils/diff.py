"""
Unified diff helper for previewing document changes.
"""

import difflib


def make_patch(path: str, old: str, new: str) -> str:
    """
    Build a unified diff between two versions of a document.

    Both header lines carry ``path``. Returns an empty string when the
    texts are identical.
    """
    lines = difflib.unified_diff(
        old.splitlines(keepends=True),
        new.splitlines(keepends=True),
        fromfile=path,
        tofile=path,
    )
    out = []
    for line in lines:
        out.append(line)
        if not line.endswith("\n"):
            out.append("\n\\ No newline at end of file\n")
    return "".join(out)
