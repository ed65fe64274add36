"""Data models for fuzzyedit."""

from fuzzyedit.models.edit import EditMode, EditResult, PendingEdit

__all__ = [
    "EditMode",
    "EditResult",
    "PendingEdit",
]
