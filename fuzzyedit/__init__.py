"""Fuzzyedit: tolerant, conservative search-and-replace for documents."""

from fuzzyedit.core.engine import apply_edit, replace_once_or_all
from fuzzyedit.core.errors import EditError, InvalidInputError, NotFoundOrAmbiguousError
from fuzzyedit.models.edit import EditResult

__all__ = [
    "EditError",
    "EditResult",
    "InvalidInputError",
    "NotFoundOrAmbiguousError",
    "apply_edit",
    "replace_once_or_all",
]
