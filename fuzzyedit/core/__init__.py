"""Core module for fuzzyedit."""

from fuzzyedit.core.config import EditSettings, load_settings
from fuzzyedit.core.engine import apply_edit, build_pipeline, replace_once_or_all
from fuzzyedit.core.errors import (
    EditError,
    EditSettingsError,
    InvalidInputError,
    NotFoundOrAmbiguousError,
    PendingEditNotFoundError,
    StaleEditError,
)
from fuzzyedit.core.pending import PendingEditStore
from fuzzyedit.core.similarity import levenshtein, similarity

__all__ = [
    "EditError",
    "EditSettings",
    "EditSettingsError",
    "InvalidInputError",
    "NotFoundOrAmbiguousError",
    "PendingEditNotFoundError",
    "PendingEditStore",
    "StaleEditError",
    "apply_edit",
    "build_pipeline",
    "levenshtein",
    "load_settings",
    "replace_once_or_all",
    "similarity",
]
