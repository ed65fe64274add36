"""
Replacement engine: runs the replacer pipeline and applies the occurrence policy.

The engine is a pure function of its inputs. It performs no I/O and keeps no
state between calls, so it can be used from any number of threads at once.
"""

from __future__ import annotations

import functools
import logging

from fuzzyedit.core.config import EditSettings
from fuzzyedit.core.errors import InvalidInputError, NotFoundOrAmbiguousError
from fuzzyedit.core.replacers import PIPELINE, Replacer, block_anchor_replacer
from fuzzyedit.models.edit import EditMode, EditResult

logger = logging.getLogger(__name__)


def build_pipeline(
    mode: EditMode = "auto", settings: EditSettings | None = None
) -> list[tuple[str, Replacer]]:
    """
    Return the ordered ``(name, replacer)`` pairs to try for a given mode.

    Args:
        mode: "auto" for the full pipeline, "exact" for verbatim matching only
        settings: Optional settings whose thresholds replace the block-anchor defaults
    """
    if mode == "exact":
        return [PIPELINE[0]]

    pipeline = list(PIPELINE)
    if settings is not None:
        for i, (name, _) in enumerate(pipeline):
            if name == "block_anchor":
                pipeline[i] = (
                    name,
                    functools.partial(
                        block_anchor_replacer,
                        single_threshold=settings.single_candidate_threshold,
                        multiple_threshold=settings.multiple_candidates_threshold,
                    ),
                )
    return pipeline


def apply_edit(
    document: str,
    old_text: str,
    new_text: str,
    *,
    replace_all: bool = False,
    mode: EditMode | None = None,
    settings: EditSettings | None = None,
) -> EditResult:
    """
    Replace ``old_text`` in ``document`` with ``new_text``.

    Replacers are tried in order and each candidate they yield is checked
    against the document. Without ``replace_all`` a candidate is accepted only
    if it occurs exactly once; with ``replace_all`` every occurrence of the
    first candidate found is replaced. The first accepted candidate wins.

    Args:
        document: Full current document text
        old_text: Text to find (verbatim or near-verbatim)
        new_text: Replacement text
        replace_all: Replace every occurrence instead of requiring uniqueness
        mode: "auto" or "exact"; defaults to ``settings.mode`` or "auto"
        settings: Optional EditSettings for thresholds and default mode

    Returns:
        EditResult with the new content, number of replacements and strategy name

    Raises:
        InvalidInputError: If old_text is empty or equal to new_text
        NotFoundOrAmbiguousError: If no unique (or, with replace_all, any) match exists
    """
    if old_text == "":
        raise InvalidInputError("old_text must not be empty")
    if old_text == new_text:
        raise InvalidInputError("old_text and new_text must be different")

    if mode is None:
        mode = settings.mode if settings is not None else "auto"

    for name, replacer in build_pipeline(mode, settings):
        for candidate in replacer(document, old_text):
            if not candidate:
                continue

            first_index = document.find(candidate)
            if first_index == -1:
                continue

            if replace_all:
                occurrences = document.count(candidate)
                logger.debug("Replacer %s matched %d occurrence(s)", name, occurrences)
                return EditResult(
                    content=document.replace(candidate, new_text),
                    matches=occurrences,
                    strategy=name,
                )

            if document.rfind(candidate) != first_index:
                logger.debug("Replacer %s candidate is ambiguous, skipping", name)
                continue

            logger.debug("Replacer %s matched at offset %d", name, first_index)
            content = (
                document[:first_index]
                + new_text
                + document[first_index + len(candidate) :]
            )
            return EditResult(content=content, matches=1, strategy=name)

    raise NotFoundOrAmbiguousError()


def replace_once_or_all(
    content: str,
    old_string: str,
    new_string: str,
    replace_all: bool = False,
) -> tuple[str, int]:
    """Shorthand for :func:`apply_edit` returning ``(content, matches)``."""
    return apply_edit(content, old_string, new_string, replace_all=replace_all).as_tuple()
