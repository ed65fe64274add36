"""
Document editing tools.

Search-and-replace edits that tolerate whitespace, indentation and escaping
drift in old_text, plus whole-document writes. By default changes are
recorded as pending edits for human review instead of being written.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from fuzzyedit.core.config import EditSettings, load_settings
from fuzzyedit.core.engine import apply_edit
from fuzzyedit.core.errors import EditError, EditSettingsError
from fuzzyedit.core.pending import PendingEditStore
from fuzzyedit.models.edit import EditMode
from fuzzyedit.utils.diff import make_patch

logger = logging.getLogger(__name__)


class _DocumentError(Exception):
    """A document could not be loaded; carries the tool error_type."""

    def __init__(self, message: str, error_type: str):
        self.error_type = error_type
        super().__init__(message)


def _load_base_text(
    path: Path,
    settings: EditSettings,
    store: PendingEditStore | None,
    must_exist: bool = True,
) -> tuple[str, bool]:
    """
    Get the latest text of a document and whether it exists on disk.

    When a pending edit exists and review is on, its proposed content is the
    base, so successive edits stack before review.
    """
    if store is not None:
        pending = store.get(path)
        if pending is not None:
            return pending.modified_content, path.exists()

    if not path.exists():
        if must_exist:
            raise _DocumentError(f"File not found: {path}", "file_not_found")
        return "", False
    if not path.is_file():
        raise _DocumentError(f"Not a file: {path}", "not_a_file")

    size = path.stat().st_size
    if size > settings.max_document_bytes:
        raise _DocumentError(
            f"File too large ({size} bytes). Maximum is {settings.max_document_bytes} bytes.",
            "too_large",
        )

    try:
        return path.read_text(encoding="utf-8"), True
    except UnicodeDecodeError as e:
        raise _DocumentError(f"Cannot decode file as utf-8: {path}", "decode_error") from e


def _resolve_settings(settings: EditSettings | None) -> EditSettings:
    return settings if settings is not None else load_settings()


# =============================================================================
# Edit a document (fuzzy search and replace)
# =============================================================================


class EditDocumentInput(BaseModel):
    """Input for edit_document function."""

    path: str = Field(description="Path to the document to edit")
    old_text: str = Field(
        description="Text to replace. Whitespace, indentation and escaping may differ slightly from the document."
    )
    new_text: str = Field(description="Replacement text (must differ from old_text)")
    replace_all: bool = Field(
        default=False,
        description="Replace every occurrence. Without it, old_text must match exactly one place.",
    )
    mode: Optional[EditMode] = Field(
        default=None,
        description="auto (tolerant matching) or exact (verbatim only). Defaults to the configured mode.",
    )
    review: bool = Field(
        default=True,
        description="Record a pending edit for review instead of writing the file",
    )
    pending_dir: Optional[str] = Field(
        default=None, description="Override the pending edits directory"
    )


class EditDocumentOutput(BaseModel):
    """Output for edit_document function."""

    ok: bool
    matches: int = 0
    strategy: Optional[str] = None
    diff: Optional[str] = None
    output: Optional[str] = None
    pending_id: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None


def edit_document(
    input: EditDocumentInput, settings: EditSettings | None = None
) -> EditDocumentOutput:
    """
    Replace text in a document and return a preview diff.

    By default a single unique occurrence of old_text is replaced; the edit
    fails if it is not found or is ambiguous. Set replace_all to replace every
    occurrence. Do not include line-number prefixes copied from read output.

    Examples:
        >>> edit_document({"path": "docs/intro.md", "old_text": "Helo", "new_text": "Hello"})
        >>> edit_document({"path": "main.py", "old_text": "x = 1", "new_text": "x = 2", "review": False})
    """
    try:
        settings = _resolve_settings(settings)
        path = Path(os.path.expanduser(input.path))
        store = None
        if input.review:
            store = PendingEditStore(input.pending_dir or settings.pending_dir)

        base_text, _ = _load_base_text(path, settings, store)

        result = apply_edit(
            base_text,
            input.old_text,
            input.new_text,
            replace_all=input.replace_all,
            mode=input.mode,
            settings=settings,
        )
        diff = make_patch(str(path), base_text, result.content)
        logger.debug(
            "Edited %s: %d match(es) via %s", path, result.matches, result.strategy
        )

        pending_id = None
        if store is not None:
            pending_id = store.upsert(path, base_text, result.content).edit_id
        else:
            path.write_text(result.content, encoding="utf-8")

        return EditDocumentOutput(
            ok=True,
            matches=result.matches,
            strategy=result.strategy,
            diff=diff,
            output=(
                f"Replaced {result.matches} occurrences"
                if input.replace_all
                else "Replaced 1 occurrence"
            ),
            pending_id=pending_id,
        )

    except EditError as e:
        return EditDocumentOutput(ok=False, error=str(e), error_type=e.error_type)
    except EditSettingsError as e:
        return EditDocumentOutput(ok=False, error=str(e), error_type="invalid_settings")
    except _DocumentError as e:
        return EditDocumentOutput(ok=False, error=str(e), error_type=e.error_type)
    except PermissionError:
        return EditDocumentOutput(
            ok=False, error=f"Permission denied: {input.path}", error_type="io_error"
        )
    except Exception as e:
        return EditDocumentOutput(ok=False, error=str(e), error_type="io_error")


# =============================================================================
# Write a whole document
# =============================================================================


class WriteDocumentInput(BaseModel):
    """Input for write_document function."""

    path: str = Field(description="Path to the document to write")
    content: str = Field(description="Full content for the document")
    review: bool = Field(
        default=True,
        description="Record a pending edit for review instead of writing the file",
    )
    pending_dir: Optional[str] = Field(
        default=None, description="Override the pending edits directory"
    )


class WriteDocumentOutput(BaseModel):
    """Output for write_document function."""

    ok: bool
    exists: bool = False
    diff: Optional[str] = None
    output: Optional[str] = None
    pending_id: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None


def write_document(
    input: WriteDocumentInput, settings: EditSettings | None = None
) -> WriteDocumentOutput:
    """
    Propose full content for a new or existing document.

    ALWAYS prefer edit_document for changes to existing documents.

    Examples:
        >>> write_document({"path": "docs/new.md", "content": "# New page\\n"})
    """
    try:
        settings = _resolve_settings(settings)
        path = Path(os.path.expanduser(input.path))
        store = None
        if input.review:
            store = PendingEditStore(input.pending_dir or settings.pending_dir)

        base_text, exists = _load_base_text(path, settings, store, must_exist=False)
        diff = make_patch(str(path), base_text, input.content)

        pending_id = None
        if store is not None:
            pending_id = store.upsert(path, base_text, input.content).edit_id
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(input.content, encoding="utf-8")
        logger.debug("Wrote %s (existed: %s)", path, exists)

        return WriteDocumentOutput(
            ok=True,
            exists=exists,
            diff=diff,
            output="Document overwritten" if exists else "New document created",
            pending_id=pending_id,
        )

    except EditSettingsError as e:
        return WriteDocumentOutput(ok=False, error=str(e), error_type="invalid_settings")
    except _DocumentError as e:
        return WriteDocumentOutput(ok=False, error=str(e), error_type=e.error_type)
    except PermissionError:
        return WriteDocumentOutput(
            ok=False, error=f"Permission denied: {input.path}", error_type="io_error"
        )
    except Exception as e:
        return WriteDocumentOutput(ok=False, error=str(e), error_type="io_error")
