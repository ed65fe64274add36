"""
Pending edit storage for human-in-the-loop review.

Proposed edits are not written to documents directly. They are recorded here,
one per document, and applied only when accepted.

Directory structure:
    .fuzzyedit/pending/<sha1 of document path>.json
"""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from fuzzyedit.core.errors import PendingEditNotFoundError, StaleEditError
from fuzzyedit.models.edit import PendingEdit
from fuzzyedit.utils.diff import make_patch
from fuzzyedit.utils.paths import get_pending_dir

logger = logging.getLogger(__name__)


def _document_key(path: str | Path) -> str:
    """Stable storage key for a document path."""
    resolved = str(Path(path).expanduser().resolve())
    return hashlib.sha1(resolved.encode()).hexdigest()[:16]


class PendingEditStore:
    """
    Stores at most one pending edit per document.

    Repeated proposals against the same document stack: the record keeps the
    original base content and ID while the modified content moves forward.
    """

    def __init__(self, base_dir: Path | str | None = None):
        """
        Initialize the store.

        Args:
            base_dir: Directory for pending edit files (default: .fuzzyedit/pending)
        """
        if base_dir is None:
            base_dir = get_pending_dir()
        self.base_dir = Path(base_dir)

    def _record_path(self, path: str | Path) -> Path:
        """Get the record file for a document path."""
        return self.base_dir / f"{_document_key(path)}.json"

    def _load(self, record: Path) -> PendingEdit | None:
        try:
            with open(record) as f:
                return PendingEdit(**json.load(f))
        except (json.JSONDecodeError, OSError, ValueError):
            logger.warning("Ignoring unreadable pending edit file %s", record)
            return None

    def _save(self, edit: PendingEdit) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        with open(self._record_path(edit.path), "w") as f:
            f.write(edit.model_dump_json(indent=2))

    def get(self, path: str | Path) -> PendingEdit | None:
        """Get the pending edit for a document, if any."""
        record = self._record_path(path)
        if not record.exists():
            return None
        return self._load(record)

    def upsert(
        self,
        path: str | Path,
        base_content: str,
        modified_content: str,
    ) -> PendingEdit:
        """
        Record a proposed change to a document.

        Args:
            path: Document path
            base_content: Document text the change was computed against
            modified_content: Proposed document text

        Returns:
            The stored pending edit
        """
        path = str(Path(path).expanduser().resolve())
        existing = self.get(path)

        if existing is None:
            edit = PendingEdit(
                path=path,
                base_content=base_content,
                modified_content=modified_content,
                diff=make_patch(path, base_content, modified_content),
            )
        else:
            edit = existing.model_copy(
                update={
                    "modified_content": modified_content,
                    "diff": make_patch(path, existing.base_content, modified_content),
                    "updated_at": datetime.now(UTC),
                }
            )

        self._save(edit)
        logger.debug("Recorded pending edit %s for %s", edit.edit_id, path)
        return edit

    def list_edits(self) -> list[PendingEdit]:
        """List all pending edits, most recently updated first."""
        if not self.base_dir.exists():
            return []

        edits = []
        for record in self.base_dir.glob("*.json"):
            edit = self._load(record)
            if edit is not None:
                edits.append(edit)
        return sorted(edits, key=lambda e: e.updated_at, reverse=True)

    def get_by_id(self, edit_id: str) -> PendingEdit:
        """
        Find a pending edit by ID.

        Raises:
            PendingEditNotFoundError: If no pending edit has that ID
        """
        for edit in self.list_edits():
            if edit.edit_id == edit_id:
                return edit
        raise PendingEditNotFoundError(edit_id)

    def discard(self, edit_id: str) -> bool:
        """Delete a pending edit. Returns True if it existed."""
        try:
            edit = self.get_by_id(edit_id)
        except PendingEditNotFoundError:
            return False
        self._record_path(edit.path).unlink(missing_ok=True)
        return True

    def accept(self, edit_id: str) -> PendingEdit:
        """
        Write a pending edit to its document and remove it from the store.

        The document must still hold the base content the edit was proposed
        against (a missing file counts as empty content).

        Raises:
            PendingEditNotFoundError: If no pending edit has that ID
            StaleEditError: If the document changed since the edit was proposed
        """
        edit = self.get_by_id(edit_id)
        target = Path(edit.path)
        current = target.read_text(encoding="utf-8") if target.exists() else ""

        if current != edit.base_content:
            logger.warning("Pending edit %s is stale for %s", edit_id, edit.path)
            raise StaleEditError(edit_id, edit.path)

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(edit.modified_content, encoding="utf-8")
        self._record_path(edit.path).unlink(missing_ok=True)
        logger.debug("Accepted pending edit %s for %s", edit_id, edit.path)
        return edit
