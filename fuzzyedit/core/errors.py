"""
Exceptions raised by the edit engine and the pending-edit store.
"""


class EditError(Exception):
    """Base class for edit failures, with an error classification."""

    error_type = "edit_error"


class InvalidInputError(EditError):
    """Raised when old_text is empty or identical to new_text."""

    error_type = "invalid_input"


class NotFoundOrAmbiguousError(EditError):
    """Raised when no strategy produced a usable, unambiguous match."""

    error_type = "not_found_or_ambiguous"

    def __init__(self, message: str | None = None):
        super().__init__(
            message or "old_text not found in content or was found multiple times"
        )


class StaleEditError(EditError):
    """Raised when a pending edit no longer applies to the document on disk."""

    error_type = "stale"

    def __init__(self, edit_id: str, path: str):
        self.edit_id = edit_id
        self.path = path
        super().__init__(
            f"Pending edit '{edit_id}' is stale: {path} changed since the edit was proposed."
        )


class PendingEditNotFoundError(KeyError):
    """Raised when a pending edit ID does not exist."""

    def __init__(self, edit_id: str):
        self.edit_id = edit_id
        super().__init__(f"Pending edit '{edit_id}' not found.")

    def __str__(self) -> str:
        return self.args[0]


class EditSettingsError(Exception):
    """Raised when a settings file is invalid, with a user-friendly message."""

    def __init__(self, source: str, issues: list[str]):
        self.source = source
        self.issues = issues
        msg = f"Invalid fuzzyedit settings in '{source}':\n" + "\n".join(
            f"  - {issue}" for issue in issues
        )
        super().__init__(msg)
