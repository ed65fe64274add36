"""
Edit request, result and pending-edit models.
"""

import uuid
from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field

EditMode = Literal["auto", "exact"]


def _utcnow() -> datetime:
    """Get current UTC time."""
    return datetime.now(UTC)


class EditResult(BaseModel):
    """Outcome of a successful replacement."""

    content: str = Field(..., description="Document text with the substitution applied")
    matches: int = Field(..., ge=1, description="Number of occurrences replaced")
    strategy: str = Field(..., description="Name of the replacer that found the match")

    def as_tuple(self) -> tuple[str, int]:
        """Return the ``(content, matches)`` pair."""
        return self.content, self.matches


class PendingEdit(BaseModel):
    """A proposed document change awaiting human review."""

    edit_id: str = Field(default_factory=lambda: str(uuid.uuid4())[:8])
    path: str
    base_content: str
    modified_content: str
    diff: str = ""
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
