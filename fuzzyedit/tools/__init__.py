"""
Agent-facing document tools.

Each tool takes a pydantic Input model and returns an Output model with an
``ok`` flag; failures are reported in the output rather than raised.
"""

from fuzzyedit.tools.edit import (
    EditDocumentInput,
    EditDocumentOutput,
    WriteDocumentInput,
    WriteDocumentOutput,
    edit_document,
    write_document,
)

__all__ = [
    "EditDocumentInput",
    "EditDocumentOutput",
    "WriteDocumentInput",
    "WriteDocumentOutput",
    "edit_document",
    "write_document",
]
