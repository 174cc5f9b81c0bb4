"""Error hierarchy for document handling."""
from __future__ import annotations

from typing import Optional


class DocumentError(Exception):
    """Base for all document errors."""


class DocumentNotFoundError(DocumentError):
    """Document file does not exist (usually a wrong working directory)."""


class DocumentSyntaxError(DocumentError):
    """Document is not valid JSON or not a JSON object."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class DocumentExistsError(DocumentError):
    """Refusing to overwrite an existing document."""


class FieldNotFoundError(DocumentError):
    """Field path does not exist in the document."""


class NotFoundError(DocumentError):
    """Named integration block not found."""


class CredentialError(DocumentError):
    """Credential missing, empty or unresolved."""
