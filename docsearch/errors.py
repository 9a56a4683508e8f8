"""
docsearch/errors.py

Failure taxonomy for the indexing pipeline.

Two kinds of outcome are kept apart on purpose:
  - per-document problems come back as values (Extracted / ExtractionFailed)
    so the crawl can log them and carry on
  - problems that stop an operation are exceptions (EnumerationError,
    PersistenceError)
"""

from dataclasses import dataclass


class DocsearchError(Exception):
    """Base class for every exception raised by docsearch."""


class EnumerationError(DocsearchError):
    """A corpus directory could not be listed. Aborts the build for that root."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"cannot read directory {path}: {cause}")


class PersistenceError(DocsearchError):
    """The index file could not be written, read, or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


@dataclass(frozen=True)
class Extracted:
    doc_id: str
    text: str


@dataclass(frozen=True)
class ExtractionFailed:
    doc_id: str
    reason: str


ExtractionResult = Extracted | ExtractionFailed
