"""
Fatal setup errors.

Only these abort the pipeline.  Everything else (an unreachable
registry, a missing tslint.json or .gitignore) degrades to a
fallback value or a logged notice.
"""

from __future__ import annotations


class SetupError(Exception):
    """Base class for errors that abort the setup pipeline."""


class DocumentNotFoundError(SetupError):
    """Raised when a required document is absent from the project tree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Could not find ({path})")


class InvalidDocumentError(SetupError):
    """Raised when a JSON document exists but cannot be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid JSON in {path}: {reason}")


class FileAlreadyExistsError(SetupError):
    """Raised when creating a file that is already present in the tree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path already exists ({path})")
