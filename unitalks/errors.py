"""Error kinds surfaced by the script library.

Every error is raised to the caller; the CLI (or any other UI boundary)
catches ``UniTalksError`` and reports ``str(exc)`` to the user.
"""
from __future__ import annotations


class UniTalksError(Exception):
    """Base class for all script library errors."""


class InvalidFile(UniTalksError):
    """The file offered for import does not carry the ``.json`` extension."""

    def __init__(self, message: str = "Not a .json file") -> None:
        super().__init__(message)


class ReadFailure(UniTalksError):
    """The underlying read of an import file failed."""

    def __init__(self, message: str = "Read failed") -> None:
        super().__init__(message)


class ParseFailure(UniTalksError):
    """The import file content is not valid JSON."""

    def __init__(self, message: str = "Invalid JSON") -> None:
        super().__init__(message)


class ValidationFailure(UniTalksError):
    """Parsed JSON is not a recognised script document."""

    def __init__(self, message: str = "Not a valid UniTalks script") -> None:
        super().__init__(message)


class CorruptStore(UniTalksError):
    """A persisted table could not be parsed (raised only by strict stores)."""


class ContractViolation(UniTalksError):
    """A script does not satisfy the Script.v1.json contract (export refused)."""
