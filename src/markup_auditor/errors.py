# src/markup_auditor/errors.py


class AuditError(Exception):
    """Base class for every failure that aborts an audit run."""


class EmptyInputError(AuditError):
    """Raised when the markup to audit is empty or whitespace only."""

    def __init__(self, message: str = "Input is empty."):
        super().__init__(message)


class TreeBuildError(AuditError):
    """The parser could not produce a document tree."""


class RegistryError(AuditError):
    """A rule category required for a complete report was not registered."""


class InputSourceError(AuditError):
    """Reading markup from a file, URL or stream failed."""
