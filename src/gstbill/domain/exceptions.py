"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageError(DomainException):
    """The store could not read or durably write a record."""


class SpreadsheetParseError(DomainException):
    """The uploaded spreadsheet could not be decoded."""


class ImportInProgressError(DomainException):
    """A catalog import was started while another one is still running."""


class DocumentRenderError(DomainException):
    """The invoice document could not be produced."""
