class MeerkatError(Exception):
    """Base exception for all pymeerkat errors."""


class ConfigurationError(MeerkatError):
    """Raised when a document class is declared in a way that cannot be mapped.

    Covers blank collection names, unknown index orders or geospatial kinds,
    and case-transform markers placed on non-string fields.
    """


class DocumentNotFound(MeerkatError):
    """Raised when a document is not found in the database."""


class NotConnected(MeerkatError):
    """Raised when attempting to use a database that is not connected."""
