"""Exceptions raised by recordlite."""


class RecordliteError(Exception):
    """Base class for recordlite errors."""

    pass


class InvalidSchemaError(RecordliteError, ValueError):
    """Raised when a view description is malformed or structurally insufficient."""

    pass


class CompilationError(RecordliteError):
    """Raised when the SQL script cannot be assembled.

    This indicates a bug or unencodable input, never a usage error; the
    underlying cause is chained on ``__cause__``.
    """

    pass
