"""
Error taxonomy for schema verification.

All engine failures are raised as SchemaError subclasses internally and
converted to structured results at the SchemaEngine boundary, so nothing
escapes to the caller as an exception.

Hierarchy:
    SchemaError (ValueError)
    ├── MalformedInputError: text is not valid JSON
    ├── ShapeError: top-level object or layout block is malformed
    └── FieldError: a field fails grammar checks
        └── DefaultValueError: a default's runtime type does not match its field
"""

from typing import Optional


class SchemaError(ValueError):
    """
    Base class for all schema verification failures.

    Attributes:
        kind: Short machine-readable category ("malformed", "shape", "field")
        message: Human-readable message
        path: Dotted location of the failure, or None for document-level errors
    """

    kind = "schema"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message


class MalformedInputError(SchemaError):
    """Schema text could not be parsed as JSON."""

    kind = "malformed"


class ShapeError(SchemaError):
    """Top-level document or layout block has the wrong shape, or fields nest too deeply."""

    kind = "shape"


class FieldError(SchemaError):
    """A field description failed grammar checks at `path`."""

    kind = "field"

    def __init__(self, path: Optional[str], message: str):
        super().__init__(message, path=path)


class DefaultValueError(FieldError):
    """A default value does not match the runtime type its field declares."""
