"""Error taxonomy for schema building, loading and editing."""


class SchemaBuilderError(Exception):
    """Base exception for all schema builder errors."""
    pass


class ParseError(SchemaBuilderError):
    """Raised when supplied text is not well-formed JSON."""
    pass


class ShapeError(SchemaBuilderError):
    """Raised when well-formed JSON lacks a required Validation section."""
    pass


class ValidationInputError(SchemaBuilderError):
    """Raised when a user-supplied key, name or field edit is rejected."""
    pass
