"""Exceptions raised by the preprocessor glue."""


class PreprocessorError(Exception):
    """Base exception for preprocessor errors."""

    pass


class InvalidInputError(PreprocessorError):
    """Raised when the JSON handed over by mdBook cannot be understood."""

    pass


class InvalidBookError(InvalidInputError):
    """Raised when the book structure contains an unknown item."""

    pass
