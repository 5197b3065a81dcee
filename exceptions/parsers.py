# exceptions/parsers.py
"""
Custom exceptions for HTML extraction components.

A missing region is never an error (extractors return empty results);
these are raised only when markup that was located cannot be interpreted.
"""


class ParsingError(Exception):
    """
    Exception raised when a located region cannot be turned into records.
    """

    def __init__(self, message: str, original_error: Exception = None):
        """
        Initialize parsing error with message and optional original error.

        Args:
            message: Human-readable error message describing the failure
            original_error: Original exception that caused this parsing error
        """
        super().__init__(message)
        self.original_error = original_error
        self.message = message

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message} (Original: {self.original_error})"
        return self.message
