# pylint: disable=unnecessary-pass
"""
Custom exceptions for database operations.
"""

from typing import Optional


class DatabaseServiceError(Exception):
    """
    Base class for database service exceptions
    """

    pass


class DatabaseConnectionError(DatabaseServiceError):
    """
    Exception raised for errors in the database connection
    """

    pass


class DatabaseQueryError(DatabaseServiceError):
    """
    Exception raised for errors in database queries
    """

    pass


class DatabaseConfigurationError(DatabaseServiceError):
    """Custom exception for database configuration issues."""

    pass


class DatabaseOperationError(DatabaseServiceError):
    """
    Raised when a write against the store fails.

    Batches written before the failing one stay committed; the table name
    and the failing batch position are kept for the per-unit log line.
    """

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        batch_index: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.table = table
        self.batch_index = batch_index

    def __str__(self) -> str:
        if self.table is None:
            return self.message
        where = self.table
        if self.batch_index is not None:
            where = f"{where}[batch {self.batch_index}]"
        return f"{self.message} ({where})"
