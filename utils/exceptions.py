"""
Custom exception classes for block handlers and services.
"""
from typing import Optional, Any


class ValidationError(Exception):
    """Exception raised when block input fails schema validation."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None
    ):
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Dotted path of the field that failed validation if available
            value: Invalid value if available
        """
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value


class BlockNotFoundError(Exception):
    """Exception raised for block keys missing from the catalogue."""

    def __init__(
        self,
        message: str,
        block_key: Optional[str] = None
    ):
        """
        Initialize block lookup error.

        Args:
            message: Error message
            block_key: The requested "<app>/<block_id>" key if available
        """
        super().__init__(message)
        self.message = message
        self.block_key = block_key
