"""Shared exceptions module."""

from typing import Optional


class TrackerException(Exception):
    """Base exception for snowtrack."""

    pass


class InvalidArgumentError(TrackerException, ValueError):
    """Raised synchronously when a tracking call is missing a required field.

    Nothing is dispatched for a call that raises this.
    """

    def __init__(self, field_name: str, message: Optional[str] = None):
        """Create a new InvalidArgumentError instance.

        Args:
        ----
            field_name (str): The offending argument.
            message (str, optional): The error message. Defaults to a "required" message.

        """
        self.field_name = field_name
        self.message = message or f"'{field_name}' is required"
        super().__init__(self.message)
