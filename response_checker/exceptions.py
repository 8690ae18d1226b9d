"""Exceptions raised by the response checker harness."""

from typing import Any, Optional


class ResponseCheckerError(Exception):
    """Base class for response checker errors."""


class InvalidCheckResultError(ResponseCheckerError):
    """
    A check returned something other than an iterable of Finding objects.

    Attributes:
        check_name: Name of the offending check.
        returned_type: Type name of the value that broke the contract.
    """

    def __init__(self, check_name: str, invalid_data: Any, message: Optional[str] = None):
        self.check_name = check_name
        self.returned_type = type(invalid_data).__name__
        if not message:
            message = (
                f"Check '{check_name}' returned an invalid result type "
                f"'{self.returned_type}'. Expected an iterable containing only "
                "Finding instances."
            )
        super().__init__(message)
