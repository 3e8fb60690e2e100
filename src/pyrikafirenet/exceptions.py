"""Custom exceptions for pyrikafirenet library."""

from __future__ import annotations

from typing import Any


class RikaFirenetError(Exception):
    """Base exception for all RIKA Firenet errors."""


class AuthenticationError(RikaFirenetError):
    """Exception raised when logging in or out of the portal fails."""


class RikaConnectionError(RikaFirenetError):
    """Exception raised for connection failures."""


class RikaTimeoutError(RikaFirenetError):
    """Exception raised when portal requests timeout."""


class StoveError(RikaFirenetError):
    """Exception raised for stove-related errors.

    Attributes:
        stove_id: Optional stove ID associated with the error.
    """

    def __init__(self, message: str = "", stove_id: str | None = None) -> None:
        """Initialize StoveError.

        Args:
            message: Error message.
            stove_id: Optional stove ID associated with the error.
        """
        super().__init__(message)
        self.stove_id = stove_id


class InvalidParameterError(RikaFirenetError):
    """Exception raised for invalid parameter values.

    Attributes:
        parameter_name: Optional name of the invalid parameter.
        value: Optional value that was invalid.
    """

    def __init__(
        self,
        message: str = "",
        parameter_name: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize InvalidParameterError.

        Args:
            message: Error message.
            parameter_name: Optional name of the invalid parameter.
            value: Optional value that was invalid.
        """
        super().__init__(message)
        self.parameter_name = parameter_name
        self.value = value
