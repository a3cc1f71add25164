# -*- coding: utf-8 -*-
"""Custom exceptions for the application."""


class ApiException(Exception):
    """Exception raised for API errors."""

    def __init__(self, message: str, status_code: int = None,
                 response_data: dict = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}
        self.context = context

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message

    @property
    def server_message(self) -> str:
        """Message sent back by the server, if the response body carried one."""
        data = self.response_data
        if isinstance(data, dict):
            for key in ("message", "error", "title"):
                value = data.get(key)
                if isinstance(value, str) and value.strip():
                    return value.strip()
        return ""


class NotFoundException(ApiException):
    """Raised when the requested record does not exist on the server."""

    def __init__(self, message: str = "Vehicle not found",
                 response_data: dict = None, context: str = None):
        super().__init__(message, status_code=404,
                         response_data=response_data, context=context)


class ValidationException(Exception):
    """Exception raised for validation errors."""

    def __init__(self, message: str, field: str = None,
                 errors: list = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.errors = errors or []
        self.context = context


class MediaValidationError(ValidationException):
    """A candidate file was refused for a media slot (wrong type or too large)."""

    def __init__(self, message: str, slot: str, context: str = None):
        super().__init__(message, field=slot, errors=[message], context=context)

    @property
    def slot(self) -> str:
        return self.field


class NetworkException(Exception):
    """Exception raised for network/connection errors."""

    def __init__(self, message: str, original_error: Exception = None,
                 context: str = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context = context
