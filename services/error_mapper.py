# -*- coding: utf-8 -*-
"""Centralized error message mapper."""

from services.exceptions import (
    ApiException, NetworkException, NotFoundException, ValidationException
)
from utils.logger import get_logger

logger = get_logger(__name__)

GENERIC_ERROR = "Something went wrong. Please try again."
CONNECTION_ERROR = "Could not reach the server. Check your connection and try again."
TIMEOUT_ERROR = "The server took too long to respond. Please try again."
SESSION_EXPIRED = "Your session has expired. Please log in again."
NOT_FOUND = "Vehicle not found"


def map_api_error(error: ApiException) -> str:
    """Map API exception to a user-facing message.

    The server's own message is shown when the response carried one;
    otherwise a generic message is returned. Technical details are logged.
    """
    status = error.status_code

    if status == 400:
        details = _extract_validation_details(error.response_data)
        if details:
            logger.warning(f"API validation error (400): {details}")
    elif status:
        logger.warning(f"API error ({status}): {error}")

    if isinstance(error, NotFoundException) or status == 404:
        return error.server_message or NOT_FOUND

    if status == 401:
        return SESSION_EXPIRED

    return error.server_message or GENERIC_ERROR


def map_network_error(error: NetworkException) -> str:
    """Map network exception to a user-facing message."""
    msg = str(error.original_error) if error.original_error else ""
    if "timeout" in msg.lower() or "timed out" in msg.lower():
        return TIMEOUT_ERROR
    return CONNECTION_ERROR


def map_exception(error: Exception, context: str = None) -> str:
    """Map any exception to a user-facing message."""
    if isinstance(error, ApiException):
        if not error.context and context:
            error.context = context
        return map_api_error(error)

    if isinstance(error, NetworkException):
        return map_network_error(error)

    if isinstance(error, ValidationException):
        if error.errors:
            logger.warning(f"Validation error: {error.errors}")
        return error.message or GENERIC_ERROR

    logger.warning(f"Unexpected error: {error}")
    return GENERIC_ERROR


def _extract_validation_details(response_data: dict) -> str:
    """Extract validation error details from API response."""
    if not response_data:
        return ""

    errors = response_data.get("errors", {})
    if isinstance(errors, dict):
        lines = []
        for field, messages in errors.items():
            if isinstance(messages, list):
                for msg in messages:
                    lines.append(f"• {field}: {msg}")
            else:
                lines.append(f"• {field}: {messages}")
        return "\n".join(lines)

    if isinstance(errors, list):
        return "\n".join(f"• {e}" for e in errors)

    title = response_data.get("title", "")
    if title:
        return title

    return ""
