# -*- coding: utf-8 -*-
"""
Tests for error message mapping.
"""

import requests

from services.error_mapper import (
    CONNECTION_ERROR, GENERIC_ERROR, NOT_FOUND, SESSION_EXPIRED, TIMEOUT_ERROR, map_exception
)
from services.exceptions import (
    ApiException, MediaValidationError, NetworkException, NotFoundException
)


class TestMapException:
    """Test map_exception."""

    def test_server_message_preferred(self):
        error = ApiException("500", status_code=500, response_data={"message": "Chassis exists"})
        assert map_exception(error) == "Chassis exists"

    def test_generic_fallback(self):
        assert map_exception(ApiException("500", status_code=500)) == GENERIC_ERROR

    def test_not_found(self):
        assert map_exception(NotFoundException()) == NOT_FOUND

    def test_session_expired(self):
        assert map_exception(ApiException("401", status_code=401)) == SESSION_EXPIRED

    def test_network(self):
        assert map_exception(NetworkException("refused")) == CONNECTION_ERROR
        timeout = NetworkException("slow", original_error=requests.exceptions.Timeout("timed out"))
        assert map_exception(timeout) == TIMEOUT_ERROR

    def test_media_validation_message_shown(self):
        error = MediaValidationError("Please select an image file", "mainImage")
        assert map_exception(error) == "Please select an image file"

    def test_unexpected(self):
        assert map_exception(RuntimeError("x")) == GENERIC_ERROR

    def test_context_attached(self):
        error = ApiException("500", status_code=500)
        map_exception(error, context="create vehicle")
        assert error.context == "create vehicle"

