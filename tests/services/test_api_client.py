# -*- coding: utf-8 -*-
"""
Tests for VehicleApiClient.

The HTTP session is a mock; no network access.
"""

from unittest.mock import MagicMock

import pytest
import requests

from services.api_client import ApiConfig, ProgressReader, VehicleApiClient
from services.auth_service import CredentialStore
from services.exceptions import ApiException, NetworkException, NotFoundException


def _response(status_code=200, payload=None, text=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = text if text is not None else ("{}" if payload is not None else "")
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    config = ApiConfig(base_url="https://api.test/", timeout=5)
    return VehicleApiClient(config, CredentialStore(token="tok"), session=session)


class TestRequests:
    """Test request plumbing."""

    def test_bearer_token_sent(self, client, session):
        session.request.return_value = _response(payload=[])
        client.get_vehicles()

        kwargs = session.request.call_args.kwargs
        assert kwargs["url"] == "https://api.test/api/marketplace/vehicles"
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert kwargs["timeout"] == 5

    def test_wrapped_list_unwrapped(self, client, session):
        session.request.return_value = _response(payload={"data": [{"id": "1"}]})
        assert client.get_vehicles() == [{"id": "1"}]

    def test_404_raises_not_found(self, client, session):
        session.request.return_value = _response(404, payload={"message": "No such vehicle"})
        with pytest.raises(NotFoundException) as exc_info:
            client.get_vehicle("missing")
        assert exc_info.value.server_message == "No such vehicle"

    def test_server_error(self, client, session):
        session.request.return_value = _response(500, payload={"error": "boom"})
        with pytest.raises(ApiException) as exc_info:
            client.get_vehicles()
        assert exc_info.value.status_code == 500

    def test_connection_error(self, client, session):
        session.request.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(NetworkException):
            client.get_vehicles()

    def test_login_stores_token(self, session):
        credentials = CredentialStore()
        client = VehicleApiClient(ApiConfig(base_url="https://api.test", timeout=5),
                                  credentials, session=session)
        session.request.return_value = _response(payload={"token": "fresh"})

        client.login("a@b.c", "pw")

        assert credentials.token == "fresh"
        assert "Authorization" not in session.request.call_args.kwargs["headers"]


class TestUploads:
    """Test multipart uploads."""

    def test_create_sends_multipart_body(self, client, session):
        session.request.return_value = _response(payload={"id": "veh-1"})
        parts = [("make", "Honda"), ("mainImage", ("cover.jpg", b"\xff\xd8", "image/jpeg"))]

        result = client.create_vehicle(parts)

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["headers"]["Content-Type"].startswith("multipart/form-data; boundary=")
        body = kwargs["data"].getvalue()
        assert b'name="make"' in body
        assert b'filename="cover.jpg"' in body
        assert result == {"id": "veh-1"}

    def test_update_uses_patch(self, client, session):
        session.request.return_value = _response(payload={"id": "veh-1"})
        client.update_vehicle("veh-1", [("make", "Honda")])

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "PATCH"
        assert kwargs["url"].endswith("/api/marketplace/vehicles/veh-1")

    def test_progress_reader_reports_increasing_percentages(self):
        seen = []
        reader = ProgressReader(b"x" * 1000, seen.append, chunk_size=300)
        while reader.read(8192):
            pass
        assert seen[0] == 0
        assert seen[-1] == 100
        assert seen == sorted(set(seen))
        assert len(reader) == 1000


class TestMediaUrl:
    """Test media reference resolution."""

    def test_relative_path(self, client):
        assert client.media_url("/uploads/a.jpg") == "https://api.test/uploads/a.jpg"

    def test_absolute_and_empty(self, client):
        assert client.media_url("https://cdn/x.jpg") == "https://cdn/x.jpg"
        assert client.media_url("null") is None
        assert client.media_url(None) is None
