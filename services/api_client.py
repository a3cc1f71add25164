# -*- coding: utf-8 -*-
"""
Marketplace API client.
=======================

Wraps the remote vehicle service: login, inventory reads and multipart
create/update uploads with byte-level progress.
"""

import io
import json as _json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import requests
import urllib3

from services.auth_service import CredentialStore
from services.exceptions import ApiException, NetworkException, NotFoundException
from utils.logger import get_logger

logger = get_logger(__name__)

VEHICLES_ENDPOINT = "/api/marketplace/vehicles"

# (name, value) for text parts, (name, (file_name, content, mime_type)) for files
FormPart = Tuple[str, Union[str, Tuple[str, bytes, str]]]
ProgressCallback = Callable[[int], None]


@dataclass
class ApiConfig:
    """
    API connection settings.

    Values not given are read from Config (which reads .env).

    Example .env:
        API_BASE_URL=https://apis.trustedvehicles.com
        API_TIMEOUT=60
    """
    base_url: str = None
    timeout: int = None
    verify_ssl: bool = True
    upload_chunk_size: int = 64 * 1024

    def __post_init__(self):
        if self.base_url is None or self.timeout is None:
            from app.config import Config

            if self.base_url is None:
                self.base_url = Config.API_BASE_URL
            if self.timeout is None:
                self.timeout = Config.API_TIMEOUT


class ProgressReader(io.BytesIO):
    """
    In-memory request body that reports upload progress as it is read.

    Percentages are reported once each, in increasing order, starting at 0.
    """

    def __init__(self, body: bytes, on_progress: Optional[ProgressCallback] = None,
                 chunk_size: int = 64 * 1024):
        super().__init__(body)
        self._total = len(body)
        self._sent = 0
        self._last = -1
        self._chunk_size = chunk_size
        self._on_progress = on_progress
        self._report(0)

    def __len__(self):
        return self._total

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0 or size > self._chunk_size:
            size = self._chunk_size
        chunk = super().read(size)
        if chunk:
            self._sent += len(chunk)
            self._report(int(self._sent * 100 / self._total) if self._total else 100)
        return chunk

    def _report(self, percent: int):
        if self._on_progress is None or percent <= self._last:
            return
        self._last = percent
        self._on_progress(percent)


class VehicleApiClient:
    """
    Client for the marketplace backend.

    Usage:
        credentials = CredentialStore()
        client = VehicleApiClient(ApiConfig(), credentials)
        client.login("inspector@example.com", "secret")
        vehicles = client.get_vehicles()
    """

    def __init__(self, config: Optional[ApiConfig] = None,
                 credentials: Optional[CredentialStore] = None,
                 session: Optional[requests.Session] = None):
        self.config = config or ApiConfig()
        self.base_url = self.config.base_url.rstrip('/')
        self.credentials = credentials or CredentialStore()
        self.session = session or requests.Session()

        if not self.config.verify_ssl:
            # Self-signed certificates on local backends
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    # ==================== Authentication ====================

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Log in and store the returned token.

        Args:
            email: Inspector email
            password: Password

        Returns:
            Login response (contains "token")
        """
        data = self._request("POST", "/api/login",
                             json_data={"email": email, "password": password},
                             authenticated=False, log_body=False)
        token = (data or {}).get("token")
        if token:
            self.credentials.set_token(token, email=email)
        return data or {}

    def _headers(self, authenticated: bool = True) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if authenticated:
            headers.update(self.credentials.auth_headers())
        return headers

    # ==================== Core request ====================

    def _request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict] = None,
        params: Optional[Dict] = None,
        data: Any = None,
        extra_headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True,
        log_body: bool = True
    ) -> Any:
        """
        Execute an HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            endpoint: API endpoint (e.g., "/api/marketplace/vehicles")
            json_data: JSON payload
            params: Query parameters
            data: Raw body (file-like or bytes)
            extra_headers: Headers added to the defaults
            authenticated: Send the bearer token
            log_body: Log the JSON payload

        Returns:
            Response JSON data (or text when the body is not JSON)
        """
        url = f"{self.base_url}{endpoint}"

        logger.info(f"[API REQ] {method} {endpoint}")
        if params:
            logger.info(f"[API REQ] Params: {params}")
        if json_data and log_body:
            logger.debug(f"[API REQ] Body: {_json.dumps(json_data, ensure_ascii=False, default=str)}")

        headers = self._headers(authenticated)
        if extra_headers:
            headers.update(extra_headers)

        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json_data,
                params=params,
                data=data,
                headers=headers,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl
            )
            response.raise_for_status()

            result = None
            if response.text:
                try:
                    result = response.json()
                except ValueError:
                    result = response.text

            logger.info(f"[API RES] {response.status_code} {endpoint}")
            if result:
                res_str = _json.dumps(result, ensure_ascii=False, default=str)
                if len(res_str) > 1000:
                    logger.debug(f"[API RES] Body (truncated): {res_str[:1000]}...")
                else:
                    logger.debug(f"[API RES] Body: {res_str}")

            return result

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            response_data = {}
            try:
                response_data = e.response.json() if e.response is not None else {}
            except (ValueError, AttributeError):
                pass
            if not isinstance(response_data, dict):
                response_data = {"errors": response_data}
            response_text = ''
            try:
                response_text = e.response.text[:500] if e.response is not None else ''
            except AttributeError:
                pass
            logger.error(f"[API ERR] {status_code} {method} {endpoint} | Response: {response_data or response_text}")
            if not response_data and response_text:
                response_data = {"message": response_text}
            if status_code == 404:
                raise NotFoundException(response_data=response_data)
            raise ApiException(
                message=str(e),
                status_code=status_code,
                response_data=response_data
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"[API ERR] Network error: {endpoint} - {e}")
            raise NetworkException(
                message=str(e),
                original_error=e
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"[API ERR] Request failed: {endpoint} - {e}")
            raise NetworkException(
                message=str(e),
                original_error=e
            )

    # ==================== Vehicles ====================

    def get_vehicles(self) -> List[Dict[str, Any]]:
        """
        Fetch the live inventory.

        Endpoint: GET /api/marketplace/vehicles
        """
        result = self._request("GET", VEHICLES_ENDPOINT)
        if isinstance(result, dict):
            # Some deployments wrap lists in {"data": [...]}
            result = result.get("data", [])
        return result or []

    def get_vehicle(self, vehicle_id: str) -> Dict[str, Any]:
        """
        Fetch one vehicle.

        Endpoint: GET /api/marketplace/vehicles/{id}

        Raises:
            NotFoundException: no vehicle with that id
        """
        result = self._request("GET", f"{VEHICLES_ENDPOINT}/{vehicle_id}")
        if not isinstance(result, dict) or not result:
            raise NotFoundException()
        return result

    def create_vehicle(self, parts: Sequence[FormPart],
                       on_progress: Optional[ProgressCallback] = None) -> Dict[str, Any]:
        """
        Create a listing from multipart form parts.

        Endpoint: POST /api/marketplace/vehicles
        """
        return self._upload("POST", VEHICLES_ENDPOINT, parts, on_progress)

    def update_vehicle(self, vehicle_id: str, parts: Sequence[FormPart],
                       on_progress: Optional[ProgressCallback] = None) -> Dict[str, Any]:
        """
        Update an existing listing from multipart form parts.

        Endpoint: PATCH /api/marketplace/vehicles/{id}
        """
        return self._upload("PATCH", f"{VEHICLES_ENDPOINT}/{vehicle_id}", parts, on_progress)

    def _upload(self, method: str, endpoint: str, parts: Sequence[FormPart],
                on_progress: Optional[ProgressCallback]) -> Dict[str, Any]:
        body, content_type = urllib3.encode_multipart_formdata(list(parts))
        file_count = sum(1 for _, value in parts if isinstance(value, tuple))
        logger.info(
            f"[API REQ] {method} {endpoint} multipart: "
            f"{len(parts) - file_count} fields, {file_count} files, {len(body)} bytes"
        )

        reader = ProgressReader(body, on_progress, chunk_size=self.config.upload_chunk_size)
        result = self._request(
            method, endpoint,
            data=reader,
            extra_headers={"Content-Type": content_type, "Content-Length": str(len(body))},
            log_body=False
        )
        if isinstance(result, dict):
            return result
        return {"message": result} if result else {}

    # ==================== Media ====================

    def media_url(self, path: Optional[str]) -> Optional[str]:
        """Resolve a media reference returned by the server to an absolute URL."""
        if not path or path in ("null", "undefined"):
            return None
        if path.startswith(("http://", "https://", "data:", "file:")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"
