# -*- coding: utf-8 -*-
"""
Authentication service.

The bearer token lives in a ``CredentialStore`` that is passed to the API
client and the auth service, so tests can hand in their own store.
"""

from typing import Optional, Tuple

from services.exceptions import ApiException, NetworkException
from services.error_mapper import map_exception
from utils.logger import get_logger

logger = get_logger(__name__)


class CredentialStore:
    """Holds the current bearer token and the signed-in email."""

    def __init__(self, token: Optional[str] = None, email: Optional[str] = None):
        self._token = token
        self._email = email

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def email(self) -> Optional[str]:
        return self._email

    def set_token(self, token: str, email: Optional[str] = None):
        self._token = token
        if email is not None:
            self._email = email

    def clear(self):
        self._token = None
        self._email = None

    def is_authenticated(self) -> bool:
        return bool(self._token)

    def auth_headers(self) -> dict:
        if self._token:
            return {"Authorization": f"Bearer {self._token}"}
        return {}


class AuthService:
    """Service for user authentication against the marketplace API."""

    def __init__(self, api_client, credentials: CredentialStore):
        self.api = api_client
        self.credentials = credentials

    def authenticate(self, email: str, password: str) -> Tuple[bool, str]:
        """
        Log in and store the token.

        Returns:
            Tuple of (success, error message)
        """
        if not email or not password:
            return False, "Email and password are required"

        try:
            data = self.api.login(email, password)
        except ApiException as e:
            logger.warning(f"Login failed for {email}: {e}")
            return False, e.server_message or "Login failed"
        except NetworkException as e:
            return False, map_exception(e)

        token = (data or {}).get("token")
        if not token:
            logger.warning(f"Login response for {email} carried no token")
            return False, "Login failed"

        self.credentials.set_token(token, email=email)
        logger.info(f"Logged in as {email}")
        return True, ""

    def logout(self):
        email = self.credentials.email
        self.credentials.clear()
        logger.info(f"Logged out {email or ''}".strip())
