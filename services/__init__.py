# -*- coding: utf-8 -*-
"""
Vehicle Inspection Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "AuthService",
    "VehicleApiClient",
    "DraftService",
    "MediaStaging",
    "SubmissionService",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "AuthService":
        from .auth_service import AuthService
        return AuthService
    elif name == "VehicleApiClient":
        from .api_client import VehicleApiClient
        return VehicleApiClient
    elif name == "DraftService":
        from .draft_service import DraftService
        return DraftService
    elif name == "MediaStaging":
        from .media_staging import MediaStaging
        return MediaStaging
    elif name == "SubmissionService":
        from .submission_service import SubmissionService
        return SubmissionService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
