# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
import os

from dotenv import load_dotenv

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
load_dotenv()

# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
# API Settings
_API_BASE_URL = os.getenv("API_BASE_URL", "https://apis.trustedvehicles.com")
_API_TIMEOUT = int(os.getenv("API_TIMEOUT", "60"))

# Wizard Settings
_AUTOSAVE_DEBOUNCE_MS = int(os.getenv("AUTOSAVE_DEBOUNCE_MS", "1500"))

# Data directory (drafts, logs, preview files)
_DATA_DIR = os.getenv("TVI_DATA_DIR", None)

_MIB = 1024 * 1024


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "Trusted Vehicles Inspector"
    VERSION: str = "1.0.0"

    # HTTP API Backend Settings
    # Reads from .env file (API_BASE_URL, API_TIMEOUT)
    API_BASE_URL: str = _API_BASE_URL
    API_TIMEOUT: int = _API_TIMEOUT  # uploads carry videos, keep this generous

    # Wizard
    AUTOSAVE_DEBOUNCE_MS: int = _AUTOSAVE_DEBOUNCE_MS
    DRAFT_KEY: str = "current_draft"

    # Media acceptance limits
    IMAGE_MAX_BYTES: int = 10 * _MIB
    VIDEO_MAX_BYTES: int = 50 * _MIB  # stands in for the ~10 second duration cap

    # Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    DATA_DIR: Path = Path(_DATA_DIR) if _DATA_DIR else PROJECT_ROOT / "data"
    LOGS_DIR: Path = DATA_DIR / "logs"
    PREVIEW_DIR: Path = DATA_DIR / "previews"

    # Local draft store (SQLite)
    DRAFT_DB_NAME: str = "drafts.db"
    DRAFT_DB_PATH: Path = DATA_DIR / DRAFT_DB_NAME

    # Logging
    LOG_FILE: str = "app.log"
    LOG_PATH: Path = LOGS_DIR / LOG_FILE
    LOG_MAX_BYTES: int = 5 * _MIB
    LOG_BACKUP_COUNT: int = 3


class Pages:
    STOCK = "stock"
    VEHICLE_DETAILS = "stock/{vehicle_id}"

    @classmethod
    def vehicle_details(cls, vehicle_id) -> str:
        return cls.VEHICLE_DETAILS.format(vehicle_id=vehicle_id)
