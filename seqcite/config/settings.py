"""
Application settings and configuration.

Centralizes network timeouts, metadata cache sizing and logging level for
the validation pipeline. Values come from environment variables (optionally
loaded from a .env file) with defaults suited to interactive use.
"""

import os
import threading
from typing import Any, Dict, Optional

from dotenv import load_dotenv

DEFAULT_USER_AGENT = "seqcite/1.0 (Biological Database Validator)"


def _env_bool(name: str, default: bool) -> bool:
    return os.environ.get(name, str(default)).strip().lower() in ("1", "true", "yes")


class Settings:
    """
    Settings with environment variable support.

    Attributes:
        HTTP_TIMEOUT: Liveness probe timeout in seconds
        METADATA_TIMEOUT: Remote metadata lookup timeout in seconds
        CACHE_TTL: Metadata cache time-to-live in seconds
        CACHE_MAX_ENTRIES: Maximum entries per validator metadata cache
        FETCH_METADATA: Whether validators attempt remote metadata lookups
        USER_AGENT: User-Agent header sent to archive hosts
        LOG_LEVEL: Logging level name
    """

    def __init__(self):
        """Initialize settings from the environment."""
        load_dotenv()

        self.HTTP_TIMEOUT = float(os.environ.get("SEQCITE_HTTP_TIMEOUT", "15"))
        self.METADATA_TIMEOUT = float(
            os.environ.get("SEQCITE_METADATA_TIMEOUT", "10")
        )
        self.CACHE_TTL = float(os.environ.get("SEQCITE_CACHE_TTL", str(24 * 3600)))
        self.CACHE_MAX_ENTRIES = int(
            os.environ.get("SEQCITE_CACHE_MAX_ENTRIES", "1024")
        )
        self.FETCH_METADATA = _env_bool("SEQCITE_FETCH_METADATA", True)
        self.USER_AGENT = os.environ.get("SEQCITE_USER_AGENT", DEFAULT_USER_AGENT)
        self.LOG_LEVEL = os.environ.get("SEQCITE_LOG_LEVEL", "WARNING").upper()

    def get_all_settings(self) -> Dict[str, Any]:
        """
        Get all settings as a dictionary.

        Returns:
            dict: All settings
        """
        return {
            attr: getattr(self, attr)
            for attr in dir(self)
            if attr.isupper() and not callable(getattr(self, attr))
        }

    def get_setting(self, name: str, default: Any = None) -> Any:
        """Get a specific setting, or default if it does not exist."""
        return getattr(self, name, default)


_settings: Optional[Settings] = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """
    Get the process-wide Settings instance.

    Returns:
        Settings singleton
    """
    global _settings
    if _settings is None:
        with _settings_lock:
            if _settings is None:
                _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached Settings so the next call re-reads the environment."""
    global _settings
    with _settings_lock:
        _settings = None
