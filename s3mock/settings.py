"""Configuration settings for the mock S3 client."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from .transport import Filesystem, LocalFilesystem


_env_loaded = False


def _ensure_env_loaded() -> None:
    """Load .env file if not already loaded."""
    global _env_loaded
    if not _env_loaded:
        repo_root = Path(__file__).resolve().parents[1]
        env_path = repo_root / ".env"
        if env_path.exists():
            load_dotenv(env_path)
        _env_loaded = True


def _env_base_path() -> Optional[str]:
    _ensure_env_loaded()
    value = os.getenv("MOCK_S3_BASE_PATH")
    if value is not None and value.strip():
        return value.rstrip("/")
    return None


def _env_log_level() -> str:
    _ensure_env_loaded()
    return os.getenv("MOCK_S3_LOG_LEVEL", "WARNING").upper()


@dataclass
class MockSettings:
    """
    Process-wide settings consulted by every operation.

    ``log_level`` (MOCK_S3_LOG_LEVEL) is applied only by
    :func:`s3mock.logs.setup_logging`; nothing in the package calls it.
    """

    base_path: Optional[str] = field(default_factory=_env_base_path)
    fs: Filesystem = field(default_factory=LocalFilesystem)
    log_level: str = field(default_factory=_env_log_level)


_settings: Optional[MockSettings] = None


def get_settings() -> MockSettings:
    """Get the singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = MockSettings()
    return _settings


def configure(**overrides: Any) -> MockSettings:
    """
    Override selected settings, e.g. ``configure(base_path="/tmp/s3")``.

    Unknown names raise TypeError.
    """
    global _settings
    _settings = replace(get_settings(), **overrides)
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
