"""
CareerDesk Configuration — Load and validate careerdesk.yaml at startup.

Usage:
    from careerdesk.engine.config import load_config, get_config
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from careerdesk.engine.errors import CareerDeskConfigError

CONFIG_FILE_NAME = "careerdesk.yaml"

THEME_NAMES = ("default", "primary", "secondary", "success", "warning", "danger")


# ---------------------------------------------------------------------------
# Pydantic models for careerdesk.yaml
# ---------------------------------------------------------------------------

class BackendConfig(BaseModel):
    url: str = "http://localhost:54321"
    api_key_env: str = "CAREERDESK_API_KEY"
    timeout: int = 30
    # table id → backend table name
    tables: Dict[str, str] = Field(default_factory=lambda: {
        "jobs": "jobs",
        "companies": "companies",
        "applications": "applications",
        "mentors": "career_mentors",
        "mentorship_sessions": "mentorship_sessions",
        "free_resources": "free_resources",
    })

    @property
    def api_key(self) -> Optional[str]:
        """Resolve the API key from the configured environment variable."""
        return os.environ.get(self.api_key_env)


class UIConfig(BaseModel):
    default_page_size: int = 10
    default_theme: str = "default"
    pagination_window: int = 1
    date_format_locale: str = "en-US"

    @field_validator("default_theme")
    @classmethod
    def validate_theme(cls, v: str) -> str:
        if v not in THEME_NAMES:
            raise ValueError(f"default_theme must be one of {', '.join(THEME_NAMES)}, got '{v}'")
        return v

    @field_validator("default_page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"default_page_size must be >= 1, got {v}")
        return v

    @field_validator("pagination_window")
    @classmethod
    def validate_window(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"pagination_window must be >= 0, got {v}")
        return v


class LogRetentionConfig(BaseModel):
    interaction_days: int = 30
    security_days: int = 365


class LoggingConfig(BaseModel):
    level: str = "INFO"
    directory: str = ".careerdesk/logs"
    retention: LogRetentionConfig = LogRetentionConfig()


class CareerDeskConfig(BaseModel):
    """Root model for careerdesk.yaml."""
    name: str = "CareerDesk"
    version: str = "1.0.0"
    environment: str = "dev"

    backend: BackendConfig = BackendConfig()
    ui: UIConfig = UIConfig()
    logging: LoggingConfig = LoggingConfig()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ("dev", "staging", "prod"):
            raise ValueError(f"environment must be dev/staging/prod, got '{v}'")
        return v


# ---------------------------------------------------------------------------
# Config Loading Functions
# ---------------------------------------------------------------------------

_config: Optional[CareerDeskConfig] = None


def _find_project_root() -> Path:
    """Find the project root by looking for careerdesk.yaml."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        if (parent / CONFIG_FILE_NAME).exists():
            return parent
    return current


def load_config(config_path: Optional[str] = None) -> CareerDeskConfig:
    """
    Load and validate careerdesk.yaml.

    Args:
        config_path: Explicit path to careerdesk.yaml. If None, auto-discovers.

    Returns:
        Validated CareerDeskConfig instance.

    Raises:
        CareerDeskConfigError: The file exists but is not valid YAML or fails validation.
    """
    global _config

    if config_path is None:
        config_path = str(_find_project_root() / CONFIG_FILE_NAME)

    path = Path(config_path)
    if not path.exists():
        _config = CareerDeskConfig()
        return _config

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise CareerDeskConfigError(
            f"Could not parse {path.name}: {e}", config_path=str(path)
        ) from e

    # Flatten the top-level "platform" key if present
    platform_data = raw.get("platform", {})
    config_data = {
        "name": platform_data.get("name", raw.get("name", "CareerDesk")),
        "version": platform_data.get("version", raw.get("version", "1.0.0")),
        "environment": platform_data.get("environment", raw.get("environment", "dev")),
        "backend": raw.get("backend", {}),
        "ui": raw.get("ui", {}),
        "logging": raw.get("logging", {}),
    }

    try:
        _config = CareerDeskConfig(**config_data)
    except ValidationError as e:
        raise CareerDeskConfigError(
            f"Invalid {path.name}: {e}", config_path=str(path)
        ) from e
    return _config


def get_config() -> CareerDeskConfig:
    """Get the currently loaded config, loading if necessary."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_environment() -> str:
    """Get the current platform environment."""
    return get_config().environment
