"""
Typed configuration for the Career Path Generator.

The CLI and the portal both load an :class:`AppConfig`, either from a YAML
file (see ``config/app.yaml``) or from defaults plus environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"
STORE_ENV_VAR = "CAREERPATH_STORE"
CONFIG_ENV_VAR = "CAREERPATH_CONFIG"
DEFAULT_STORE_PATH = Path("~/.careerpath/store.sqlite")


class GenerationConfig(BaseModel):
    """Connection settings for the generative-text endpoint."""

    model_config = ConfigDict(extra="ignore")

    api_base: str = Field(default=DEFAULT_API_BASE)
    model: str = Field(default=DEFAULT_MODEL)
    api_key: Optional[str] = Field(default=None, description="Inline key; prefer api_key_env.")
    api_key_env: str = Field(default=DEFAULT_API_KEY_ENV)
    timeout_seconds: float = Field(default=30.0, gt=0.0, le=300.0)
    max_retries: int = Field(default=1, ge=0, le=3)

    @field_validator("api_base", mode="before")
    @classmethod
    def strip_trailing_slash(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().rstrip("/")
        return value

    def resolve_api_key(self) -> str | None:
        """Inline key first, then the configured env var, then GEMINI_API_KEY."""
        if self.api_key and self.api_key.strip():
            return self.api_key.strip()
        for env_var in (self.api_key_env, DEFAULT_API_KEY_ENV):
            if env_var and (value := os.getenv(env_var)):
                return value.strip()
        return None

    @property
    def endpoint_url(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"


class StorageConfig(BaseModel):
    """Where the local key-value store lives."""

    path: Path = Field(default=DEFAULT_STORE_PATH)

    @field_validator("path", mode="before")
    @classmethod
    def coerce_path(cls, value: Any) -> Path:
        return Path(value).expanduser().resolve()


class PortalConfig(BaseModel):
    """Static file server settings."""

    static_dir: Path = Field(default=Path("static"))
    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=1, le=65535)

    @field_validator("static_dir", mode="before")
    @classmethod
    def coerce_path(cls, value: Any) -> Path:
        return Path(value).expanduser().resolve()


class AppConfig(BaseModel):
    """Top-level configuration for the CLI and the portal."""

    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    portal: PortalConfig = Field(default_factory=PortalConfig)
    events_path: Optional[Path] = None

    @field_validator("events_path", mode="before")
    @classmethod
    def coerce_events_path(cls, value: Any) -> Any:
        if value in (None, ""):
            return None
        return Path(value).expanduser().resolve()


def read_yaml_file(path: Path) -> Dict[str, Any]:
    """Load a YAML file and return a dictionary."""
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at root of {path}, received {type(data)}")
    return data


def _resolve_config_path(value: Any, base_dir: Path) -> str:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    else:
        path = path.resolve()
    return str(path)


def _absolutize_paths(data: Dict[str, Any], base_dir: Path) -> None:
    storage = data.get("storage")
    if isinstance(storage, dict) and storage.get("path"):
        storage["path"] = _resolve_config_path(storage["path"], base_dir)

    portal = data.get("portal")
    if isinstance(portal, dict) and portal.get("static_dir"):
        portal["static_dir"] = _resolve_config_path(portal["static_dir"], base_dir)

    if data.get("events_path"):
        data["events_path"] = _resolve_config_path(data["events_path"], base_dir)


def _apply_env_overrides(data: Dict[str, Any]) -> None:
    store_override = os.getenv(STORE_ENV_VAR)
    if store_override:
        storage = data.setdefault("storage", {})
        if isinstance(storage, dict):
            storage["path"] = store_override


def load_app_config(path: Path | None = None, *, base_dir: Path | None = None) -> AppConfig:
    """Load the app config from YAML, or from defaults when ``path`` is None.

    Relative paths in the file resolve against ``base_dir`` (default: the
    file's directory). ``CAREERPATH_STORE`` overrides the storage path.
    """
    data: Dict[str, Any] = {}
    if path is not None:
        path = path.expanduser().resolve()
        data = read_yaml_file(path)
        _absolutize_paths(data, base_dir=(base_dir or path.parent).resolve())
    _apply_env_overrides(data)
    try:
        return AppConfig.model_validate(data)
    except ValidationError as exc:
        source = path if path is not None else "defaults"
        raise ValueError(f"Invalid app config in {source}") from exc


def default_config_path() -> Path | None:
    """Return the config file named by CAREERPATH_CONFIG, if it exists."""
    raw = os.getenv(CONFIG_ENV_VAR)
    if not raw:
        return None
    candidate = Path(raw).expanduser().resolve()
    return candidate if candidate.exists() else None


__all__ = [
    "AppConfig",
    "GenerationConfig",
    "PortalConfig",
    "StorageConfig",
    "default_config_path",
    "load_app_config",
    "read_yaml_file",
]
