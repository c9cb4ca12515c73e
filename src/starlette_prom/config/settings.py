"""Application settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Environment variables (prefix: ``STARLETTE_PROM_``, nested via ``__``)
2. YAML config file (``STARLETTE_PROM_CONFIG_PATH`` env var)
3. Defaults defined here
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from starlette_prom.metrics.middleware import DEFAULT_BUCKETS, DEFAULT_ENDPOINT

# ---------------------------------------------------------------------------
# Sub-config models
# ---------------------------------------------------------------------------


class ServerSettings(BaseSettings):
    """HTTP server settings for the bundled example app."""

    model_config = SettingsConfigDict(
        env_prefix="STARLETTE_PROM_SERVER__",
        case_sensitive=False,
    )

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    log_level: str = "info"


class MetricsSettings(BaseSettings):
    """Prometheus request metrics settings."""

    model_config = SettingsConfigDict(
        env_prefix="STARLETTE_PROM_METRICS__",
        case_sensitive=False,
    )

    namespace: str = "app"
    endpoint: str | None = Field(
        default=DEFAULT_ENDPOINT,
        description="Scrape endpoint path; empty disables the scrape route",
    )
    buckets: list[float] = Field(default_factory=lambda: list(DEFAULT_BUCKETS))
    const_labels: dict[str, str] = Field(default_factory=dict)

    @field_validator("endpoint", mode="before")
    @classmethod
    def _empty_endpoint_is_none(cls, value: Any) -> Any:
        """Treat an empty string (e.g. from an env var) as "no endpoint"."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is empty.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


class AppSettings(BaseSettings):
    """Top-level application configuration.

    Loads settings from environment variables (``STARLETTE_PROM_`` prefix),
    an optional YAML file, and built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="STARLETTE_PROM_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    debug: bool = False
    config_path: str = ""

    server: ServerSettings = Field(default_factory=ServerSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Merge YAML config file contents under the env var overrides."""
        config_path = values.get("config_path", "")
        if not config_path:
            return values
        yaml_data = _load_yaml(config_path)
        # YAML values serve as defaults; env vars (already in *values*) win.
        for key, val in yaml_data.items():
            if key not in values or values[key] is None:
                values[key] = val
            elif isinstance(val, dict) and isinstance(values.get(key), dict):
                values[key] = {**val, **values[key]}
        return values

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct ``AppSettings`` loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))
