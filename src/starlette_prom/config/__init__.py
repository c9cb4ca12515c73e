"""Configuration — settings loaded from environment variables and YAML."""

from __future__ import annotations

from starlette_prom.config.settings import AppSettings, MetricsSettings, ServerSettings

__all__ = ["AppSettings", "MetricsSettings", "ServerSettings"]
