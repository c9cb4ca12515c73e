"""Error types raised while building and scraping request metrics."""

from __future__ import annotations

from starlette_prom.errors.prom_errors import (
    ConfigurationError,
    EncodingError,
    PromError,
    RegistrationError,
)

__all__ = ["ConfigurationError", "EncodingError", "PromError", "RegistrationError"]
