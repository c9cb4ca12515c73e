"""PromError — base exception class for all starlette-prom errors."""

from __future__ import annotations


class PromError(Exception):
    """Base error for metrics configuration, registration and encoding.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code string.
    """

    def __init__(self, message: str, *, code: str = "prom-error") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigurationError(PromError):
    """Invalid builder configuration (buckets, namespace, constant labels)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="configuration-error")


class RegistrationError(PromError):
    """A series with the same fully-qualified name is already registered."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="registration-error")


class EncodingError(PromError):
    """The registry could not be encoded to the text exposition format."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="encoding-error")
