"""Tests for error classes."""

from __future__ import annotations

import pytest

from starlette_prom.errors import ConfigurationError, EncodingError, PromError, RegistrationError

# ---------------------------------------------------------------------------
# PromError base class
# ---------------------------------------------------------------------------


class TestPromError:
    def test_default_attributes(self) -> None:
        err = PromError("something broke")
        assert str(err) == "something broke"
        assert err.message == "something broke"
        assert err.code == "prom-error"

    def test_custom_code(self) -> None:
        err = PromError("bad", code="bad-thing")
        assert err.code == "bad-thing"

    def test_is_exception(self) -> None:
        with pytest.raises(PromError, match="boom"):
            raise PromError("boom")


# ---------------------------------------------------------------------------
# Subclasses
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("cls", "code"),
    [
        (ConfigurationError, "configuration-error"),
        (RegistrationError, "registration-error"),
        (EncodingError, "encoding-error"),
    ],
)
def test_subclass_codes(cls: type[PromError], code: str) -> None:
    err = cls("failed")
    assert isinstance(err, PromError)
    assert err.code == code
    assert err.message == "failed"
