"""Unit tests for definition name validation."""

from __future__ import annotations

import pytest

from core.errors import InvalidNameError
from core.naming import pattern_validator, validate_name


@pytest.mark.parametrize("name", ["default", "a", "events_2024", "user-age", "0", "x" * 64])
def test_validate_name_accepts_allowed_names(name: str) -> None:
    """Lowercase letters, digits, '_' and '-' should be accepted."""
    validate_name(name)


@pytest.mark.parametrize(
    "name",
    ["", "Default", "has space", "dot.name", "slash/name", "../escape", "x" * 65, "naïve"],
)
def test_validate_name_rejects_invalid_names(name: str) -> None:
    """Empty, overlong, or out-of-charset names should be rejected."""
    with pytest.raises(InvalidNameError):
        validate_name(name)


def test_validate_name_rejects_non_string() -> None:
    with pytest.raises(InvalidNameError):
        validate_name(None)  # type: ignore[arg-type]


def test_pattern_validator_applies_custom_policy() -> None:
    """Custom validators should enforce their own pattern and length."""
    validator = pattern_validator(r"[A-Z]+", max_length=3)

    validator("ABC")

    with pytest.raises(InvalidNameError):
        validator("ABCD")
