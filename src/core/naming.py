"""Name validation rules for definitions and indexes.

Validators are plain callables so owners can swap naming policy
without touching persistence code.
"""

from __future__ import annotations

import re
from typing import Callable

from core.constants import MAX_NAME_LENGTH, NAME_PATTERN
from core.errors import InvalidNameError

NameValidator = Callable[[str], None]


def pattern_validator(pattern: str, max_length: int = MAX_NAME_LENGTH) -> NameValidator:
    """Build a validator accepting names that fully match a pattern.

    Args:
        pattern: Regular expression every accepted name must match.
        max_length: Maximum accepted name length.

    Returns:
        Validator raising InvalidNameError for rejected names.
    """
    compiled = re.compile(pattern)

    def validate(name: str) -> None:
        if not isinstance(name, str) or not name:
            raise InvalidNameError("Invalid name: name must be a non-empty string.")
        if len(name) > max_length:
            raise InvalidNameError(
                f"Invalid name '{name}': longer than {max_length} characters. "
                "Choose a shorter name."
            )
        if compiled.fullmatch(name) is None:
            raise InvalidNameError(
                f"Invalid name '{name}': must match {pattern}. "
                "Use lowercase letters, digits, '_' and '-'."
            )

    return validate


validate_name: NameValidator = pattern_validator(NAME_PATTERN)
