"""Runtime configuration model for input definitions.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_DATA_ROOT, DEFAULT_DIR_MODE, DEFAULT_FILE_MODE
from core.errors import InputDefinitionConfigError


@dataclass(frozen=True)
class InputDefinitionConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory holding one directory per index.
        dir_mode: Permission bits used when creating descriptor directories.
        file_mode: Permission bits used when writing descriptor files.
    """

    data_root: Path
    dir_mode: int = DEFAULT_DIR_MODE
    file_mode: int = DEFAULT_FILE_MODE

    @classmethod
    def from_env(cls) -> "InputDefinitionConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            InputDefinitionConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("INPUTDEF_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        dir_mode = _parse_mode("INPUTDEF_DIR_MODE", os.getenv("INPUTDEF_DIR_MODE"), DEFAULT_DIR_MODE)
        file_mode = _parse_mode(
            "INPUTDEF_FILE_MODE", os.getenv("INPUTDEF_FILE_MODE"), DEFAULT_FILE_MODE
        )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            dir_mode=dir_mode,
            file_mode=file_mode,
        )


def _parse_mode(variable: str, raw_value: str | None, default: int) -> int:
    """Parse an octal permission environment value.

    Args:
        variable: Environment variable name, used in error messages.
        raw_value: Raw string from environment, or None when unset.
        default: Mode used when the variable is unset.

    Returns:
        Parsed permission bits.

    Raises:
        InputDefinitionConfigError: If value is not an octal mode.
    """
    if raw_value is None or not raw_value.strip():
        return default
    try:
        mode = int(raw_value.strip(), 8)
    except ValueError as error:
        raise InputDefinitionConfigError(
            f"Invalid {variable} value: expected octal permission bits, got '{raw_value}'. "
            f"Set {variable} to a value such as 755."
        ) from error
    if not 0 <= mode <= 0o777:
        raise InputDefinitionConfigError(
            f"Invalid {variable} value: '{raw_value}' is outside 000-777. "
            f"Set {variable} to a value such as 755."
        )
    return mode
