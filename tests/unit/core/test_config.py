"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import InputDefinitionConfig
from core.constants import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE
from core.errors import InputDefinitionConfigError


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("INPUTDEF_DATA_ROOT", "./.tmp-inputdef")

    config = InputDefinitionConfig.from_env()

    assert config.data_root.name == ".tmp-inputdef" and config.data_root.is_absolute()


def test_from_env_uses_permissive_default_modes() -> None:
    """Unset mode variables should fall back to permissive defaults."""
    config = InputDefinitionConfig.from_env()

    assert (config.dir_mode, config.file_mode) == (DEFAULT_DIR_MODE, DEFAULT_FILE_MODE)


def test_from_env_parses_octal_modes(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mode variables should be read as octal permission bits."""
    monkeypatch.setenv("INPUTDEF_DIR_MODE", "755")
    monkeypatch.setenv("INPUTDEF_FILE_MODE", "0644")

    config = InputDefinitionConfig.from_env()

    assert (config.dir_mode, config.file_mode) == (0o755, 0o644)


@pytest.mark.parametrize("raw_value", ["rwx", "999", "1777"])
def test_from_env_raises_for_invalid_mode(
    monkeypatch: pytest.MonkeyPatch, raw_value: str
) -> None:
    """Config should fail for values that are not octal permission bits."""
    monkeypatch.setenv("INPUTDEF_DIR_MODE", raw_value)

    with pytest.raises(InputDefinitionConfigError):
        InputDefinitionConfig.from_env()
