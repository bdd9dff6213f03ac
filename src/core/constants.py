"""Core constants used across input definition modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".inputdef")
INPUT_DEFINITIONS_DIR_NAME = "input-definitions"
DEFAULT_DIR_MODE = 0o777
DEFAULT_FILE_MODE = 0o666
TEMP_FILE_SUFFIX = ".tmp"
NAME_PATTERN = r"^[a-z0-9_-]+$"
MAX_NAME_LENGTH = 64
DESCRIPTOR_MAGIC = b"IDEF"
DESCRIPTOR_FORMAT_VERSION = 1
DESCRIPTOR_DIGEST_SIZE = 32
MAX_UINT32 = 2**32 - 1
MAX_UINT64 = 2**64 - 1
VALUE_DESTINATION_SINGLE_ROW = "singleRowBoolean"
VALUE_DESTINATION_VALUE_MAP = "valueMap"
DEFAULT_CACHE_TYPE = ""
DEFAULT_CACHE_SIZE = 0
YAML_SUFFIXES = (".yaml", ".yml")
