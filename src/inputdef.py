"""Public SDK surface for input definitions.

This module provides a stable import path for library users.
It re-exports the definition lifecycle, codec, and typed models.
"""

from __future__ import annotations

from core.config import InputDefinitionConfig
from core.errors import (
    DefinitionDecodeError,
    DefinitionEncodeError,
    DefinitionExistsError,
    DefinitionIOError,
    DefinitionNotFoundError,
    DefinitionStateError,
    InputDefinitionError,
    InvalidNameError,
)
from core.naming import NameValidator, pattern_validator, validate_name
from core.types import (
    Action,
    DefinitionMeta,
    DefinitionState,
    Field,
    FixedRow,
    Frame,
    FrameOptions,
    MappedValue,
)
from store.definition_codec import decode_definition, encode_definition
from store.definition_meta import (
    load_meta_file,
    meta_from_dict,
    meta_from_json,
    meta_to_dict,
    meta_to_json,
)
from store.definition_registry import InputDefinitionRegistry
from store.input_definition import InputDefinition

__all__ = [
    "Action",
    "DefinitionDecodeError",
    "DefinitionEncodeError",
    "DefinitionExistsError",
    "DefinitionIOError",
    "DefinitionMeta",
    "DefinitionNotFoundError",
    "DefinitionState",
    "DefinitionStateError",
    "Field",
    "FixedRow",
    "Frame",
    "FrameOptions",
    "InputDefinition",
    "InputDefinitionConfig",
    "InputDefinitionError",
    "InputDefinitionRegistry",
    "InvalidNameError",
    "MappedValue",
    "NameValidator",
    "decode_definition",
    "load_meta_file",
    "encode_definition",
    "meta_from_dict",
    "meta_from_json",
    "meta_to_dict",
    "meta_to_json",
    "pattern_validator",
    "validate_name",
]
