"""Transport shape for input definition schemas.

This module converts ``DefinitionMeta`` to and from the plain
dictionary form used by JSON APIs. Zero values are omitted on output
and defaulted on input, mirroring the external API contract.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import yaml

from core.constants import MAX_UINT32, MAX_UINT64, YAML_SUFFIXES
from core.errors import DefinitionDecodeError, DefinitionIOError
from core.types import Action, DefinitionMeta, Field, Frame, FrameOptions


def meta_to_dict(meta: DefinitionMeta) -> dict[str, Any]:
    """Convert a schema into its transport dictionary.

    Args:
        meta: Schema to convert.

    Returns:
        JSON-compatible dictionary with empty values omitted.
    """
    return _omit_empty(
        {
            "frames": [_frame_to_dict(frame) for frame in meta.frames],
            "fields": [_field_to_dict(item) for item in meta.fields],
        }
    )


def meta_from_dict(payload: Mapping[str, Any]) -> DefinitionMeta:
    """Build a schema from its transport dictionary.

    Args:
        payload: Parsed transport dictionary.

    Returns:
        Typed schema. Frame options outside the stored set are defaulted.

    Raises:
        DefinitionDecodeError: If the payload has an unexpected shape.
    """
    if not isinstance(payload, Mapping):
        raise DefinitionDecodeError("Definition meta must be a JSON object.")
    return DefinitionMeta(
        frames=tuple(_frame_from_dict(item) for item in _optional_list(payload, "frames")),
        fields=tuple(_field_from_dict(item) for item in _optional_list(payload, "fields")),
    )


def meta_to_json(meta: DefinitionMeta, indent: int | None = 2) -> str:
    """Render a schema as transport JSON text."""
    return json.dumps(meta_to_dict(meta), indent=indent, sort_keys=True)


def meta_from_json(text: str) -> DefinitionMeta:
    """Parse transport JSON text into a schema.

    Raises:
        DefinitionDecodeError: If the text is not valid definition meta JSON.
    """
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError) as error:
        raise DefinitionDecodeError(
            f"Failed to parse definition meta JSON: {error}. "
            "Provide a JSON object with 'frames' and 'fields'."
        ) from error
    return meta_from_dict(payload)


def _frame_to_dict(frame: Frame) -> dict[str, Any]:
    options = frame.options
    return _omit_empty(
        {
            "name": frame.name,
            "options": _omit_empty(
                {
                    "rowLabel": options.row_label,
                    "inverseEnabled": options.inverse_enabled,
                    "cacheType": options.cache_type,
                    "cacheSize": options.cache_size,
                    "timeQuantum": options.time_quantum,
                }
            ),
        }
    )


def _field_to_dict(item: Field) -> dict[str, Any]:
    return _omit_empty(
        {
            "name": item.name,
            "primaryKey": item.primary_key,
            "actions": [_action_to_dict(action) for action in item.actions],
        }
    )


def _action_to_dict(action: Action) -> dict[str, Any]:
    return _omit_empty(
        {
            "frame": action.frame,
            "valueDestination": action.value_destination,
            "valueMap": dict(action.value_map),
            "rowID": action.row_id,
        }
    )


def _omit_empty(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value not in ("", 0, False, [], {})}


def _frame_from_dict(item: object) -> Frame:
    payload = _require_mapping(item, "frame")
    options = _require_mapping(payload.get("options", {}), "frame options")
    return Frame(
        name=_optional_str(payload, "name", "frame"),
        options=FrameOptions(
            row_label=_optional_str(options, "rowLabel", "frame options"),
            inverse_enabled=_optional_bool(options, "inverseEnabled", "frame options"),
            cache_type=_optional_str(options, "cacheType", "frame options"),
            cache_size=_optional_uint(options, "cacheSize", "frame options", MAX_UINT32),
            time_quantum=_optional_str(options, "timeQuantum", "frame options"),
        ),
    )


def _field_from_dict(item: object) -> Field:
    payload = _require_mapping(item, "field")
    return Field(
        name=_optional_str(payload, "name", "field"),
        primary_key=_optional_bool(payload, "primaryKey", "field"),
        actions=tuple(_action_from_dict(action) for action in _optional_list(payload, "actions")),
    )


def _action_from_dict(item: object) -> Action:
    payload = _require_mapping(item, "action")
    raw_map = _require_mapping(payload.get("valueMap", {}), "action valueMap")
    return Action(
        frame=_optional_str(payload, "frame", "action"),
        value_destination=_optional_str(payload, "valueDestination", "action"),
        value_map={
            str(key): _optional_uint(raw_map, key, "action valueMap", MAX_UINT64)
            for key in raw_map
        },
        row_id=_optional_uint(payload, "rowID", "action", MAX_UINT64),
    )


def _require_mapping(value: object, context: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DefinitionDecodeError(f"Invalid definition meta: {context} must be an object.")
    return value


def _optional_list(payload: Mapping[str, Any], key: str) -> list[Any]:
    value = payload.get(key, [])
    if value is None:
        return []
    if not isinstance(value, list):
        raise DefinitionDecodeError(f"Invalid definition meta: '{key}' must be a list.")
    return value


def _optional_str(payload: Mapping[str, Any], key: str, context: str) -> str:
    value = payload.get(key, "")
    if not isinstance(value, str):
        raise DefinitionDecodeError(f"Invalid definition meta: {context} '{key}' must be a string.")
    return value


def _optional_bool(payload: Mapping[str, Any], key: str, context: str) -> bool:
    value = payload.get(key, False)
    if not isinstance(value, bool):
        raise DefinitionDecodeError(
            f"Invalid definition meta: {context} '{key}' must be a boolean."
        )
    return value


def _optional_uint(payload: Mapping[str, Any], key: str, context: str, maximum: int) -> int:
    value = payload.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= maximum:
        raise DefinitionDecodeError(
            f"Invalid definition meta: {context} '{key}' must be an integer in [0, {maximum}]."
        )
    return value


def load_meta_file(meta_path: str | Path) -> DefinitionMeta:
    """Read a schema from a JSON or YAML transport file.

    Args:
        meta_path: File path; ``.yaml`` and ``.yml`` are parsed as YAML,
            anything else as JSON.

    Returns:
        Typed schema.

    Raises:
        DefinitionIOError: If the file cannot be read.
        DefinitionDecodeError: If the file does not hold valid definition meta.
    """
    meta_file = Path(meta_path).expanduser().resolve()
    try:
        text = meta_file.read_text(encoding="utf-8")
    except OSError as error:
        raise DefinitionIOError(
            f"Failed to read definition meta at {meta_file}: {error}. "
            "Check the path and file permissions."
        ) from error
    except UnicodeDecodeError as error:
        raise DefinitionDecodeError(
            f"Definition meta at {meta_file} is not valid UTF-8: {error}. "
            "Save the file with UTF-8 encoding."
        ) from error
    if meta_file.suffix.lower() not in YAML_SUFFIXES:
        return meta_from_json(text)
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as error:
        raise DefinitionDecodeError(
            f"Failed to parse YAML definition meta at {meta_file}: {error}. "
            "Fix YAML syntax and retry."
        ) from error
    return meta_from_dict({} if payload is None else payload)
