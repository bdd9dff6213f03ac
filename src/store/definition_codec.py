"""Binary descriptor codec for input definitions.

This module projects the in-memory schema onto the stored descriptor
shape and back. Descriptors are a fixed header followed by a compact
JSON document:

    magic (4) | version (1) | payload length (4, big-endian) | sha256 (32) | payload

Decoding either returns a complete definition or raises; it never
yields a partially parsed schema.
"""

from __future__ import annotations

import hashlib
import json
import struct
from typing import Any, Iterable, Mapping

from core.constants import (
    DESCRIPTOR_DIGEST_SIZE,
    DESCRIPTOR_FORMAT_VERSION,
    DESCRIPTOR_MAGIC,
    MAX_UINT32,
    MAX_UINT64,
)
from core.errors import DefinitionDecodeError, DefinitionEncodeError
from core.types import Action, DecodedDefinition, Field, Frame, FrameOptions

_HEADER = struct.Struct(f">{len(DESCRIPTOR_MAGIC)}sBI{DESCRIPTOR_DIGEST_SIZE}s")


def encode_definition(
    name: str,
    frames: Iterable[Frame],
    fields: Iterable[Field],
) -> bytes:
    """Serialize a definition into descriptor bytes.

    Args:
        name: Definition name recorded in the descriptor.
        frames: Frames in order; only stored options are kept.
        fields: Fields in order, carried verbatim.

    Returns:
        Descriptor bytes ready to be written to disk.

    Raises:
        DefinitionEncodeError: If a value cannot be represented.
    """
    _check_str(name, "definition name")
    document = {
        "name": name,
        "frames": [_frame_to_wire(frame) for frame in frames],
        "fields": [_field_to_wire(item) for item in fields],
    }
    payload = json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    digest = hashlib.sha256(payload).digest()
    header = _HEADER.pack(DESCRIPTOR_MAGIC, DESCRIPTOR_FORMAT_VERSION, len(payload), digest)
    return header + payload


def decode_definition(data: bytes) -> DecodedDefinition:
    """Parse descriptor bytes into a definition.

    Args:
        data: Raw descriptor file contents.

    Returns:
        Decoded name, frames and fields in stored order.

    Raises:
        DefinitionDecodeError: If the bytes are not a valid descriptor.
    """
    payload = _unwrap_envelope(data)
    try:
        document = json.loads(payload.decode("utf-8"))
    except (ValueError, RecursionError) as error:
        raise DefinitionDecodeError(
            f"Descriptor payload is not valid JSON: {error}. "
            "Restore the descriptor from a backup or recreate the definition."
        ) from error
    if not isinstance(document, dict):
        raise DefinitionDecodeError("Descriptor payload must be a JSON object.")
    return DecodedDefinition(
        name=_require_str(document, "name", "descriptor"),
        frames=tuple(
            _frame_from_wire(item)
            for item in _require_list(document, "frames", "descriptor")
        ),
        fields=tuple(
            _field_from_wire(item)
            for item in _require_list(document, "fields", "descriptor")
        ),
    )


def _unwrap_envelope(data: bytes) -> bytes:
    """Validate descriptor header and return the checked payload."""
    if len(data) < _HEADER.size:
        raise DefinitionDecodeError(
            f"Descriptor is truncated: {len(data)} bytes, header needs {_HEADER.size}."
        )
    magic, version, length, digest = _HEADER.unpack_from(data)
    if magic != DESCRIPTOR_MAGIC:
        raise DefinitionDecodeError(
            f"Descriptor has unknown magic {magic!r}; expected {DESCRIPTOR_MAGIC!r}."
        )
    if version != DESCRIPTOR_FORMAT_VERSION:
        raise DefinitionDecodeError(
            f"Descriptor format version {version} is not supported "
            f"(expected {DESCRIPTOR_FORMAT_VERSION})."
        )
    payload = data[_HEADER.size:]
    if len(payload) != length:
        raise DefinitionDecodeError(
            f"Descriptor payload length mismatch: header says {length}, found {len(payload)}. "
            "The file was probably truncated during a write."
        )
    if hashlib.sha256(payload).digest() != digest:
        raise DefinitionDecodeError("Descriptor checksum mismatch: payload is corrupt.")
    return payload


def _frame_to_wire(frame: Frame) -> dict[str, Any]:
    options = frame.options
    _check_str(frame.name, "frame name")
    context = f"frame '{frame.name}'"
    _check_str(options.row_label, f"{context} row label")
    _check_bool(options.inverse_enabled, f"{context} inverse flag")
    _check_str(options.cache_type, f"{context} cache type")
    _check_uint(options.cache_size, MAX_UINT32, f"{context} cache size")
    _check_str(options.time_quantum, f"{context} time quantum")
    return {
        "name": frame.name,
        "meta": {
            "rowLabel": options.row_label,
            "inverseEnabled": options.inverse_enabled,
            "cacheType": options.cache_type,
            "cacheSize": options.cache_size,
            "timeQuantum": options.time_quantum,
        },
    }


def _field_to_wire(item: Field) -> dict[str, Any]:
    _check_str(item.name, "field name")
    _check_bool(item.primary_key, f"field '{item.name}' primary key flag")
    return {
        "name": item.name,
        "primaryKey": item.primary_key,
        "actions": [_action_to_wire(item.name, action) for action in item.actions],
    }


def _action_to_wire(field_name: str, action: Action) -> dict[str, Any]:
    _check_str(action.frame, f"field '{field_name}' action frame")
    context = f"field '{field_name}' action on frame '{action.frame}'"
    _check_str(action.value_destination, f"{context} value destination")
    _check_uint(action.row_id, MAX_UINT64, f"{context} row id")
    value_map: dict[str, int] = {}
    for key, value in action.value_map.items():
        if not isinstance(key, str):
            raise DefinitionEncodeError(f"{context}: value map key {key!r} is not a string.")
        _check_uint(value, MAX_UINT64, f"{context} value map entry '{key}'")
        value_map[key] = value
    return {
        "frame": action.frame,
        "valueDestination": action.value_destination,
        "valueMap": value_map,
        "rowID": action.row_id,
    }


def _check_uint(value: object, maximum: int, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= maximum:
        raise DefinitionEncodeError(
            f"Cannot encode {label}: {value!r} is not an integer in [0, {maximum}]."
        )


def _check_str(value: object, label: str) -> None:
    if not isinstance(value, str):
        raise DefinitionEncodeError(f"Cannot encode {label}: {value!r} is not a string.")


def _check_bool(value: object, label: str) -> None:
    if not isinstance(value, bool):
        raise DefinitionEncodeError(f"Cannot encode {label}: {value!r} is not a boolean.")


def _frame_from_wire(item: object) -> Frame:
    frame = _require_object(item, "frame")
    name = _require_str(frame, "name", "frame")
    meta = _require_object(frame.get("meta"), f"frame '{name}' meta")
    context = f"frame '{name}' meta"
    return Frame(
        name=name,
        options=FrameOptions(
            row_label=_require_str(meta, "rowLabel", context),
            inverse_enabled=_require_bool(meta, "inverseEnabled", context),
            cache_type=_require_str(meta, "cacheType", context),
            cache_size=_require_uint(meta, "cacheSize", context, MAX_UINT32),
            time_quantum=_require_str(meta, "timeQuantum", context),
        ),
    )


def _field_from_wire(item: object) -> Field:
    payload = _require_object(item, "field")
    name = _require_str(payload, "name", "field")
    context = f"field '{name}'"
    return Field(
        name=name,
        primary_key=_require_bool(payload, "primaryKey", context),
        actions=tuple(
            _action_from_wire(action, context)
            for action in _require_list(payload, "actions", context)
        ),
    )


def _action_from_wire(item: object, field_context: str) -> Action:
    payload = _require_object(item, f"{field_context} action")
    context = f"{field_context} action"
    raw_map = _require_object(payload.get("valueMap"), f"{context} valueMap")
    value_map: dict[str, int] = {}
    for key in raw_map:
        value_map[key] = _require_uint(raw_map, key, f"{context} valueMap", MAX_UINT64)
    return Action(
        frame=_require_str(payload, "frame", context),
        value_destination=_require_str(payload, "valueDestination", context),
        value_map=value_map,
        row_id=_require_uint(payload, "rowID", context, MAX_UINT64),
    )


def _require_object(value: object, context: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise DefinitionDecodeError(f"Invalid descriptor: {context} must be an object.")
    return value


def _require_list(payload: Mapping[str, Any], key: str, context: str) -> list[Any]:
    value = payload.get(key)
    if not isinstance(value, list):
        raise DefinitionDecodeError(f"Invalid descriptor: {context} '{key}' must be a list.")
    return value


def _require_str(payload: Mapping[str, Any], key: str, context: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise DefinitionDecodeError(f"Invalid descriptor: {context} '{key}' must be a string.")
    return value


def _require_bool(payload: Mapping[str, Any], key: str, context: str) -> bool:
    value = payload.get(key)
    if not isinstance(value, bool):
        raise DefinitionDecodeError(f"Invalid descriptor: {context} '{key}' must be a boolean.")
    return value


def _require_uint(payload: Mapping[str, Any], key: str, context: str, maximum: int) -> int:
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= maximum:
        raise DefinitionDecodeError(
            f"Invalid descriptor: {context} '{key}' must be an integer in [0, {maximum}]."
        )
    return value
