"""Shared typed models.

This module defines immutable schema models used by the codec,
the transport shape, and the definition lifecycle layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

from core.constants import (
    DEFAULT_CACHE_SIZE,
    DEFAULT_CACHE_TYPE,
    VALUE_DESTINATION_SINGLE_ROW,
    VALUE_DESTINATION_VALUE_MAP,
)


@dataclass(frozen=True)
class FrameOptions:
    """Options set when initializing a frame.

    Attributes:
        row_label: Name of the row dimension.
        inverse_enabled: Whether the frame keeps an inverse view.
        cache_type: In-memory caching strategy, e.g. "ranked" or "lru".
        cache_size: Cache capacity.
        time_quantum: Time granularity such as "YMD"; empty when disabled.
        range_enabled: Whether the frame supports range fields. Not part of
            the stored projection and dropped on save.
    """

    row_label: str = ""
    inverse_enabled: bool = False
    cache_type: str = DEFAULT_CACHE_TYPE
    cache_size: int = DEFAULT_CACHE_SIZE
    time_quantum: str = ""
    range_enabled: bool = False

    def stored(self) -> "FrameOptions":
        """Return a copy restricted to the persisted option set."""
        return FrameOptions(
            row_label=self.row_label,
            inverse_enabled=self.inverse_enabled,
            cache_type=self.cache_type,
            cache_size=self.cache_size,
            time_quantum=self.time_quantum,
        )


@dataclass(frozen=True)
class Frame:
    """Named index structure that actions write into."""

    name: str
    options: FrameOptions = field(default_factory=FrameOptions)


@dataclass(frozen=True)
class FixedRow:
    """Action source writing every value to one row."""

    row_id: int


@dataclass(frozen=True)
class MappedValue:
    """Action source translating values to rows through a lookup table."""

    table: Mapping[str, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", MappingProxyType(dict(self.table)))

    def __hash__(self) -> int:
        return hash(frozenset(self.table.items()))


ActionSource = Union[FixedRow, MappedValue]


@dataclass(frozen=True)
class Action:
    """Translation rule from one field value into frame mutations.

    Both identifier sources are kept so stored descriptors round-trip
    as written; ``source`` resolves the one consumed downstream.

    Attributes:
        frame: Target frame name. Not checked against existing frames.
        value_destination: Tag selecting the identifier source.
        value_map: Value to row identifier table, stored read-only.
        row_id: Fixed row identifier.
    """

    frame: str
    value_destination: str = ""
    value_map: Mapping[str, int] = field(default_factory=dict)
    row_id: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "value_map", MappingProxyType(dict(self.value_map)))

    def __hash__(self) -> int:
        return hash(
            (self.frame, self.value_destination, frozenset(self.value_map.items()), self.row_id)
        )

    @classmethod
    def fixed_row(cls, frame: str, row_id: int) -> "Action":
        """Build an action that always targets ``row_id``."""
        return cls(frame=frame, value_destination=VALUE_DESTINATION_SINGLE_ROW, row_id=row_id)

    @classmethod
    def mapped_value(cls, frame: str, table: Mapping[str, int]) -> "Action":
        """Build an action that looks values up in ``table``."""
        return cls(
            frame=frame,
            value_destination=VALUE_DESTINATION_VALUE_MAP,
            value_map=table,
        )

    @property
    def source(self) -> ActionSource:
        """Resolve the identifier source this action consumes."""
        if self.value_destination == VALUE_DESTINATION_VALUE_MAP:
            return MappedValue(table=self.value_map)
        if not self.value_destination and self.value_map:
            return MappedValue(table=self.value_map)
        return FixedRow(row_id=self.row_id)


@dataclass(frozen=True)
class Field:
    """Named input column and its ordered actions."""

    name: str
    primary_key: bool = False
    actions: tuple[Action, ...] = ()


@dataclass(frozen=True)
class DefinitionMeta:
    """Schema of one input definition: frames plus fields."""

    frames: tuple[Frame, ...] = ()
    fields: tuple[Field, ...] = ()


@dataclass(frozen=True)
class DecodedDefinition:
    """Result of decoding a stored descriptor.

    Attributes:
        name: Definition name recorded in the descriptor.
        frames: Frames in stored order.
        fields: Fields in stored order.
    """

    name: str
    frames: tuple[Frame, ...]
    fields: tuple[Field, ...]


class DefinitionState(Enum):
    """Lifecycle state of an input definition instance."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED = "failed"
