"""Unit tests for schema model helpers."""

from __future__ import annotations

import pytest

from core.types import Action, Field, FixedRow, FrameOptions, MappedValue


def test_fixed_row_action_resolves_fixed_source() -> None:
    action = Action.fixed_row("f1", 5)

    assert action.source == FixedRow(row_id=5)


def test_mapped_value_action_resolves_mapped_source() -> None:
    action = Action.mapped_value("f1", {"young": 1, "old": 2})

    assert action.source == MappedValue(table={"old": 2, "young": 1})


def test_value_map_destination_wins_over_row_id() -> None:
    """Only the tagged source is consumed when both are present."""
    action = Action(frame="f1", value_destination="valueMap", value_map={"a": 1}, row_id=9)

    assert isinstance(action.source, MappedValue)


def test_untagged_action_with_map_resolves_mapped_source() -> None:
    action = Action(frame="f1", value_map={"a": 1})

    assert action.source == MappedValue(table={"a": 1})


def test_untagged_action_without_map_resolves_fixed_source() -> None:
    action = Action(frame="f1", row_id=3)

    assert action.source == FixedRow(row_id=3)


def test_stored_options_drop_range_flag() -> None:
    """Options outside the persisted set should be reset by projection."""
    options = FrameOptions(row_label="id", cache_size=10, range_enabled=True)

    assert options.stored() == FrameOptions(row_label="id", cache_size=10)


def test_actions_and_fields_are_hashable() -> None:
    first = Field(name="kind", actions=(Action.mapped_value("f1", {"a": 1, "b": 2}),))
    second = Field(name="kind", actions=(Action.mapped_value("f1", {"b": 2, "a": 1}),))

    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_value_map_is_read_only_copy() -> None:
    table = {"young": 1}
    action = Action.mapped_value("f1", table)
    table["old"] = 2

    assert action.value_map == {"young": 1}
    with pytest.raises(TypeError):
        action.value_map["old"] = 2  # type: ignore[index]


def test_mapped_value_is_hashable() -> None:
    assert hash(MappedValue(table={"a": 1})) == hash(MappedValue(table={"a": 1}))
