"""Unit tests for the definition meta transport shape."""

from __future__ import annotations

import pytest

from core.errors import DefinitionDecodeError, DefinitionIOError
from core.types import Action, DefinitionMeta, Field, Frame, FrameOptions
from store.definition_meta import (
    load_meta_file,
    meta_from_dict,
    meta_from_json,
    meta_to_dict,
    meta_to_json,
)
from tests.fixture_paths import fixture_path


def _sample_meta() -> DefinitionMeta:
    return DefinitionMeta(
        frames=(
            Frame(
                name="f1",
                options=FrameOptions(row_label="id", cache_type="ranked", cache_size=1000),
            ),
        ),
        fields=(
            Field(name="id", primary_key=True),
            Field(name="age", actions=(Action(frame="f1", row_id=5),)),
            Field(name="bracket", actions=(Action.mapped_value("f1", {"young": 1, "old": 2}),)),
        ),
    )


def test_meta_to_dict_uses_api_keys_and_omits_empty_values() -> None:
    payload = meta_to_dict(_sample_meta())

    assert payload["frames"][0] == {
        "name": "f1",
        "options": {"rowLabel": "id", "cacheType": "ranked", "cacheSize": 1000},
    }
    assert payload["fields"][0] == {"name": "id", "primaryKey": True}
    assert payload["fields"][1] == {"name": "age", "actions": [{"frame": "f1", "rowID": 5}]}
    assert payload["fields"][2]["actions"][0] == {
        "frame": "f1",
        "valueDestination": "valueMap",
        "valueMap": {"young": 1, "old": 2},
    }


def test_meta_roundtrip_through_json() -> None:
    meta = _sample_meta()

    assert meta_from_json(meta_to_json(meta)) == meta


def test_empty_meta_renders_empty_object() -> None:
    assert meta_to_dict(DefinitionMeta()) == {}
    assert meta_from_dict({}) == DefinitionMeta()


def test_meta_from_dict_defaults_missing_values() -> None:
    meta = meta_from_dict({"fields": [{"name": "age", "actions": [{"frame": "f1"}]}]})

    assert meta.fields[0] == Field(name="age", actions=(Action(frame="f1"),))


def test_meta_from_fixture_file() -> None:
    text = fixture_path("meta/events.json").read_text(encoding="utf-8")

    meta = meta_from_json(text)

    assert [frame.name for frame in meta.frames] == ["f1", "stargazer"]
    assert meta.frames[1].options.inverse_enabled is True
    assert meta.fields[2].actions[0].value_map == {"young": 1, "old": 2}


@pytest.mark.parametrize(
    "payload",
    [
        {"frames": "not-a-list"},
        {"frames": [{"name": 3}]},
        {"frames": [{"name": "f1", "options": {"cacheSize": -1}}]},
        {"fields": [{"name": "a", "primaryKey": 1}]},
        {"fields": [{"name": "a", "actions": [{"valueMap": {"x": "1"}}]}]},
    ],
)
def test_meta_from_dict_rejects_malformed_payload(payload: dict) -> None:
    with pytest.raises(DefinitionDecodeError):
        meta_from_dict(payload)


def test_meta_from_json_rejects_invalid_json() -> None:
    with pytest.raises(DefinitionDecodeError):
        meta_from_json("{not json")


def test_meta_from_json_rejects_non_object() -> None:
    with pytest.raises(DefinitionDecodeError):
        meta_from_json("[]")


def test_load_meta_file_reads_yaml() -> None:
    meta = load_meta_file(fixture_path("meta/events.yaml"))

    assert meta.frames[0].options.cache_size == 1000
    assert meta.fields[0].actions[0] == Action.fixed_row("f1", 5)


def test_load_meta_file_reads_json() -> None:
    meta = load_meta_file(fixture_path("meta/events.json"))

    assert len(meta.fields) == 3


def test_load_meta_file_rejects_invalid_yaml(tmp_path) -> None:
    meta_file = tmp_path / "broken.yml"
    meta_file.write_text("frames: [unclosed\n", encoding="utf-8")

    with pytest.raises(DefinitionDecodeError):
        load_meta_file(meta_file)


def test_load_meta_file_missing_path_raises_io_error(tmp_path) -> None:
    with pytest.raises(DefinitionIOError):
        load_meta_file(tmp_path / "missing.yaml")


def test_load_meta_file_rejects_non_utf8_bytes(tmp_path) -> None:
    meta_file = tmp_path / "latin1.json"
    meta_file.write_bytes(b'{"frames":[{"name":"\xff"}]}')

    with pytest.raises(DefinitionDecodeError):
        load_meta_file(meta_file)


def test_meta_from_json_rejects_oversized_integer_literal() -> None:
    text = '{"frames":[{"name":"f1","options":{"cacheSize":' + "9" * 5000 + "}}]}"

    with pytest.raises(DefinitionDecodeError):
        meta_from_json(text)
