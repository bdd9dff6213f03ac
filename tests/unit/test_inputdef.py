"""Unit tests for the public SDK import surface."""

from __future__ import annotations

import inputdef


def test_sdk_exports_are_importable() -> None:
    missing = [name for name in inputdef.__all__ if not hasattr(inputdef, name)]

    assert missing == []


def test_sdk_definition_roundtrip(tmp_path) -> None:
    definition = inputdef.InputDefinition(tmp_path, "idx", "default")
    definition.apply_meta(
        inputdef.DefinitionMeta(
            frames=(inputdef.Frame(name="f1"),),
            fields=(inputdef.Field(name="age", actions=(inputdef.Action.fixed_row("f1", 1),)),),
        )
    )
    definition.save()

    decoded = inputdef.decode_definition(definition.file_path.read_bytes())

    assert decoded.fields == definition.fields
