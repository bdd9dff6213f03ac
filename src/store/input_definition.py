"""Input definition lifecycle management.

This module owns one named descriptor file inside a directory.
It orchestrates directory creation, load, and save on top of the codec.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from core.constants import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE, TEMP_FILE_SUFFIX
from core.errors import (
    DefinitionDecodeError,
    DefinitionIOError,
    DefinitionNotFoundError,
    DefinitionStateError,
    InvalidNameError,
)
from core.logging_config import get_logger
from core.naming import NameValidator, validate_name
from core.types import DefinitionMeta, DefinitionState, Field, Frame
from store.definition_codec import decode_definition, encode_definition

_LOGGER = get_logger(__name__)


class InputDefinition:
    """Named schema mapping input data onto frames and fields.

    Instances are single-owner values: operations block, perform no
    locking, and must not run concurrently on the same instance.
    """

    def __init__(
        self,
        path: str | Path,
        index: str,
        name: str,
        name_validator: NameValidator = validate_name,
        dir_mode: int = DEFAULT_DIR_MODE,
        file_mode: int = DEFAULT_FILE_MODE,
    ) -> None:
        """Create an unopened definition. No filesystem access happens here.

        Args:
            path: Directory holding the descriptor file.
            index: Owning index name.
            name: Definition name, also used as the descriptor file name.
            name_validator: Callable rejecting invalid names.
            dir_mode: Permission bits for created directories.
            file_mode: Permission bits for written descriptor files.

        Raises:
            InvalidNameError: If ``name`` fails validation.
        """
        name_validator(name)
        self._path = Path(path)
        self._index = index
        self._name = name
        self._name_validator = name_validator
        self._dir_mode = dir_mode
        self._file_mode = file_mode
        self._frames: tuple[Frame, ...] = ()
        self._fields: tuple[Field, ...] = ()
        self._state = DefinitionState.UNINITIALIZED

    @property
    def name(self) -> str:
        """Definition name; replaced by the stored name after open."""
        return self._name

    @property
    def index(self) -> str:
        """Owning index name."""
        return self._index

    @property
    def path(self) -> Path:
        """Directory holding the descriptor file."""
        return self._path

    @property
    def file_path(self) -> Path:
        """Descriptor file location."""
        return self._path / self._name

    @property
    def frames(self) -> tuple[Frame, ...]:
        """Frames in stored order."""
        return self._frames

    @property
    def fields(self) -> tuple[Field, ...]:
        """Fields in stored order."""
        return self._fields

    @property
    def state(self) -> DefinitionState:
        """Lifecycle state: uninitialized, ready, or failed."""
        return self._state

    def open(self, create_if_missing: bool = False) -> None:
        """Ensure the directory exists and load the stored descriptor.

        Args:
            create_if_missing: Start from an empty schema and persist it when
                no descriptor file exists yet, instead of failing.

        Raises:
            DefinitionIOError: If the directory or file cannot be accessed.
            DefinitionNotFoundError: If no descriptor exists and
                ``create_if_missing`` is false.
            DefinitionDecodeError: If the descriptor bytes are invalid.
            DefinitionStateError: If a previous open failed.
        """
        self._require_usable()
        try:
            self._ensure_directory()
            loaded = self._load_meta(create_if_missing)
        except (DefinitionIOError, DefinitionDecodeError):
            self._frames = ()
            self._fields = ()
            self._state = DefinitionState.FAILED
            raise
        self._state = DefinitionState.READY
        _LOGGER.info(
            "input_definition_opened",
            index=self._index,
            name=self._name,
            path=str(self._path),
            frame_count=len(self._frames),
            field_count=len(self._fields),
            created=not loaded,
        )

    def meta(self) -> DefinitionMeta:
        """Return the current schema as frames plus fields."""
        return DefinitionMeta(frames=self._frames, fields=self._fields)

    def apply_meta(self, meta: DefinitionMeta) -> None:
        """Replace frames and fields wholesale. Call ``save`` to persist.

        Raises:
            DefinitionStateError: If a previous open failed.
        """
        self.set_frames(meta.frames)
        self.set_fields(meta.fields)

    def set_frames(self, frames: Iterable[Frame]) -> None:
        """Replace all frames, keeping the given order."""
        self._require_usable()
        self._frames = tuple(frames)

    def set_fields(self, fields: Iterable[Field]) -> None:
        """Replace all fields, keeping the given order."""
        self._require_usable()
        self._fields = tuple(fields)

    def save(self) -> None:
        """Write the full descriptor, replacing any existing file atomically.

        Raises:
            DefinitionEncodeError: If the schema cannot be serialized.
            DefinitionIOError: If the descriptor cannot be written.
            DefinitionStateError: If a previous open failed.
        """
        self._require_usable()
        payload = encode_definition(self._name, self._frames, self._fields)
        self._ensure_directory()
        target = self.file_path
        temp_path = target.with_name(f"{target.name}{TEMP_FILE_SUFFIX}")
        try:
            _write_file_synced(temp_path, payload, self._file_mode)
            os.replace(temp_path, target)
        except OSError as error:
            temp_path.unlink(missing_ok=True)
            raise DefinitionIOError(
                f"Failed to write input definition {target}: {error}. "
                "Check directory permissions and free space."
            ) from error
        _LOGGER.info(
            "input_definition_saved",
            index=self._index,
            name=self._name,
            path=str(target),
            byte_count=len(payload),
        )

    def _load_meta(self, create_if_missing: bool) -> bool:
        """Load descriptor contents, returning False when a new one was created."""
        target = self.file_path
        try:
            data = target.read_bytes()
        except FileNotFoundError as error:
            if create_if_missing:
                self._frames = ()
                self._fields = ()
                self.save()
                return False
            raise DefinitionNotFoundError(
                f"Input definition not found at {target}. "
                "Save the definition before opening it, or open with create_if_missing=True."
            ) from error
        except OSError as error:
            raise DefinitionIOError(
                f"Failed to read input definition {target}: {error}. "
                "Check file permissions and retry."
            ) from error
        decoded = decode_definition(data)
        try:
            self._name_validator(decoded.name)
        except InvalidNameError as error:
            raise DefinitionDecodeError(
                f"Input definition {target} stores an invalid name: {error}. "
                "Recreate the definition under a valid name."
            ) from error
        self._name = decoded.name
        self._frames = decoded.frames
        self._fields = decoded.fields
        return True

    def _ensure_directory(self) -> None:
        try:
            self._path.mkdir(mode=self._dir_mode, parents=True, exist_ok=True)
        except OSError as error:
            raise DefinitionIOError(
                f"Failed to create input definition directory {self._path}: {error}. "
                "Check that the parent path is writable."
            ) from error

    def _require_usable(self) -> None:
        if self._state is DefinitionState.FAILED:
            raise DefinitionStateError(
                f"Input definition '{self._name}' failed to open. "
                "Discard it and construct a new instance."
            )


def _write_file_synced(file_path: Path, payload: bytes, mode: int) -> None:
    """Write bytes to a fresh file and flush them to disk."""
    descriptor = os.open(file_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(descriptor, "wb") as handle:
        handle.write(payload)
        handle.flush()
        os.fsync(handle.fileno())
