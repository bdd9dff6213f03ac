"""Input definition registry for one index.

This module owns the ``input-definitions`` directory of an index and
the create, lookup, replace, and delete flow for its definitions.
"""

from __future__ import annotations

from pathlib import Path

from core.config import InputDefinitionConfig
from core.constants import INPUT_DEFINITIONS_DIR_NAME, TEMP_FILE_SUFFIX
from core.errors import DefinitionExistsError, DefinitionIOError, DefinitionNotFoundError
from core.logging_config import get_logger
from core.naming import NameValidator, validate_name
from core.types import DefinitionMeta
from store.input_definition import InputDefinition

_LOGGER = get_logger(__name__)


class InputDefinitionRegistry:
    """Filesystem-backed collection of input definitions for an index."""

    def __init__(
        self,
        config: InputDefinitionConfig,
        index: str,
        name_validator: NameValidator = validate_name,
    ) -> None:
        """Initialize the registry. No filesystem access happens here.

        Args:
            config: Runtime configuration.
            index: Owning index name.
            name_validator: Callable rejecting invalid index and definition names.

        Raises:
            InvalidNameError: If ``index`` fails validation.
        """
        name_validator(index)
        self._config = config
        self._index = index
        self._name_validator = name_validator
        self._definitions_dir = config.data_root / index / INPUT_DEFINITIONS_DIR_NAME

    @property
    def index(self) -> str:
        return self._index

    @property
    def definitions_dir(self) -> Path:
        return self._definitions_dir

    def create(self, name: str, meta: DefinitionMeta) -> InputDefinition:
        """Create and persist a new definition.

        Args:
            name: Definition name.
            meta: Initial schema.

        Returns:
            Saved definition instance.

        Raises:
            InvalidNameError: If ``name`` fails validation.
            DefinitionExistsError: If a descriptor with this name exists.
        """
        definition = self._build(name)
        if definition.file_path.exists():
            raise DefinitionExistsError(
                f"Input definition '{name}' already exists for index '{self._index}'. "
                "Use replace to overwrite it or delete it first."
            )
        definition.apply_meta(meta)
        definition.save()
        _LOGGER.info(
            "input_definition_created",
            index=self._index,
            name=name,
            frame_count=len(meta.frames),
            field_count=len(meta.fields),
        )
        return definition

    def get(self, name: str) -> InputDefinition:
        """Open an existing definition.

        Raises:
            DefinitionNotFoundError: If no descriptor exists.
            DefinitionDecodeError: If the stored descriptor is invalid.
        """
        definition = self._build(name)
        definition.open()
        return definition

    def replace(self, name: str, meta: DefinitionMeta) -> InputDefinition:
        """Overwrite the schema of an existing definition.

        Raises:
            DefinitionNotFoundError: If no descriptor exists.
        """
        definition = self.get(name)
        definition.apply_meta(meta)
        definition.save()
        return definition

    def list_names(self) -> list[str]:
        """List stored definition names in sorted order."""
        if not self._definitions_dir.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self._definitions_dir.iterdir()
            if entry.is_file() and not entry.name.endswith(TEMP_FILE_SUFFIX)
        )

    def delete(self, name: str) -> None:
        """Remove a stored definition.

        Raises:
            DefinitionNotFoundError: If no descriptor exists.
            DefinitionIOError: If the descriptor cannot be removed.
        """
        file_path = self._build(name).file_path
        try:
            file_path.unlink()
        except FileNotFoundError as error:
            raise DefinitionNotFoundError(
                f"Input definition '{name}' not found for index '{self._index}'. "
                "Use list to discover stored definitions."
            ) from error
        except OSError as error:
            raise DefinitionIOError(
                f"Failed to delete input definition {file_path}: {error}."
            ) from error
        _LOGGER.info("input_definition_deleted", index=self._index, name=name)

    def _build(self, name: str) -> InputDefinition:
        return InputDefinition(
            self._definitions_dir,
            self._index,
            name,
            name_validator=self._name_validator,
            dir_mode=self._config.dir_mode,
            file_mode=self._config.file_mode,
        )
