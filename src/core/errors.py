"""Input definition exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class InputDefinitionError(Exception):
    """Base exception for all input definition failures."""


class InputDefinitionConfigError(InputDefinitionError):
    """Raised for invalid runtime configuration."""


class InvalidNameError(InputDefinitionError, ValueError):
    """Raised when a definition or index name fails validation."""


class DefinitionIOError(InputDefinitionError, OSError):
    """Raised when a descriptor directory or file operation fails."""


class DefinitionNotFoundError(DefinitionIOError):
    """Raised when no descriptor file exists for a definition."""


class DefinitionExistsError(InputDefinitionError):
    """Raised when creating a definition whose descriptor already exists."""


class DefinitionDecodeError(InputDefinitionError):
    """Raised when stored bytes do not parse as a valid descriptor."""


class DefinitionEncodeError(InputDefinitionError):
    """Raised when in-memory schema values cannot be serialized."""


class DefinitionStateError(InputDefinitionError):
    """Raised when a definition is used after a failed open."""
