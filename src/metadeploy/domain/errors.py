"""Errors raised by the metadata deploy core."""

from __future__ import annotations


class MetadataDeployError(RuntimeError):
    """Base class for metadata deploy failures."""


class NoHandlerError(MetadataDeployError):
    """Raised when no handler is registered for a metadata type."""

    def __init__(self, entity_type: type) -> None:
        super().__init__(f"No handler class found for {entity_type.__qualname__}")
        self.entity_type = entity_type


class DuplicateHandlerError(MetadataDeployError):
    """Raised when two handlers declare support for the same metadata type."""

    def __init__(self, entity_type: type, registered: object, incoming: object) -> None:
        super().__init__(
            f"{entity_type.__qualname__} is already handled by {type(registered).__name__}, "
            f"cannot register {type(incoming).__name__}"
        )
        self.entity_type = entity_type


class UnsupportedCapabilityError(MetadataDeployError):
    """Raised when an object is asked for a capability its kind does not have."""
