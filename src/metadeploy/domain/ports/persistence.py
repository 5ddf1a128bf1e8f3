"""Ports onto the persistence session."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from metadeploy.domain.model import MetadataObject


@runtime_checkable
class ObjectCache(Protocol):
    """In-memory identity cache in front of the database."""

    def evict(self, obj: MetadataObject) -> None: ...
