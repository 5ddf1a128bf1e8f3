"""Ports for type-specific metadata handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from metadeploy.domain.model import MetadataObject

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class ObjectDeployHandler[TObject: MetadataObject](Protocol):
    """Installs, fetches and removes objects of the kinds it declares."""

    def supported_types(self) -> Sequence[type[TObject]]: ...

    def get_identifier(self, obj: TObject) -> str: ...

    def fetch(self, identifier: str) -> TObject | None: ...

    def find_alternate_match(self, obj: TObject) -> TObject | None: ...

    def save(self, obj: TObject) -> None: ...

    def remove(self, obj: TObject, reason: str) -> None: ...


@runtime_checkable
class ObjectMergeHandler[TObject: MetadataObject](ObjectDeployHandler[TObject], Protocol):
    """Handler that reconciles an existing object into its incoming replacement."""

    def merge(self, existing: TObject, incoming: TObject) -> None: ...
