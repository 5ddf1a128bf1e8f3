"""Lookup of the handler responsible for each metadata type."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from metadeploy.domain.errors import DuplicateHandlerError, NoHandlerError
from metadeploy.domain.ports.handlers import ObjectDeployHandler, ObjectMergeHandler

if TYPE_CHECKING:
    from metadeploy.domain.model import MetadataObject

log = logging.getLogger(__name__)

type MergeFn = Callable[[MetadataObject, MetadataObject], None]


@dataclass(frozen=True, slots=True)
class HandlerRegistration:
    """A handler together with its merge capability, resolved once."""

    handler: ObjectDeployHandler[MetadataObject]
    merge: MergeFn | None = None

    @classmethod
    def of(cls, handler: ObjectDeployHandler[MetadataObject]) -> HandlerRegistration:
        if isinstance(handler, ObjectMergeHandler):
            return cls(handler=handler, merge=handler.merge)
        return cls(handler=handler)

    @property
    def supports_merge(self) -> bool:
        return self.merge is not None


class HandlerRegistry:
    """Maps concrete metadata types to the single handler installing them.

    Lookups are exact: a handler registered for a base class is not used for its
    subclasses. The mapping is never mutated in place; ``register`` and
    ``rebuild`` build a new one and swap it in.
    """

    def __init__(self, handlers: Iterable[ObjectDeployHandler[MetadataObject]] = ()) -> None:
        self._registrations: Mapping[type[MetadataObject], HandlerRegistration] = (
            MappingProxyType({})
        )
        self.register(handlers)

    def register(self, handlers: Iterable[ObjectDeployHandler[MetadataObject]]) -> None:
        """Add handlers, failing if one claims a type another handler already owns."""

        self._registrations = _build(handlers, base=self._registrations)

    def rebuild(self, handlers: Iterable[ObjectDeployHandler[MetadataObject]]) -> None:
        """Replace every registration with the given handlers."""

        self._registrations = _build(handlers, base={})

    def registration_for(self, entity_type: type[MetadataObject]) -> HandlerRegistration:
        registration = self._registrations.get(entity_type)
        if registration is None:
            raise NoHandlerError(entity_type)
        return registration

    def resolve(self, entity_type: type[MetadataObject]) -> ObjectDeployHandler[MetadataObject]:
        return self.registration_for(entity_type).handler

    def supported_types(self) -> frozenset[type[MetadataObject]]:
        return frozenset(self._registrations)

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)


def _build(
    handlers: Iterable[ObjectDeployHandler[MetadataObject]],
    *,
    base: Mapping[type[MetadataObject], HandlerRegistration],
) -> Mapping[type[MetadataObject], HandlerRegistration]:
    registrations = dict(base)
    for handler in handlers:
        supported = tuple(handler.supported_types())
        if not supported:
            log.debug("Skipping %s: declares no supported types", type(handler).__name__)
            continue
        registration = HandlerRegistration.of(handler)
        for entity_type in supported:
            current = registrations.get(entity_type)
            if current is not None:
                if current.handler is handler:
                    continue
                raise DuplicateHandlerError(entity_type, current.handler, handler)
            registrations[entity_type] = registration
            log.debug(
                "Registered %s for %s (merge=%s)",
                type(handler).__name__,
                entity_type.__name__,
                registration.supports_merge,
            )
    return MappingProxyType(registrations)
