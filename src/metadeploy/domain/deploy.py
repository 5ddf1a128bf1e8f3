"""Installation of bundled metadata into a running database."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from metadeploy.domain.model import MetadataObject
    from metadeploy.domain.ports.handlers import ObjectDeployHandler
    from metadeploy.domain.ports.persistence import ObjectCache
    from metadeploy.domain.registry import HandlerRegistry

log = logging.getLogger(__name__)


class MetadataDeployService:
    """Installs, uninstalls and fetches metadata objects through their handlers.

    Objects are matched on their stable unique identifier, never on the
    database-local surrogate id. When an incoming object replaces a stored one it
    takes over the stored object's surrogate id, so saving it overwrites the same
    row instead of inserting a duplicate.
    """

    def __init__(self, registry: HandlerRegistry, cache: ObjectCache) -> None:
        self.registry = registry
        self.cache = cache

    def install(self, incoming: MetadataObject) -> bool:
        """Insert or overwrite ``incoming``.

        Returns:
            ``True`` if an existing object was replaced, ``False`` for a fresh insert.

        Raises:
            NoHandlerError: if no handler is registered for the object's type.
        """

        registration = self.registry.registration_for(type(incoming))
        handler = registration.handler
        identifier = handler.get_identifier(incoming)

        existing = handler.fetch(identifier)
        if existing is None:
            existing = handler.find_alternate_match(incoming)
            if existing is not None:
                log.debug(
                    "No exact match for %s %s, replacing alternate match %s",
                    type(incoming).__name__,
                    identifier,
                    handler.get_identifier(existing),
                )

        if existing is not None:
            if registration.merge is not None:
                log.debug(
                    "Merging stored %s %s into incoming", type(existing).__name__, identifier
                )
                registration.merge(existing, incoming)

            if existing.uses_surrogate_id:
                incoming.surrogate_id = existing.surrogate_id

            self.cache.evict(existing)
        elif incoming.uses_surrogate_id and incoming.surrogate_id is not None:
            # surrogate ids are local to the database that issued them
            log.debug(
                "Dropping surrogate id %s of unmatched %s %s",
                incoming.surrogate_id,
                type(incoming).__name__,
                identifier,
            )
            incoming.surrogate_id = None

        handler.save(incoming)

        log.info(
            "%s %s %s",
            "Replaced" if existing is not None else "Installed",
            type(incoming).__name__,
            identifier,
        )
        return existing is not None

    def uninstall(self, outgoing: MetadataObject, reason: str) -> None:
        """Remove ``outgoing``; what removal means (retire or purge) is up to its handler."""

        handler = self.registry.resolve(type(outgoing))
        handler.remove(outgoing, reason)
        log.info(
            "Uninstalled %s %s: %s",
            type(outgoing).__name__,
            handler.get_identifier(outgoing),
            reason,
        )

    def fetch_object[TObject: MetadataObject](
        self, entity_type: type[TObject], identifier: str
    ) -> TObject | None:
        handler = self.get_handler(entity_type)
        return cast("TObject | None", handler.fetch(identifier))

    def get_handler(self, entity_type: type[MetadataObject]) -> ObjectDeployHandler[MetadataObject]:
        return self.registry.resolve(entity_type)
