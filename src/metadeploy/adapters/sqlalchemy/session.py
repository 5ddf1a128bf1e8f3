"""Session-level cache control."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.orm import Session, scoped_session

    from metadeploy.domain.model import MetadataObject


class SqlAlchemyObjectCache:
    """Evicts objects from the identity map of a session."""

    def __init__(self, session: Session | scoped_session[Session]) -> None:
        self.session = session

    def evict(self, obj: MetadataObject) -> None:
        if obj in self.session:
            self.session.expunge(obj)


if TYPE_CHECKING:
    from typing import cast

    from metadeploy.domain.ports.persistence import ObjectCache

    _cache_check: ObjectCache = SqlAlchemyObjectCache(cast("Session", object()))
