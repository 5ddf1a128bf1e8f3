"""Deploy handlers backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, ClassVar

from sqlalchemy import select
from sqlalchemy.orm import Session, class_mapper, scoped_session

from metadeploy.domain.model import (
    EncounterType,
    Form,
    GlobalProperty,
    Location,
    MetadataObject,
    PatientIdentifierType,
    PersonAttributeType,
    Program,
    RetireableObject,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import ColumnElement

log = logging.getLogger(__name__)

type SessionLike = Session | scoped_session[Session]


class SqlAlchemyDeployHandler[TObject: MetadataObject]:
    """Shared fetch/save/remove logic for one mapped metadata class.

    Subclasses pick the attribute used as unique identifier and, optionally, a
    secondary attribute that identifies an existing object to replace when no
    exact identifier match exists.
    """

    IDENTIFIER_FIELD: ClassVar[str] = "uuid"
    ALTERNATE_MATCH_FIELD: ClassVar[str | None] = None

    def __init__(self, session: SessionLike, entity_cls: type[TObject]) -> None:
        self.session = session
        self.entity_cls = entity_cls

    def supported_types(self) -> Sequence[type[TObject]]:
        return (self.entity_cls,)

    def get_identifier(self, obj: TObject) -> str:
        return getattr(obj, self.IDENTIFIER_FIELD)

    def fetch(self, identifier: str) -> TObject | None:
        return self._first_where(self._column(self.IDENTIFIER_FIELD) == identifier)

    def find_alternate_match(self, obj: TObject) -> TObject | None:
        if self.ALTERNATE_MATCH_FIELD is None:
            return None
        value = getattr(obj, self.ALTERNATE_MATCH_FIELD, None)
        if value is None:
            return None
        return self._first_where(self._column(self.ALTERNATE_MATCH_FIELD) == value)

    def save(self, obj: TObject) -> None:
        identity = tuple(class_mapper(type(obj)).primary_key_from_instance(obj))
        if any(value is None for value in identity):
            if obj.date_created is None:
                obj.date_created = datetime.now(UTC)
            self.session.add(obj)
        else:
            # a known primary key means the row may already exist: copy onto it
            if obj.date_created is None:
                stored = self.session.get(type(obj), identity)
                stored_created = stored.date_created if stored is not None else None
                obj.date_created = stored_created or datetime.now(UTC)
            self.session.merge(obj)
        self.session.flush()

    def remove(self, obj: TObject, reason: str) -> None:
        stored = self._stored(obj)
        if stored is None:
            log.warning(
                "Not removing %s %s: not installed",
                type(obj).__name__,
                self.get_identifier(obj),
            )
            return
        log.debug("Purging %s %s: %s", type(obj).__name__, self.get_identifier(stored), reason)
        self.session.delete(stored)
        self.session.flush()

    def _stored(self, obj: TObject) -> TObject | None:
        if obj in self.session:
            return obj
        return self.fetch(self.get_identifier(obj))

    def _column(self, field: str) -> ColumnElement[object]:
        return class_mapper(self.entity_cls).columns[field]

    def _first_where(self, criterion: ColumnElement[bool]) -> TObject | None:
        stmt = select(self.entity_cls).where(criterion).limit(1)
        return self.session.execute(stmt).scalars().first()


class RetireableDeployHandler[TObject: RetireableObject](SqlAlchemyDeployHandler[TObject]):
    """Removal retires the stored object instead of deleting its row."""

    def remove(self, obj: TObject, reason: str) -> None:
        stored = self._stored(obj)
        if stored is None:
            log.warning(
                "Not retiring %s %s: not installed",
                type(obj).__name__,
                self.get_identifier(obj),
            )
            return
        stored.retire(reason)
        self.session.flush()


class EncounterTypeDeployHandler(RetireableDeployHandler[EncounterType]):
    def __init__(self, session: SessionLike) -> None:
        super().__init__(session, EncounterType)


class LocationDeployHandler(RetireableDeployHandler[Location]):
    def __init__(self, session: SessionLike) -> None:
        super().__init__(session, Location)


class FormDeployHandler(RetireableDeployHandler[Form]):
    def __init__(self, session: SessionLike) -> None:
        super().__init__(session, Form)

    def merge(self, existing: Form, incoming: Form) -> None:
        incoming.date_created = existing.date_created
        if incoming.description is None:
            incoming.description = existing.description


class ProgramDeployHandler(RetireableDeployHandler[Program]):
    ALTERNATE_MATCH_FIELD = "concept_uuid"

    def __init__(self, session: SessionLike) -> None:
        super().__init__(session, Program)


class PatientIdentifierTypeDeployHandler(RetireableDeployHandler[PatientIdentifierType]):
    ALTERNATE_MATCH_FIELD = "name"

    def __init__(self, session: SessionLike) -> None:
        super().__init__(session, PatientIdentifierType)


class PersonAttributeTypeDeployHandler(RetireableDeployHandler[PersonAttributeType]):
    ALTERNATE_MATCH_FIELD = "name"

    def __init__(self, session: SessionLike) -> None:
        super().__init__(session, PersonAttributeType)


class GlobalPropertyDeployHandler(SqlAlchemyDeployHandler[GlobalProperty]):
    """Global properties are keyed by name and purged on removal."""

    IDENTIFIER_FIELD = "property_name"

    def __init__(self, session: SessionLike) -> None:
        super().__init__(session, GlobalProperty)

    def merge(self, existing: GlobalProperty, incoming: GlobalProperty) -> None:
        incoming.date_created = existing.date_created
        if incoming.value is None:
            incoming.value = existing.value


def default_handlers(session: SessionLike) -> list[SqlAlchemyDeployHandler[MetadataObject]]:
    """Return one handler per installable metadata kind, bound to ``session``."""

    handlers: list[SqlAlchemyDeployHandler[MetadataObject]] = [
        EncounterTypeDeployHandler(session),
        LocationDeployHandler(session),
        FormDeployHandler(session),
        ProgramDeployHandler(session),
        PatientIdentifierTypeDeployHandler(session),
        PersonAttributeTypeDeployHandler(session),
        GlobalPropertyDeployHandler(session),
    ]
    return handlers


if TYPE_CHECKING:
    from metadeploy.domain.ports.handlers import ObjectDeployHandler, ObjectMergeHandler

    _session_stub = Session()
    _form_check: ObjectMergeHandler[Form] = FormDeployHandler(_session_stub)
    _program_check: ObjectDeployHandler[Program] = ProgramDeployHandler(_session_stub)
    _property_check: ObjectMergeHandler[GlobalProperty] = GlobalPropertyDeployHandler(
        _session_stub
    )
