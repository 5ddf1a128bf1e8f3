"""SQLAlchemy mapping metadata for the metadata domain model."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    orm,
)
from sqlalchemy.orm import relationship

from metadeploy.domain.model import (
    EncounterType,
    Form,
    GlobalProperty,
    Location,
    MetadataObject,
    PatientIdentifierType,
    PersonAttributeType,
    Program,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUID_LENGTH = 38


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _retireable_columns() -> list[Column[object]]:
    return [
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("uuid", String(UUID_LENGTH), nullable=False, unique=True),
        Column("date_created", UTCDateTime, nullable=True),
        Column("retired", Boolean, nullable=False, default=False),
        Column("retire_reason", String(255), nullable=True),
        Column("date_retired", UTCDateTime, nullable=True),
    ]


# Metadata tables --------------------------------------------------------------

encounter_type_table = Table(
    "encounter_type",
    mapper_registry.metadata,
    *_retireable_columns(),
    Column("name", String(50), nullable=False),
    Column("description", Text, nullable=True),
)

form_table = Table(
    "form",
    mapper_registry.metadata,
    *_retireable_columns(),
    Column("name", String(255), nullable=False),
    Column("version", String(50), nullable=True),
    Column("description", Text, nullable=True),
    Column("published", Boolean, nullable=False, default=False),
    Column(
        "encounter_type_id",
        Integer,
        ForeignKey("encounter_type.id"),
        nullable=True,
    ),
)

program_table = Table(
    "program",
    mapper_registry.metadata,
    *_retireable_columns(),
    Column("name", String(50), nullable=False),
    Column("description", Text, nullable=True),
    Column("concept_uuid", String(UUID_LENGTH), nullable=True, index=True),
)

location_table = Table(
    "location",
    mapper_registry.metadata,
    *_retireable_columns(),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=True),
)

patient_identifier_type_table = Table(
    "patient_identifier_type",
    mapper_registry.metadata,
    *_retireable_columns(),
    Column("name", String(50), nullable=False, index=True),
    Column("description", Text, nullable=True),
    Column("format", String(255), nullable=True),
    Column("required", Boolean, nullable=False, default=False),
)

person_attribute_type_table = Table(
    "person_attribute_type",
    mapper_registry.metadata,
    *_retireable_columns(),
    Column("name", String(50), nullable=False, index=True),
    Column("description", Text, nullable=True),
    Column("format", String(50), nullable=True),
    Column("searchable", Boolean, nullable=False, default=False),
)

global_property_table = Table(
    "global_property",
    mapper_registry.metadata,
    Column("property", String(255), key="property_name", primary_key=True),
    Column("uuid", String(UUID_LENGTH), nullable=False, unique=True),
    Column("date_created", UTCDateTime, nullable=True),
    Column("property_value", Text, key="value", nullable=True),
    Column("description", Text, nullable=True),
)

TABLE_BY_CLASS: dict[type[MetadataObject], Table] = {
    EncounterType: encounter_type_table,
    Form: form_table,
    Program: program_table,
    Location: location_table,
    PatientIdentifierType: patient_identifier_type_table,
    PersonAttributeType: person_attribute_type_table,
    GlobalProperty: global_property_table,
}


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    for entity_cls in (
        EncounterType,
        Program,
        Location,
        PatientIdentifierType,
        PersonAttributeType,
        GlobalProperty,
    ):
        mapper_registry.map_imperatively(entity_cls, TABLE_BY_CLASS[entity_cls])

    mapper_registry.map_imperatively(
        Form,
        form_table,
        properties={
            "encounter_type": relationship(EncounterType, lazy="joined"),
        },
    )

    mapper_registry.configure()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create every mapped table that does not exist yet."""

    start_mappers()
    mapper_registry.metadata.create_all(engine)
