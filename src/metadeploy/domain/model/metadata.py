"""Concrete metadata kinds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from metadeploy.domain.model.base import MetadataObject, RetireableObject
from metadeploy.domain.model.enums import MetadataKind


@dataclass(eq=False, kw_only=True)
class EncounterType(RetireableObject):
    KIND: ClassVar[MetadataKind] = MetadataKind.ENCOUNTER_TYPE

    name: str
    description: str | None = None


@dataclass(eq=False, kw_only=True)
class Form(RetireableObject):
    KIND: ClassVar[MetadataKind] = MetadataKind.FORM

    name: str
    version: str | None = None
    description: str | None = None
    published: bool = False
    encounter_type: EncounterType | None = None


@dataclass(eq=False, kw_only=True)
class Program(RetireableObject):
    """A care program; each program is anchored to exactly one concept."""

    KIND: ClassVar[MetadataKind] = MetadataKind.PROGRAM

    name: str
    description: str | None = None
    concept_uuid: str | None = None


@dataclass(eq=False, kw_only=True)
class Location(RetireableObject):
    KIND: ClassVar[MetadataKind] = MetadataKind.LOCATION

    name: str
    description: str | None = None


@dataclass(eq=False, kw_only=True)
class PatientIdentifierType(RetireableObject):
    KIND: ClassVar[MetadataKind] = MetadataKind.PATIENT_IDENTIFIER_TYPE

    name: str
    description: str | None = None
    format: str | None = None
    required: bool = False


@dataclass(eq=False, kw_only=True)
class PersonAttributeType(RetireableObject):
    KIND: ClassVar[MetadataKind] = MetadataKind.PERSON_ATTRIBUTE_TYPE

    name: str
    description: str | None = None
    format: str | None = None
    searchable: bool = False


@dataclass(eq=False, kw_only=True)
class GlobalProperty(MetadataObject):
    """A named setting. Keyed by its property name, it has no surrogate id."""

    KIND: ClassVar[MetadataKind] = MetadataKind.GLOBAL_PROPERTY

    property_name: str
    value: str | None = None
    description: str | None = None


CLASS_BY_KIND: dict[MetadataKind, type[MetadataObject]] = {
    cls.KIND: cls
    for cls in (
        EncounterType,
        Form,
        Program,
        Location,
        PatientIdentifierType,
        PersonAttributeType,
        GlobalProperty,
    )
}
KIND_BY_CLASS: dict[type[MetadataObject], MetadataKind] = {
    cls: kind for kind, cls in CLASS_BY_KIND.items()
}
