"""Translate bundle entries into domain metadata objects."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from metadeploy.adapters.bundle.schema import (
    EncounterTypeEntry,
    FormEntry,
    GlobalPropertyEntry,
    LocationEntry,
    PatientIdentifierTypeEntry,
    PersonAttributeTypeEntry,
    ProgramEntry,
    RetireableEntry,
)
from metadeploy.domain.model import (
    EncounterType,
    Form,
    GlobalProperty,
    Location,
    PatientIdentifierType,
    PersonAttributeType,
    Program,
    RetireableObject,
    new_uuid,
)

if TYPE_CHECKING:
    from metadeploy.adapters.bundle.schema import BundleEntry
    from metadeploy.domain.model import MetadataObject

type EncounterTypeLookup = Callable[[str], EncounterType | None]
type GlobalPropertyLookup = Callable[[str], GlobalProperty | None]


class BundleError(ValueError):
    """Raised when a bundle cannot be turned into installable objects."""


def translate_entry(
    entry: BundleEntry,
    *,
    lookup_encounter_type: EncounterTypeLookup,
    lookup_global_property: GlobalPropertyLookup | None = None,
) -> MetadataObject:
    """Build the domain object described by ``entry``.

    References to other metadata (a form's encounter type) are resolved through
    ``lookup_encounter_type`` so that they point at objects already installed. A
    global property entry without a uuid keeps the uuid of the installed property
    found through ``lookup_global_property``.
    """

    match entry:
        case EncounterTypeEntry():
            obj: MetadataObject = EncounterType(
                uuid=entry.uuid, name=entry.name, description=entry.description
            )
        case FormEntry():
            obj = Form(
                uuid=entry.uuid,
                name=entry.name,
                version=entry.version,
                description=entry.description,
                published=entry.published,
                encounter_type=_resolve_encounter_type(entry, lookup_encounter_type),
            )
        case ProgramEntry():
            obj = Program(
                uuid=entry.uuid,
                name=entry.name,
                description=entry.description,
                concept_uuid=entry.concept_uuid,
            )
        case LocationEntry():
            obj = Location(uuid=entry.uuid, name=entry.name, description=entry.description)
        case PatientIdentifierTypeEntry():
            obj = PatientIdentifierType(
                uuid=entry.uuid,
                name=entry.name,
                description=entry.description,
                format=entry.format,
                required=entry.required,
            )
        case PersonAttributeTypeEntry():
            obj = PersonAttributeType(
                uuid=entry.uuid,
                name=entry.name,
                description=entry.description,
                format=entry.format,
                searchable=entry.searchable,
            )
        case GlobalPropertyEntry():
            return GlobalProperty(
                uuid=entry.uuid or _stored_property_uuid(entry, lookup_global_property),
                property_name=entry.property_name,
                value=entry.value,
                description=entry.description,
            )
        case _:
            raise BundleError(f"Unsupported bundle entry {type(entry).__name__}")

    if isinstance(entry, RetireableEntry) and isinstance(obj, RetireableObject) and entry.retired:
        obj.retire(entry.retire_reason or "Retired in bundle")
    return obj


def _resolve_encounter_type(
    entry: FormEntry, lookup: EncounterTypeLookup
) -> EncounterType | None:
    if entry.encounter_type is None:
        return None
    encounter_type = lookup(entry.encounter_type)
    if encounter_type is None:
        raise BundleError(
            f"Form {entry.uuid} references unknown encounter type {entry.encounter_type}"
        )
    return encounter_type


def _stored_property_uuid(
    entry: GlobalPropertyEntry, lookup: GlobalPropertyLookup | None
) -> str:
    stored = lookup(entry.property_name) if lookup is not None else None
    if stored is not None:
        return stored.uuid
    return new_uuid()
