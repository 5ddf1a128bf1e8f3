"""Metadata domain model."""

from __future__ import annotations

from .base import MetadataObject, RetireableObject, SurrogateKeyedObject, new_uuid
from .enums import MetadataKind
from .metadata import (
    CLASS_BY_KIND,
    KIND_BY_CLASS,
    EncounterType,
    Form,
    GlobalProperty,
    Location,
    PatientIdentifierType,
    PersonAttributeType,
    Program,
)

__all__ = [
    "CLASS_BY_KIND",
    "KIND_BY_CLASS",
    "EncounterType",
    "Form",
    "GlobalProperty",
    "Location",
    "MetadataKind",
    "MetadataObject",
    "PatientIdentifierType",
    "PersonAttributeType",
    "Program",
    "RetireableObject",
    "SurrogateKeyedObject",
    "new_uuid",
]
