"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class MetadataKind(StrEnum):
    """Names of the installable metadata kinds, as used in bundles and on the CLI."""

    ENCOUNTER_TYPE = "encounter_type"
    FORM = "form"
    PROGRAM = "program"
    LOCATION = "location"
    PATIENT_IDENTIFIER_TYPE = "patient_identifier_type"
    PERSON_ATTRIBUTE_TYPE = "person_attribute_type"
    GLOBAL_PROPERTY = "global_property"
