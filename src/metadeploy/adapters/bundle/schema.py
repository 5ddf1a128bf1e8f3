"""JSON schema of a metadata bundle file."""

from __future__ import annotations

import logging
from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)

Uuid = Annotated[str, Field(min_length=1, max_length=38)]


class BundleBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning(
            "Bundle %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class RetireableEntry(BundleBaseModel):
    uuid: Uuid
    name: str
    description: str | None = None
    retired: bool = False
    retire_reason: str | None = None


class EncounterTypeEntry(RetireableEntry):
    kind: Literal["encounter_type"]


class FormEntry(RetireableEntry):
    kind: Literal["form"]
    version: str | None = None
    published: bool = False
    encounter_type: Uuid | None = None


class ProgramEntry(RetireableEntry):
    kind: Literal["program"]
    concept_uuid: Uuid | None = Field(default=None, alias="concept")


class LocationEntry(RetireableEntry):
    kind: Literal["location"]


class PatientIdentifierTypeEntry(RetireableEntry):
    kind: Literal["patient_identifier_type"]
    format: str | None = None
    required: bool = False


class PersonAttributeTypeEntry(RetireableEntry):
    kind: Literal["person_attribute_type"]
    format: str | None = None
    searchable: bool = False


class GlobalPropertyEntry(BundleBaseModel):
    kind: Literal["global_property"]
    property_name: str = Field(alias="property", min_length=1)
    value: str | None = None
    description: str | None = None
    uuid: Uuid | None = None


BundleEntry = Annotated[
    EncounterTypeEntry
    | FormEntry
    | ProgramEntry
    | LocationEntry
    | PatientIdentifierTypeEntry
    | PersonAttributeTypeEntry
    | GlobalPropertyEntry,
    Field(discriminator="kind"),
]


class MetadataBundle(BundleBaseModel):
    name: str | None = None
    objects: list[BundleEntry] = Field(default_factory=list)
