from __future__ import annotations

from datetime import UTC, datetime

import pytest

from metadeploy.domain.errors import UnsupportedCapabilityError
from metadeploy.domain.model import (
    CLASS_BY_KIND,
    KIND_BY_CLASS,
    Form,
    GlobalProperty,
    Location,
    MetadataKind,
)


def test_surrogate_keyed_object_exposes_id() -> None:
    form = Form(name="Triage")

    assert form.uses_surrogate_id is True
    assert form.surrogate_id is None

    form.surrogate_id = 12

    assert form.id == 12


def test_global_property_has_no_surrogate_id() -> None:
    prop = GlobalProperty(property_name="kenyaemr.defaultLocation", value="1")

    assert prop.uses_surrogate_id is False
    with pytest.raises(UnsupportedCapabilityError):
        _ = prop.surrogate_id
    with pytest.raises(UnsupportedCapabilityError):
        prop.surrogate_id = 3


def test_objects_get_distinct_uuids_by_default() -> None:
    assert Location(name="A").uuid != Location(name="B").uuid


def test_retire_records_reason_and_time() -> None:
    location = Location(name="Ward 1")
    at = datetime(2025, 5, 1, tzinfo=UTC)

    location.retire("Closed", at=at)

    assert location.retired is True
    assert location.retire_reason == "Closed"
    assert location.date_retired == at


def test_retire_requires_reason() -> None:
    location = Location(name="Ward 1")

    with pytest.raises(ValueError, match="reason"):
        location.retire("  ")

    assert location.retired is False


def test_unretire_clears_retirement() -> None:
    location = Location(name="Ward 1")
    location.retire("Closed")

    location.unretire()

    assert location.retired is False
    assert location.retire_reason is None
    assert location.date_retired is None


def test_every_kind_maps_to_a_class() -> None:
    assert set(CLASS_BY_KIND) == set(MetadataKind)
    for kind, cls in CLASS_BY_KIND.items():
        assert KIND_BY_CLASS[cls] is kind
