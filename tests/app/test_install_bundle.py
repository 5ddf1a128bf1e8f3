from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from metadeploy.adapters.bundle import BundleError
from metadeploy.app import fetch, install_bundle, uninstall
from metadeploy.domain.model import Form, GlobalProperty, Location, MetadataKind

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from metadeploy.adapters.sqlalchemy import SqlAlchemyDeployUnitOfWork

    UowFactory = Callable[[], SqlAlchemyDeployUnitOfWork]

BUNDLE = {
    "name": "core",
    "objects": [
        {"kind": "encounter_type", "uuid": "enc-1", "name": "Consultation"},
        {
            "kind": "form",
            "uuid": "form-1",
            "name": "Clinical Encounter",
            "encounter_type": "enc-1",
        },
        {"kind": "location", "uuid": "loc-1", "name": "Ward 1"},
        {"kind": "global_property", "property": "kenyaemr.defaultLocation", "value": "loc-1"},
    ],
}


@pytest.fixture
def bundle_path(tmp_path: Path) -> Path:
    path = tmp_path / "core.json"
    path.write_text(json.dumps(BUNDLE))
    return path


def test_install_bundle_inserts_then_replaces(
    bundle_path: Path, sqlite_unit_of_work: UowFactory
) -> None:
    first = install_bundle(bundle_path, unit_of_work_factory=sqlite_unit_of_work)
    second = install_bundle(bundle_path, unit_of_work_factory=sqlite_unit_of_work)

    assert (first.installed, first.replaced) == (4, 0)
    assert (second.installed, second.replaced) == (0, 4)
    assert second.total == 4


def test_install_bundle_links_form_to_encounter_type(
    bundle_path: Path, sqlite_unit_of_work: UowFactory
) -> None:
    install_bundle(bundle_path, unit_of_work_factory=sqlite_unit_of_work)

    form = fetch(MetadataKind.FORM, "form-1", unit_of_work_factory=sqlite_unit_of_work)

    assert isinstance(form, Form)
    assert form.encounter_type is not None
    assert form.encounter_type.uuid == "enc-1"


def test_install_bundle_keeps_objects_before_a_failure(
    tmp_path: Path, sqlite_unit_of_work: UowFactory
) -> None:
    path = tmp_path / "broken.json"
    path.write_text(
        json.dumps(
            {
                "objects": [
                    {"kind": "location", "uuid": "loc-1", "name": "Ward 1"},
                    {"kind": "form", "uuid": "form-1", "name": "X", "encounter_type": "enc-9"},
                ]
            }
        )
    )

    with pytest.raises(BundleError):
        install_bundle(path, unit_of_work_factory=sqlite_unit_of_work)

    location = fetch(MetadataKind.LOCATION, "loc-1", unit_of_work_factory=sqlite_unit_of_work)
    assert isinstance(location, Location)


def test_uninstall_retires_installed_object(
    bundle_path: Path, sqlite_unit_of_work: UowFactory
) -> None:
    install_bundle(bundle_path, unit_of_work_factory=sqlite_unit_of_work)

    removed = uninstall(
        MetadataKind.LOCATION, "loc-1", "Ward closed", unit_of_work_factory=sqlite_unit_of_work
    )

    location = fetch(MetadataKind.LOCATION, "loc-1", unit_of_work_factory=sqlite_unit_of_work)
    assert removed is True
    assert isinstance(location, Location)
    assert location.retired is True
    assert location.retire_reason == "Ward closed"


def test_uninstall_purges_global_property(
    bundle_path: Path, sqlite_unit_of_work: UowFactory
) -> None:
    install_bundle(bundle_path, unit_of_work_factory=sqlite_unit_of_work)

    removed = uninstall(
        MetadataKind.GLOBAL_PROPERTY,
        "kenyaemr.defaultLocation",
        "Unused",
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert removed is True
    assert (
        fetch(
            MetadataKind.GLOBAL_PROPERTY,
            "kenyaemr.defaultLocation",
            unit_of_work_factory=sqlite_unit_of_work,
        )
        is None
    )


def test_uninstall_missing_object_returns_false(sqlite_unit_of_work: UowFactory) -> None:
    assert (
        uninstall(MetadataKind.FORM, "missing", "gone", unit_of_work_factory=sqlite_unit_of_work)
        is False
    )


def test_fetch_global_property_by_name(
    bundle_path: Path, sqlite_unit_of_work: UowFactory
) -> None:
    install_bundle(bundle_path, unit_of_work_factory=sqlite_unit_of_work)

    prop = fetch(
        MetadataKind.GLOBAL_PROPERTY,
        "kenyaemr.defaultLocation",
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert isinstance(prop, GlobalProperty)
    assert prop.value == "loc-1"


def test_reinstalling_global_property_without_uuid_keeps_stored_uuid(
    bundle_path: Path, sqlite_unit_of_work: UowFactory
) -> None:
    install_bundle(bundle_path, unit_of_work_factory=sqlite_unit_of_work)
    first = fetch(
        MetadataKind.GLOBAL_PROPERTY,
        "kenyaemr.defaultLocation",
        unit_of_work_factory=sqlite_unit_of_work,
    )

    install_bundle(bundle_path, unit_of_work_factory=sqlite_unit_of_work)
    second = fetch(
        MetadataKind.GLOBAL_PROPERTY,
        "kenyaemr.defaultLocation",
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert first is not None
    assert second is not None
    assert second.uuid == first.uuid
