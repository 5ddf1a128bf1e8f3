from __future__ import annotations

import pytest

from metadeploy.domain.errors import DuplicateHandlerError, NoHandlerError
from metadeploy.domain.model import EncounterType, Form, GlobalProperty, Location
from metadeploy.domain.registry import HandlerRegistry
from tests.helpers.fakes import InMemoryDeployHandler, InMemoryMergeHandler


class SpecialForm(Form):
    """Subclass that is never registered on its own."""


def test_resolve_returns_handler_for_each_declared_type() -> None:
    handler = InMemoryDeployHandler(EncounterType, Location)
    registry = HandlerRegistry([handler])

    assert registry.resolve(EncounterType) is handler
    assert registry.resolve(Location) is handler
    assert len(registry) == 2


def test_resolve_unregistered_type_raises() -> None:
    registry = HandlerRegistry([InMemoryDeployHandler(EncounterType)])

    with pytest.raises(NoHandlerError) as exc:
        registry.resolve(Form)

    assert exc.value.entity_type is Form


def test_resolve_does_not_fall_back_to_base_class_handler() -> None:
    registry = HandlerRegistry([InMemoryDeployHandler(Form)])

    assert SpecialForm not in registry
    with pytest.raises(NoHandlerError):
        registry.resolve(SpecialForm)


def test_handler_without_supported_types_is_skipped() -> None:
    registry = HandlerRegistry([InMemoryDeployHandler()])

    assert len(registry) == 0
    assert registry.supported_types() == frozenset()


def test_duplicate_type_from_different_handlers_raises() -> None:
    first = InMemoryDeployHandler(Form)
    second = InMemoryMergeHandler(Form)

    with pytest.raises(DuplicateHandlerError, match="Form"):
        HandlerRegistry([first, second])


def test_register_rejects_type_owned_by_earlier_registration() -> None:
    registry = HandlerRegistry([InMemoryDeployHandler(Form)])

    with pytest.raises(DuplicateHandlerError):
        registry.register([InMemoryDeployHandler(Form, Location)])

    assert Location not in registry


def test_same_handler_declaring_type_twice_is_accepted() -> None:
    handler = InMemoryDeployHandler(Form, Form)

    registry = HandlerRegistry([handler])

    assert registry.resolve(Form) is handler
    assert len(registry) == 1


def test_merge_capability_resolved_at_registration() -> None:
    plain = InMemoryDeployHandler(EncounterType)
    merging = InMemoryMergeHandler(Form)

    registry = HandlerRegistry([plain, merging])

    assert registry.registration_for(EncounterType).merge is None
    assert registry.registration_for(Form).supports_merge
    assert registry.registration_for(Form).merge == merging.merge


def test_rebuild_replaces_all_registrations() -> None:
    registry = HandlerRegistry([InMemoryDeployHandler(Form)])
    replacement = InMemoryDeployHandler(GlobalProperty, identifier_field="property_name")

    registry.rebuild([replacement])

    assert registry.supported_types() == frozenset({GlobalProperty})
    assert Form not in registry
