"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from metadeploy.adapters.bundle import load_bundle, translate_entry
from metadeploy.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyDeployUnitOfWork,
    is_started,
    startup,
)
from metadeploy.domain.model import CLASS_BY_KIND, EncounterType, GlobalProperty
from metadeploy.domain.ports.unit_of_work import DeployUnitOfWork

if TYPE_CHECKING:
    from pathlib import Path

    from metadeploy.domain.model import MetadataKind, MetadataObject

UnitOfWorkFactory = Callable[[], DeployUnitOfWork]


log = getLogger(__name__)


@dataclass(slots=True)
class InstallBundleResult:
    installed: int = 0
    replaced: int = 0

    @property
    def total(self) -> int:
        return self.installed + self.replaced


def _resolve_unit_of_work(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyDeployUnitOfWork


def install_bundle(
    path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> InstallBundleResult:
    """Install every object of the bundle at ``path``, in file order.

    Each object is committed as soon as it is installed, so a failure leaves the
    objects before it in place.
    """

    effective_uow = _resolve_unit_of_work(unit_of_work_factory)
    bundle = load_bundle(path)
    log.info("Installing bundle %s: %d objects", bundle.name or path.name, len(bundle.objects))

    result = InstallBundleResult()
    with effective_uow() as uow:
        deploy = uow.deploy

        def lookup_encounter_type(identifier: str) -> EncounterType | None:
            return deploy.fetch_object(EncounterType, identifier)

        def lookup_global_property(name: str) -> GlobalProperty | None:
            return deploy.fetch_object(GlobalProperty, name)

        for entry in bundle.objects:
            obj = translate_entry(
                entry,
                lookup_encounter_type=lookup_encounter_type,
                lookup_global_property=lookup_global_property,
            )
            if deploy.install(obj):
                result.replaced += 1
            else:
                result.installed += 1
            uow.commit()

    log.info(
        "Finished bundle %s: installed=%s, replaced=%s",
        bundle.name or path.name,
        result.installed,
        result.replaced,
    )
    return result


def uninstall(
    kind: MetadataKind,
    identifier: str,
    reason: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> bool:
    """Uninstall the stored object of ``kind``; returns ``False`` if nothing is stored."""

    effective_uow = _resolve_unit_of_work(unit_of_work_factory)
    with effective_uow() as uow:
        stored = uow.deploy.fetch_object(CLASS_BY_KIND[kind], identifier)
        if stored is None:
            log.warning("No %s %s installed", kind, identifier)
            return False
        uow.deploy.uninstall(stored, reason)
        uow.commit()
    return True


def fetch(
    kind: MetadataKind,
    identifier: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> MetadataObject | None:
    effective_uow = _resolve_unit_of_work(unit_of_work_factory)
    with effective_uow() as uow:
        return uow.deploy.fetch_object(CLASS_BY_KIND[kind], identifier)
