"""SQLAlchemy adapter package for metadeploy."""

from __future__ import annotations

from .handlers import (
    EncounterTypeDeployHandler,
    FormDeployHandler,
    GlobalPropertyDeployHandler,
    LocationDeployHandler,
    PatientIdentifierTypeDeployHandler,
    PersonAttributeTypeDeployHandler,
    ProgramDeployHandler,
    RetireableDeployHandler,
    SqlAlchemyDeployHandler,
    default_handlers,
)
from .mappings import TABLE_BY_CLASS, create_all_tables, mapper_registry, start_mappers
from .session import SqlAlchemyObjectCache
from .unit_of_work import (
    SqlAlchemyDeployUnitOfWork,
    StartupError,
    deploy_service,
    shutdown,
    startup,
)

__all__ = [
    "TABLE_BY_CLASS",
    "EncounterTypeDeployHandler",
    "FormDeployHandler",
    "GlobalPropertyDeployHandler",
    "LocationDeployHandler",
    "PatientIdentifierTypeDeployHandler",
    "PersonAttributeTypeDeployHandler",
    "ProgramDeployHandler",
    "RetireableDeployHandler",
    "SqlAlchemyDeployHandler",
    "SqlAlchemyDeployUnitOfWork",
    "SqlAlchemyObjectCache",
    "StartupError",
    "create_all_tables",
    "deploy_service",
    "default_handlers",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
