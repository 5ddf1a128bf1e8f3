"""SQLAlchemy-backed deploy service wiring and unit of work."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, scoped_session, sessionmaker

from metadeploy.adapters.sqlalchemy.handlers import default_handlers
from metadeploy.adapters.sqlalchemy.mappings import start_mappers
from metadeploy.adapters.sqlalchemy.migrations import upgrade_head
from metadeploy.adapters.sqlalchemy.session import SqlAlchemyObjectCache
from metadeploy.config import get_database_config
from metadeploy.domain.deploy import MetadataDeployService
from metadeploy.domain.registry import HandlerRegistry

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy adapter is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    sessions: scoped_session[Session] | None = None
    service: MetadataDeployService | None = None

    def require_sessions(self) -> scoped_session[Session]:
        if self.sessions is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call metadeploy.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        return self.sessions

    def require_service(self) -> MetadataDeployService:
        if self.service is None:
            raise StartupError("SQLAlchemy adapter not initialised: no deploy service")
        return self.service


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the engine, schema, thread-scoped sessions and the deploy service.

    The handlers and their registry are built once here and shared by every unit
    of work; each thread gets its own session through the scoped session.
    """

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )
    if _STATE.engine is not None:
        shutdown()

    resolved_engine = engine or create_engine(
        database_uri or get_database_config().uri, future=True
    )
    start_mappers()
    upgrade_head(engine=resolved_engine)

    sessions = scoped_session(sessionmaker(bind=resolved_engine, expire_on_commit=False))
    registry = HandlerRegistry(default_handlers(sessions))
    log.info("Registered deploy handlers for %d metadata types", len(registry))

    _STATE.engine = resolved_engine
    _STATE.sessions = sessions
    _STATE.service = MetadataDeployService(registry, SqlAlchemyObjectCache(sessions))


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def deploy_service() -> MetadataDeployService:
    """Return the process-wide deploy service."""

    return _STATE.require_service()


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.sessions is not None:
        _STATE.sessions.remove()
    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None
    _STATE.sessions = None
    _STATE.service = None


class SqlAlchemyDeployUnitOfWork:
    """Transaction boundary around the deploy service for the current thread."""

    def __init__(self) -> None:
        self.sessions: scoped_session[Session] = _STATE.require_sessions()
        self._deploy = _STATE.require_service()
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyDeployUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = self.sessions()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self.sessions.remove()
        self._session = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def deploy(self) -> MetadataDeployService:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._deploy

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session


if TYPE_CHECKING:
    from metadeploy.domain.ports.unit_of_work import DeployUnitOfWork

    _uow_check: DeployUnitOfWork = SqlAlchemyDeployUnitOfWork()
