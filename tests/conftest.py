from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from metadeploy.adapters.sqlalchemy import (
    SqlAlchemyDeployUnitOfWork,
    SqlAlchemyObjectCache,
    create_all_tables,
    default_handlers,
    shutdown,
    startup,
)
from metadeploy.domain.deploy import MetadataDeployService
from metadeploy.domain.registry import HandlerRegistry

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def deploy_service(sqlite_session: Session) -> MetadataDeployService:
    registry = HandlerRegistry(default_handlers(sqlite_session))
    return MetadataDeployService(registry, SqlAlchemyObjectCache(sqlite_session))


@pytest.fixture
def sqlite_unit_of_work() -> Iterator[Callable[[], SqlAlchemyDeployUnitOfWork]]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    startup(engine=engine, force=True)

    def factory() -> SqlAlchemyDeployUnitOfWork:
        return SqlAlchemyDeployUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
