from __future__ import annotations

from sqlalchemy import create_engine, inspect

from metadeploy.adapters.sqlalchemy.mappings import mapper_registry
from metadeploy.adapters.sqlalchemy.migrations import upgrade_head


def test_upgrade_head_creates_mapped_tables() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    try:
        upgrade_head(engine=engine)

        table_names = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()

    assert set(mapper_registry.metadata.tables).issubset(table_names)
    assert "alembic_version" in table_names


def test_migrated_columns_match_mappings() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    try:
        upgrade_head(engine=engine)
        inspector = inspect(engine)
        migrated = {
            name: {column["name"] for column in inspector.get_columns(name)}
            for name in mapper_registry.metadata.tables
        }
    finally:
        engine.dispose()

    for name, table in mapper_registry.metadata.tables.items():
        assert migrated[name] == {column.name for column in table.columns}
