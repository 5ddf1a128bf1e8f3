"""Initial metadata schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from metadeploy.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _retireable_columns() -> list[sa.Column[object]]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(38), nullable=False, unique=True),
        sa.Column("date_created", UTCDateTime(), nullable=True),
        sa.Column("retired", sa.Boolean(), nullable=False),
        sa.Column("retire_reason", sa.String(255), nullable=True),
        sa.Column("date_retired", UTCDateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "encounter_type",
        *_retireable_columns(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_table(
        "form",
        *_retireable_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("version", sa.String(50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("published", sa.Boolean(), nullable=False),
        sa.Column(
            "encounter_type_id",
            sa.Integer(),
            sa.ForeignKey("encounter_type.id"),
            nullable=True,
        ),
    )
    op.create_table(
        "program",
        *_retireable_columns(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("concept_uuid", sa.String(38), nullable=True, index=True),
    )
    op.create_table(
        "location",
        *_retireable_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_table(
        "patient_identifier_type",
        *_retireable_columns(),
        sa.Column("name", sa.String(50), nullable=False, index=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("format", sa.String(255), nullable=True),
        sa.Column("required", sa.Boolean(), nullable=False),
    )
    op.create_table(
        "person_attribute_type",
        *_retireable_columns(),
        sa.Column("name", sa.String(50), nullable=False, index=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("format", sa.String(50), nullable=True),
        sa.Column("searchable", sa.Boolean(), nullable=False),
    )
    op.create_table(
        "global_property",
        sa.Column("property", sa.String(255), primary_key=True),
        sa.Column("uuid", sa.String(38), nullable=False, unique=True),
        sa.Column("date_created", UTCDateTime(), nullable=True),
        sa.Column("property_value", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
    )


def downgrade() -> None:
    for table_name in (
        "global_property",
        "person_attribute_type",
        "patient_identifier_type",
        "location",
        "program",
        "form",
        "encounter_type",
    ):
        op.drop_table(table_name)
