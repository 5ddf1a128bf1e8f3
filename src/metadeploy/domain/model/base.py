"""
Base building blocks:
stable identity, surrogate keys, retirement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar
from uuid import uuid4

from metadeploy.domain.errors import UnsupportedCapabilityError


def new_uuid() -> str:
    return str(uuid4())


@dataclass(eq=False, kw_only=True)
class MetadataObject:
    """A configuration entity matched across databases by its unique identifier.

    The ``uuid`` is assigned outside the database and stays the same in every
    environment. Kinds that also carry a database-local surrogate key declare it
    through ``USES_SURROGATE_ID``.
    """

    uuid: str = field(default_factory=new_uuid)
    date_created: datetime | None = None

    USES_SURROGATE_ID: ClassVar[bool] = False

    @property
    def uses_surrogate_id(self) -> bool:
        return self.USES_SURROGATE_ID

    @property
    def surrogate_id(self) -> int | None:
        raise UnsupportedCapabilityError(f"{type(self).__name__} has no surrogate id")

    @surrogate_id.setter
    def surrogate_id(self, value: int | None) -> None:
        raise UnsupportedCapabilityError(f"{type(self).__name__} has no surrogate id")


@dataclass(eq=False, kw_only=True)
class SurrogateKeyedObject(MetadataObject):
    """Metadata stored under a database-generated integer key."""

    id: int | None = None

    USES_SURROGATE_ID: ClassVar[bool] = True

    @property
    def surrogate_id(self) -> int | None:
        return self.id

    @surrogate_id.setter
    def surrogate_id(self, value: int | None) -> None:
        self.id = value


@dataclass(eq=False, kw_only=True)
class RetireableObject(SurrogateKeyedObject):
    """Metadata that is soft-deleted (retired) instead of purged."""

    retired: bool = False
    retire_reason: str | None = None
    date_retired: datetime | None = None

    def retire(self, reason: str, *, at: datetime | None = None) -> None:
        if not reason or not reason.strip():
            raise ValueError("retire reason must not be blank")
        self.retired = True
        self.retire_reason = reason
        self.date_retired = at or datetime.now(UTC)

    def unretire(self) -> None:
        self.retired = False
        self.retire_reason = None
        self.date_retired = None
