"""Domain port definitions for adapters."""

from __future__ import annotations

from .handlers import ObjectDeployHandler, ObjectMergeHandler
from .persistence import ObjectCache
from .unit_of_work import DeployUnitOfWork

__all__ = [
    "DeployUnitOfWork",
    "ObjectCache",
    "ObjectDeployHandler",
    "ObjectMergeHandler",
]
