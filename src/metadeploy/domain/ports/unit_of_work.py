"""Unit-of-work abstraction around a deploy session."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from metadeploy.domain.deploy import MetadataDeployService


@runtime_checkable
class DeployUnitOfWork(Protocol):
    """Transaction boundary around calls into the deploy service."""

    @property
    def deploy(self) -> MetadataDeployService: ...

    def __enter__(self) -> DeployUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
