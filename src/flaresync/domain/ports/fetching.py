"""Ports for fetching the desired allowlist state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from flaresync.domain.model import DesiredState


@runtime_checkable
class DesiredStateFetcher(Protocol):
    """Callable port returning the currently published ranges."""

    def __call__(self) -> DesiredState: ...


__all__ = ["DesiredStateFetcher"]
