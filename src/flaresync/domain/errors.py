"""Error taxonomy for a reconciliation run.

Every error is fatal to the run; the next scheduled invocation recomputes the
plan from fresh state.
"""

from __future__ import annotations


class FlareSyncError(RuntimeError):
    """Base class for all run-fatal errors."""


class DesiredStateError(FlareSyncError):
    """The published ranges could not be obtained or are unusable."""


class FetchError(DesiredStateError):
    """Network failure or non-2xx response while fetching the ranges."""


class ParseError(DesiredStateError):
    """The ranges document is not in the expected shape."""


class ValidationError(DesiredStateError):
    """The ranges document parsed but carries an empty tag or list."""


class PolicyStoreError(FlareSyncError):
    """Failure talking to the security policy store.

    ``operation`` and ``priority`` identify the call that failed so that the
    message is enough to diagnose without re-running in debug mode.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        priority: int | None = None,
    ) -> None:
        context: list[str] = []
        if operation is not None:
            context.append(operation)
        if priority is not None:
            context.append(f"priority={priority}")
        prefix = f"[{' '.join(context)}] " if context else ""
        super().__init__(f"{prefix}{message}")
        self.operation = operation
        self.priority = priority


class NotFoundError(PolicyStoreError):
    """The security policy does not exist."""


class AccessError(PolicyStoreError):
    """The caller is not authorised to read or modify the policy."""


class OperationError(PolicyStoreError):
    """A policy store call failed."""


class ConflictError(OperationError):
    """The supplied fingerprint is stale; the policy changed concurrently."""
