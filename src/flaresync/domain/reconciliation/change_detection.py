"""Gate that skips a run when the published ranges have not changed."""

from __future__ import annotations


def should_reconcile(version_tag: str, version_marker: str) -> bool:
    """Return ``False`` iff ``version_tag`` equals the stored marker exactly.

    No normalisation is applied: the publisher's tag changes if and only if its
    range list changes, and the marker is whatever this tool last stamped.
    """

    return version_tag != version_marker
