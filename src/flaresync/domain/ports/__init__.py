"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import DesiredStateFetcher
from .policy_store import PolicyStore

__all__ = [
    "DesiredStateFetcher",
    "PolicyStore",
]
