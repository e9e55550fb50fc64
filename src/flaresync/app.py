"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import ExitStack
from logging import getLogger
from typing import TYPE_CHECKING

from flaresync.adapters.cloud_armor import CloudArmorPolicyStore
from flaresync.adapters.cloudflare import CloudflareRangesFetcher
from flaresync.config import get_cloud_armor_config, get_cloudflare_config
from flaresync.domain.policy_sync import PolicySyncResult, sync_policy
from flaresync.domain.reconciliation import BatchComparison

if TYPE_CHECKING:
    from flaresync.domain.ports import DesiredStateFetcher, PolicyStore


log = getLogger(__name__)


def sync_cloudflare_ranges(
    *,
    project: str,
    policy: str,
    fetcher: DesiredStateFetcher | None = None,
    store: PolicyStore | None = None,
    comparison: BatchComparison = BatchComparison.ORDERED,
    timeout_seconds: float | None = None,
    dry_run: bool = False,
) -> PolicySyncResult:
    """Reconcile ``policy`` in ``project`` with Cloudflare's published IPv4 ranges."""

    armor_config = get_cloud_armor_config(
        project=project,
        policy=policy,
        timeout_seconds=timeout_seconds,
    )
    effective_fetcher = fetcher or CloudflareRangesFetcher(config=get_cloudflare_config())
    log.info(
        "Starting flaresync: project=%s, policy=%s, comparison=%s, dry_run=%s",
        armor_config.project,
        armor_config.policy,
        comparison,
        dry_run,
    )

    with ExitStack() as stack:
        # injected stores stay open; the caller owns them
        if store is None:
            store = stack.enter_context(CloudArmorPolicyStore(config=armor_config))
        result = sync_policy(
            fetcher=effective_fetcher,
            store=store,
            template=armor_config.template,
            comparison=comparison,
            dry_run=dry_run,
        )

    log.info(
        f"Finished flaresync: changed={result.changed}, version={result.version_tag}, "
        f"planned={len(result.operations)}, added={result.execution.added}, "
        f"patched={result.execution.patched}, removed={result.execution.removed}"
    )
    return result
