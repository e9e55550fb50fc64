from __future__ import annotations

import pytest

from flaresync.domain.errors import ConflictError, OperationError, ValidationError
from flaresync.domain.model import DesiredState, ManagedRuleTemplate, RuleBatch
from flaresync.domain.policy_sync import sync_policy
from flaresync.domain.reconciliation import AddRule, BatchComparison, PatchRule, RemoveRule
from tests.support.policy_store import (
    MANAGED,
    InMemoryPolicyStore,
    StaticFetcher,
    make_cidrs,
    managed_batches,
)


def test_equal_marker_short_circuits_without_mutations() -> None:
    entries = make_cidrs(23)
    store = InMemoryPolicyStore.with_rules(managed_batches(make_cidrs(5)), description="etag-1")
    fetcher = StaticFetcher(DesiredState(version_tag="etag-1", entries=entries))

    result = sync_policy(fetcher=fetcher, store=store)

    assert result.changed is False
    assert result.operations == ()
    assert store.mutations == []
    assert store.calls == [("read-policy", None)]


def test_empty_policy_is_populated_and_stamped() -> None:
    entries = make_cidrs(23)
    store = InMemoryPolicyStore()
    fetcher = StaticFetcher(DesiredState(version_tag="etag-2", entries=entries))

    result = sync_policy(fetcher=fetcher, store=store)

    assert result.changed is True
    assert result.operations == (
        AddRule(priority=0, cidrs=entries[:10]),
        AddRule(priority=1, cidrs=entries[10:20]),
        AddRule(priority=2, cidrs=entries[20:]),
    )
    assert result.execution.added == 3
    assert store.description == "etag-2"
    assert store.mutations[-1] == ("patch-policy-description", None)
    assert [rule.priority for rule in store.managed()] == [0, 1, 2]


def test_second_run_after_success_is_a_no_op() -> None:
    store = InMemoryPolicyStore.with_rules(managed_batches(make_cidrs(23)), description="etag-1")
    fetcher = StaticFetcher(DesiredState(version_tag="etag-2", entries=make_cidrs(15, offset=3)))

    sync_policy(fetcher=fetcher, store=store)
    mutations_after_first = len(store.mutations)
    second = sync_policy(fetcher=fetcher, store=store)

    assert second.changed is False
    assert len(store.mutations) == mutations_after_first


def test_unmanaged_rules_are_never_touched() -> None:
    unmanaged = [
        RuleBatch(priority=1000, cidrs=("192.0.2.0/24",), description="office"),
        RuleBatch(priority=2147483647, cidrs=("*",), description="default rule"),
    ]
    store = InMemoryPolicyStore.with_rules(
        [*managed_batches(make_cidrs(30)), *unmanaged], description="old"
    )
    fetcher = StaticFetcher(DesiredState(version_tag="new", entries=make_cidrs(8)))

    result = sync_policy(fetcher=fetcher, store=store)

    assert result.operations == (
        PatchRule(priority=0, cidrs=make_cidrs(8)),
        RemoveRule(priority=1),
        RemoveRule(priority=2),
    )
    assert store.rules[1000] == unmanaged[0]
    assert store.rules[2147483647] == unmanaged[1]


def test_rules_matching_already_only_stamp_the_marker() -> None:
    entries = make_cidrs(12)
    store = InMemoryPolicyStore.with_rules(managed_batches(entries), description="old")
    fetcher = StaticFetcher(DesiredState(version_tag="new", entries=entries))

    result = sync_policy(fetcher=fetcher, store=store)

    assert result.operations == ()
    assert store.mutations == [("patch-policy-description", None)]
    assert store.description == "new"


def test_failure_mid_plan_leaves_marker_and_retry_finishes_the_job() -> None:
    entries = make_cidrs(30)
    store = InMemoryPolicyStore(description="old", fail_on=("add-rule", 1))
    fetcher = StaticFetcher(DesiredState(version_tag="new", entries=entries))

    with pytest.raises(OperationError):
        sync_policy(fetcher=fetcher, store=store)

    assert store.description == "old"
    assert sorted(store.rules) == [0]

    store.fail_on = None
    result = sync_policy(fetcher=fetcher, store=store)

    assert result.operations == (
        AddRule(priority=1, cidrs=entries[10:20]),
        AddRule(priority=2, cidrs=entries[20:]),
    )
    assert store.description == "new"


def test_dry_run_plans_without_mutating() -> None:
    store = InMemoryPolicyStore.with_rules(managed_batches(make_cidrs(23)), description="old")
    fetcher = StaticFetcher(DesiredState(version_tag="new", entries=make_cidrs(5)))

    result = sync_policy(fetcher=fetcher, store=store, dry_run=True)

    assert result.dry_run is True
    assert result.operations == (
        PatchRule(priority=0, cidrs=make_cidrs(5)),
        RemoveRule(priority=1),
        RemoveRule(priority=2),
    )
    assert result.execution.total == 0
    assert store.mutations == []
    assert store.description == "old"


def test_custom_template_selects_managed_rules_by_description() -> None:
    template = ManagedRuleTemplate(description="edge-allowlist")
    foreign = RuleBatch(priority=100, cidrs=make_cidrs(10), description=MANAGED)
    store = InMemoryPolicyStore.with_rules([foreign], description="old")
    fetcher = StaticFetcher(DesiredState(version_tag="new", entries=make_cidrs(3, offset=500)))

    result = sync_policy(fetcher=fetcher, store=store, template=template)

    assert result.operations == (AddRule(priority=0, cidrs=make_cidrs(3, offset=500)),)
    assert store.mutations[0] == ("add-rule", 0)
    assert store.rules[100] == foreign
    assert store.rules[0].description == "edge-allowlist"


def test_order_insensitive_comparison_is_forwarded() -> None:
    entries = make_cidrs(10)
    shuffled = [RuleBatch(priority=0, cidrs=tuple(reversed(entries)), description=MANAGED)]
    store = InMemoryPolicyStore.with_rules(shuffled, description="old")
    fetcher = StaticFetcher(DesiredState(version_tag="new", entries=entries))

    result = sync_policy(fetcher=fetcher, store=store, comparison=BatchComparison.UNORDERED)

    assert result.operations == ()


def test_fetch_errors_abort_before_reading_the_policy() -> None:
    class _FailingFetcher:
        def __call__(self) -> DesiredState:
            raise ValidationError("Cloudflare returned an empty ETag")

    store = InMemoryPolicyStore()

    with pytest.raises(ValidationError):
        sync_policy(fetcher=_FailingFetcher(), store=store)

    assert store.calls == []


def test_stale_fingerprint_on_stamp_raises_conflict() -> None:
    class _ConcurrentStore(InMemoryPolicyStore):
        def patch_description(self, *, fingerprint: str, description: str) -> None:
            self.generation += 1
            super().patch_description(fingerprint=fingerprint, description=description)

    store = _ConcurrentStore(description="old")
    fetcher = StaticFetcher(DesiredState(version_tag="new", entries=make_cidrs(3)))

    with pytest.raises(ConflictError):
        sync_policy(fetcher=fetcher, store=store)

    assert store.description == "old"
