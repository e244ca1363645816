"""Tests for the CheckForChanges use case."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from conftest import make_service, ts
from stackgate.application.dtos.check_dtos import CheckForChangesRequest
from stackgate.application.use_cases.check_for_changes import CheckForChanges
from stackgate.domain.errors import FunctionAccessDenied, StoreNotFound
from stackgate.domain.events.check_events import (
    DeploymentRequiredEvent,
    DeploymentSkippedEvent,
    SubscriptionFilterDeletedEvent,
)
from stackgate.domain.ports.object_store_port import ObjectHead
from stackgate.domain.services.naming import ServerlessNaming
from stackgate.domain.services.necessity_evaluator import NecessityEvaluator
from stackgate.domain.services.remote_state import RemoteStateFetcher
from stackgate.domain.value_objects.evaluation_result import SkipBlocker
from stackgate.domain.value_objects.fingerprint import LocalFingerprints
from stackgate.domain.value_objects.remote_object import RemoteObject
from stackgate.domain.value_objects.subscription_filter import (
    DeleteFilter,
    NoOp,
    ReconciliationOutcome,
)

GEN = "serverless/my-service/dev/1714564800000-2024-05-01T12:00:00.000Z"


@pytest.fixture
def store():
    mock = AsyncMock()
    mock.list_objects.return_value = [
        RemoteObject(f"{GEN}/my-service.zip", ts(0)),
        RemoteObject(f"{GEN}/compiled-cloudformation-template.json", ts(0)),
    ]
    heads = {
        f"{GEN}/my-service.zip": ObjectHead(f"{GEN}/my-service.zip", ts(0), {"filesha256": "A"}),
        f"{GEN}/compiled-cloudformation-template.json": ObjectHead(
            f"{GEN}/compiled-cloudformation-template.json", ts(0), {"filesha256": "T"}
        ),
    }
    mock.head_object.side_effect = lambda bucket, key: heads[key]
    return mock


@pytest.fixture
def functions():
    mock = AsyncMock()
    mock.get_last_modified.return_value = ts(1)
    return mock


@pytest.fixture
def fingerprints():
    mock = MagicMock()
    mock.fingerprint = AsyncMock(
        return_value=LocalFingerprints(template_hash="T", artifact_hashes=("A",))
    )
    return mock


@pytest.fixture
def reconciler():
    mock = MagicMock()
    mock.reconcile = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def event_bus():
    mock = MagicMock()
    mock.publish = AsyncMock()
    return mock


def build(store, functions, fingerprints, reconciler, event_bus=None, service=None):
    return CheckForChanges(
        service=service or make_service({"a": [], "b": [], "c": []}),
        remote_state=RemoteStateFetcher(store, functions),
        fingerprints=fingerprints,
        evaluator=NecessityEvaluator(),
        reconciler=reconciler,
        naming=ServerlessNaming(),
        packaging_dir=Path(".serverless"),
        event_bus=event_bus,
    )


class TestCheckForChanges:
    @pytest.mark.asyncio
    async def test_unchanged_service_skips(self, store, functions, fingerprints, reconciler):
        use_case = build(store, functions, fingerprints, reconciler)

        response = await use_case.execute(CheckForChangesRequest())

        assert response.skipped
        reconciler.reconcile.assert_not_awaited()
        store.list_objects.assert_awaited_once_with(
            "deploy-bucket", "serverless/my-service/dev"
        )
        assert functions.get_last_modified.await_count == 3

    @pytest.mark.asyncio
    async def test_drift_requires_deployment(self, store, functions, fingerprints, reconciler):
        functions.get_last_modified.return_value = ts(0, hour=11)
        use_case = build(store, functions, fingerprints, reconciler)

        response = await use_case.execute(CheckForChangesRequest())

        assert not response.skipped
        assert response.evaluation.blockers == (SkipBlocker.CHANGED_AFTER_DEPLOY,)
        reconciler.reconcile.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_one_denied_function_blocks_skip(self, store, functions, fingerprints, reconciler):
        async def lookup(name):
            if name == "my-service-dev-b":
                raise FunctionAccessDenied(name, "403")
            return ts(1)

        functions.get_last_modified.side_effect = lookup
        use_case = build(store, functions, fingerprints, reconciler)

        response = await use_case.execute(CheckForChangesRequest())

        assert not response.skipped
        assert response.evaluation.access_denied
        assert SkipBlocker.MODIFICATION_UNKNOWN in response.evaluation.blockers

    @pytest.mark.asyncio
    async def test_fresh_deployment(self, store, functions, fingerprints, reconciler):
        store.list_objects.return_value = []
        use_case = build(store, functions, fingerprints, reconciler)

        response = await use_case.execute(CheckForChangesRequest())

        assert response.evaluation.blockers == (SkipBlocker.FRESH_DEPLOYMENT,)
        store.head_object.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_force_still_reconciles(self, store, functions, fingerprints, reconciler):
        use_case = build(store, functions, fingerprints, reconciler)

        response = await use_case.execute(CheckForChangesRequest(force=True))

        assert response.evaluation.forced
        store.list_objects.assert_not_awaited()
        fingerprints.fingerprint.assert_not_awaited()
        reconciler.reconcile.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_bucket_propagates(self, store, functions, fingerprints, reconciler):
        store.list_objects.side_effect = StoreNotFound("deploy-bucket")
        use_case = build(store, functions, fingerprints, reconciler)

        with pytest.raises(StoreNotFound) as exc_info:
            await use_case.execute(CheckForChangesRequest())

        assert exc_info.value.stack_name == "my-service-dev"
        reconciler.reconcile.assert_not_awaited()


class TestEvents:
    @pytest.mark.asyncio
    async def test_skip_event(self, store, functions, fingerprints, reconciler, event_bus):
        use_case = build(store, functions, fingerprints, reconciler, event_bus)

        response = await use_case.execute(CheckForChangesRequest())

        (event,) = response.events
        assert isinstance(event, DeploymentSkippedEvent)
        assert event.aggregate_id == "my-service-dev"
        assert event.object_count == 2
        event_bus.publish.assert_awaited_once_with([event])

    @pytest.mark.asyncio
    async def test_deletion_events(self, store, functions, fingerprints, reconciler, event_bus):
        reconciler.reconcile.return_value = [
            ReconciliationOutcome("a", "/lg/one", 1, DeleteFilter("/lg/one", "old-Filter-1")),
            ReconciliationOutcome("b", "/lg/two", 1, NoOp()),
        ]
        use_case = build(store, functions, fingerprints, reconciler, event_bus)

        response = await use_case.execute(CheckForChangesRequest(force=True))

        required, deleted = response.events
        assert isinstance(required, DeploymentRequiredEvent)
        assert required.reasons == ("deployment forced",)
        assert isinstance(deleted, SubscriptionFilterDeletedEvent)
        assert deleted.filter_name == "old-Filter-1"
        assert [o.function_name for o in response.deleted_filters] == ["a"]

    @pytest.mark.asyncio
    async def test_response_to_dict(self, store, functions, fingerprints, reconciler):
        reconciler.reconcile.return_value = [
            ReconciliationOutcome("a", "/lg/one", 1, DeleteFilter("/lg/one", "old-Filter-1")),
        ]
        use_case = build(store, functions, fingerprints, reconciler)

        response = await use_case.execute(CheckForChangesRequest(force=True))

        assert response.to_dict() == {
            "skipped": False,
            "reasons": ["deployment forced"],
            "access_denied": False,
            "remote_hashes": [],
            "local_hashes": [],
            "deleted_filters": [
                {"function": "a", "log_group": "/lg/one", "filter": "old-Filter-1"}
            ],
        }

    @pytest.mark.asyncio
    async def test_mismatch_dict_names_both_hash_sets(
        self, store, functions, fingerprints, reconciler
    ):
        fingerprints.fingerprint.return_value = LocalFingerprints(
            template_hash="T", artifact_hashes=("B",)
        )
        use_case = build(store, functions, fingerprints, reconciler)

        response = await use_case.execute(CheckForChangesRequest())

        data = response.to_dict()
        assert data["reasons"] == ["local and remote hashes differ"]
        assert data["remote_hashes"] == ["A", "T"]
        assert data["local_hashes"] == ["B", "T"]
