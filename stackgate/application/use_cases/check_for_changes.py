"""
Check For Changes Use Case

Architectural Intent:
- Runs once per deployment attempt, before anything is uploaded
- Decides whether the deployment can be skipped and, when it cannot,
  removes subscription filters that would break it
- Parallelizes independent remote reads where possible

Flow:
1. force -> skip evaluation, reconcile
2. list latest generation
3. object metadata + function modification times, concurrently
4. local fingerprints, then the necessity verdict
5. verdict "deploy" -> reconcile subscription filters
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from stackgate.application.dtos.check_dtos import (
    CheckForChangesRequest,
    CheckForChangesResponse,
)
from stackgate.domain.entities.service_definition import ServiceDefinition
from stackgate.domain.events.check_events import (
    DeploymentRequiredEvent,
    DeploymentSkippedEvent,
    SubscriptionFilterDeletedEvent,
)
from stackgate.domain.events.event_base import DomainEvent
from stackgate.domain.ports.event_bus_port import EventBusPort
from stackgate.domain.ports.naming_port import NamingPort
from stackgate.domain.services.fingerprint_engine import FingerprintEngine
from stackgate.domain.services.necessity_evaluator import NecessityEvaluator
from stackgate.domain.services.remote_state import RemoteStateFetcher
from stackgate.domain.services.subscription_reconciler import (
    SubscriptionFilterReconciler,
)
from stackgate.domain.value_objects.evaluation_result import EvaluationResult
from stackgate.domain.value_objects.subscription_filter import ReconciliationOutcome

logger = logging.getLogger(__name__)


class CheckForChanges:
    def __init__(
        self,
        service: ServiceDefinition,
        remote_state: RemoteStateFetcher,
        fingerprints: FingerprintEngine,
        evaluator: NecessityEvaluator,
        reconciler: SubscriptionFilterReconciler,
        naming: NamingPort,
        packaging_dir: Path,
        event_bus: Optional[EventBusPort] = None,
    ):
        self.service = service
        self.remote_state = remote_state
        self.fingerprints = fingerprints
        self.evaluator = evaluator
        self.reconciler = reconciler
        self.naming = naming
        self.packaging_dir = packaging_dir
        self.event_bus = event_bus

    @property
    def stack_name(self) -> str:
        return self.naming.stack_name(self.service.service, self.service.stage)

    async def evaluate(self) -> EvaluationResult:
        bucket = self.service.deployment_bucket
        generation = await self.remote_state.list_latest_generation(
            bucket, self.service.artifact_prefix, stack_name=self.stack_name
        )

        objects, earliest = await asyncio.gather(
            self.remote_state.fetch_metadata(bucket, generation),
            self.remote_state.earliest_function_modification(self.service),
        )

        local = await self.fingerprints.fingerprint(self.service, self.packaging_dir)
        return self.evaluator.evaluate(objects, earliest, local)

    async def execute(self, request: CheckForChangesRequest) -> CheckForChangesResponse:
        if request.force:
            logger.info("Deployment forced, skipping change detection")
            evaluation = EvaluationResult.forced_deploy()
        else:
            evaluation = await self.evaluate()

        reconciliation: list[ReconciliationOutcome] = []
        if evaluation.should_deploy:
            # only reconcile when a deployment is going to happen
            reconciliation = await self.reconciler.reconcile(self.service)

        events = self._collect_events(evaluation, reconciliation)
        if self.event_bus is not None:
            await self.event_bus.publish(list(events))

        return CheckForChangesResponse(
            evaluation=evaluation,
            reconciliation=tuple(reconciliation),
            events=events,
        )

    def _collect_events(
        self,
        evaluation: EvaluationResult,
        reconciliation: list[ReconciliationOutcome],
    ) -> tuple[DomainEvent, ...]:
        stack = self.stack_name
        events: list[DomainEvent] = []

        if evaluation.skipped:
            events.append(
                DeploymentSkippedEvent(
                    aggregate_id=stack, object_count=len(evaluation.remote_hashes)
                )
            )
        else:
            events.append(
                DeploymentRequiredEvent(
                    aggregate_id=stack, reasons=tuple(evaluation.reasons)
                )
            )

        for outcome in reconciliation:
            if outcome.deleted:
                events.append(
                    SubscriptionFilterDeletedEvent(
                        aggregate_id=stack,
                        function_name=outcome.function_name,
                        log_group_name=outcome.log_group_name,
                        filter_name=outcome.action.filter_name,
                    )
                )

        return tuple(events)
