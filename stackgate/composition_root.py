"""
Composition Root

Architectural Intent:
- Dependency injection composition root for stackgate
- Single place where all adapters, services and use cases are wired together
- No adapter instantiation should occur outside this module

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- boto3 clients can be injected, which is how tests run against moto
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from stackgate.application.use_cases.check_for_changes import CheckForChanges
from stackgate.domain.entities.service_definition import ServiceDefinition
from stackgate.domain.services.fingerprint_engine import FingerprintEngine
from stackgate.domain.services.naming import ServerlessNaming
from stackgate.domain.services.necessity_evaluator import NecessityEvaluator
from stackgate.domain.services.remote_state import RemoteStateFetcher
from stackgate.domain.services.subscription_reconciler import (
    SubscriptionFilterReconciler,
)
from stackgate.infrastructure.adapters.clients import create_aws_clients
from stackgate.infrastructure.adapters.lambda_adapter import LambdaAdapter
from stackgate.infrastructure.adapters.logs_adapter import CloudWatchLogsAdapter
from stackgate.infrastructure.adapters.s3_adapter import S3Adapter
from stackgate.infrastructure.adapters.sts_adapter import STSAccountAdapter
from stackgate.infrastructure.config import StackgateConfig
from stackgate.infrastructure.event_bus import EventBus


@dataclass
class StackgateContainer:
    """DI container holding all wired dependencies."""

    s3_adapter: S3Adapter
    lambda_adapter: LambdaAdapter
    logs_adapter: CloudWatchLogsAdapter
    account_adapter: STSAccountAdapter
    event_bus: EventBus
    check_for_changes: CheckForChanges


def create_container(
    config: StackgateConfig,
    service: ServiceDefinition,
    clients: Optional[Dict[str, Any]] = None,
) -> StackgateContainer:
    """Create and wire all dependencies for one deployment check."""
    region = service.region
    if clients is None:
        clients = create_aws_clients(
            region=region,
            profile=config.aws.profile or None,
            max_attempts=config.aws.max_attempts,
        )

    s3_adapter = S3Adapter(clients["s3"])
    lambda_adapter = LambdaAdapter(clients["lambda"])
    logs_adapter = CloudWatchLogsAdapter(clients["logs"])
    account_adapter = STSAccountAdapter(clients["sts"], region)
    event_bus = EventBus()
    naming = ServerlessNaming()

    check_for_changes = CheckForChanges(
        service=service,
        remote_state=RemoteStateFetcher(s3_adapter, lambda_adapter),
        fingerprints=FingerprintEngine(),
        evaluator=NecessityEvaluator(),
        reconciler=SubscriptionFilterReconciler(logs_adapter, account_adapter, naming),
        naming=naming,
        packaging_dir=config.packaging_dir_path,
        event_bus=event_bus,
    )

    return StackgateContainer(
        s3_adapter=s3_adapter,
        lambda_adapter=lambda_adapter,
        logs_adapter=logs_adapter,
        account_adapter=account_adapter,
        event_bus=event_bus,
        check_for_changes=check_for_changes,
    )
