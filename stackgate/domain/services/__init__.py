"""
Domain Services Package

Architectural Intent:
- Contains domain services implementing the deployment check logic
- Services depend on ports only, never on adapters
"""

from stackgate.domain.services.remote_state import RemoteStateFetcher
from stackgate.domain.services.fingerprint_engine import FingerprintEngine
from stackgate.domain.services.necessity_evaluator import NecessityEvaluator
from stackgate.domain.services.subscription_reconciler import (
    SubscriptionFilterReconciler,
)
from stackgate.domain.services.naming import ServerlessNaming

__all__ = [
    "RemoteStateFetcher",
    "FingerprintEngine",
    "NecessityEvaluator",
    "SubscriptionFilterReconciler",
    "ServerlessNaming",
]
