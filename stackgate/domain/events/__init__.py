"""
Domain Events Package

Architectural Intent:
- Contains domain events and their base class
- Events are the primary mechanism for reporting check outcomes to callers
"""

from stackgate.domain.events.event_base import DomainEvent
from stackgate.domain.events.check_events import (
    DeploymentSkippedEvent,
    DeploymentRequiredEvent,
    SubscriptionFilterDeletedEvent,
)

__all__ = [
    "DomainEvent",
    "DeploymentSkippedEvent",
    "DeploymentRequiredEvent",
    "SubscriptionFilterDeletedEvent",
]
