"""
Deployment Check Events

- DeploymentSkippedEvent: local and remote state are identical
- DeploymentRequiredEvent: at least one gate failed, reasons attached
- SubscriptionFilterDeletedEvent: a stale filter was removed ahead of deploy

aggregate_id is the CloudFormation stack name.
"""

from dataclasses import dataclass, field
from typing import Any

from stackgate.domain.events.event_base import DomainEvent


@dataclass(frozen=True)
class DeploymentSkippedEvent(DomainEvent):
    object_count: int = 0


@dataclass(frozen=True)
class DeploymentRequiredEvent(DomainEvent):
    reasons: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["reasons"] = list(self.reasons)
        return data


@dataclass(frozen=True)
class SubscriptionFilterDeletedEvent(DomainEvent):
    function_name: str = ""
    log_group_name: str = ""
    filter_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "function_name": self.function_name,
                "log_group_name": self.log_group_name,
                "filter_name": self.filter_name,
            }
        )
        return data
