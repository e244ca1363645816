"""
Deployment Check DTOs

Architectural Intent:
- Data Transfer Objects for the check-for-changes use case boundary
- Decouples the CLI representation from the domain model
"""

from dataclasses import dataclass, field
from typing import Any

from stackgate.domain.events.event_base import DomainEvent
from stackgate.domain.value_objects.evaluation_result import EvaluationResult
from stackgate.domain.value_objects.subscription_filter import ReconciliationOutcome


@dataclass(frozen=True)
class CheckForChangesRequest:
    force: bool = False


@dataclass(frozen=True)
class CheckForChangesResponse:
    evaluation: EvaluationResult
    reconciliation: tuple[ReconciliationOutcome, ...] = ()
    events: tuple[DomainEvent, ...] = ()

    @property
    def skipped(self) -> bool:
        return self.evaluation.skipped

    @property
    def deleted_filters(self) -> list[ReconciliationOutcome]:
        return [o for o in self.reconciliation if o.deleted]

    def to_dict(self) -> dict[str, Any]:
        return {
            "skipped": self.skipped,
            "reasons": self.evaluation.reasons,
            "access_denied": self.evaluation.access_denied,
            "remote_hashes": sorted(self.evaluation.remote_hashes),
            "local_hashes": sorted(self.evaluation.local_hashes),
            "deleted_filters": [
                {
                    "function": o.function_name,
                    "log_group": o.log_group_name,
                    "filter": o.action.filter_name,
                }
                for o in self.deleted_filters
            ],
        }
