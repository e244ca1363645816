"""
Subscription Filter Value Objects

Architectural Intent:
- Describes an existing CloudWatch Logs subscription filter and the action
  the reconciler decided for it
- ReconciliationAction is a sum type: NoOp | DeleteFilter
"""

from dataclasses import dataclass
from typing import Union


def logical_id_from_filter_name(filter_name: str) -> str:
    """
    Recover the CloudFormation logical id from a generated filter name.

    Filter names look like {stack name}-{logical id}-{random suffix}. The
    stack name may itself contain hyphens, so the id is taken positionally
    as the second-to-last segment.
    """
    segments = filter_name.split("-")
    if len(segments) < 2:
        return ""
    return segments[-2]


@dataclass(frozen=True)
class SubscriptionFilter:
    log_group_name: str
    filter_name: str
    destination_arn: str

    @property
    def logical_id(self) -> str:
        return logical_id_from_filter_name(self.filter_name)


@dataclass(frozen=True)
class NoOp:
    reason: str = ""


@dataclass(frozen=True)
class DeleteFilter:
    log_group_name: str
    filter_name: str


ReconciliationAction = Union[NoOp, DeleteFilter]


@dataclass(frozen=True)
class ReconciliationOutcome:
    """What happened to one function/log-subscription pair."""
    function_name: str
    log_group_name: str
    serial: int
    action: ReconciliationAction

    @property
    def deleted(self) -> bool:
        return isinstance(self.action, DeleteFilter)
