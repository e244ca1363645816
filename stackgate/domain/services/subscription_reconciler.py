"""
Log-Subscription Reconciler

Architectural Intent:
- CloudWatch Logs allows one subscription filter per log group, and
  CloudFormation creates the replacement filter before deleting the old
  one. A cloudwatchLog event pointing at a log group that already carries
  a foreign filter therefore fails mid-deployment.
- This service deletes such stale filters ahead of the deployment.

Domain Logic:
- Each (function, cloudwatchLog event) pair is checked concurrently
- Expected destination: arn:{partition}:lambda:{region}:{account}:function:{name}
- Expected logical id: naming.cloudwatch_log_logical_id(function, serial)
- Existing filter matching both -> NoOp, otherwise DeleteFilter
- Describe failures (log group not created yet) -> NoOp
- Describe results are cached per log group for one reconcile() run;
  concurrent pairs sharing a log group share one in-flight request
"""

from __future__ import annotations
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from stackgate.domain.entities.service_definition import (
    FunctionDefinition,
    LogSubscription,
    ServiceDefinition,
)
from stackgate.domain.errors import LogGroupNotFound, SubscriptionProbeFailed
from stackgate.domain.ports.account_port import AccountInfo, AccountPort
from stackgate.domain.ports.log_subscription_port import LogSubscriptionPort
from stackgate.domain.ports.naming_port import NamingPort
from stackgate.domain.value_objects.subscription_filter import (
    DeleteFilter,
    NoOp,
    ReconciliationAction,
    ReconciliationOutcome,
    SubscriptionFilter,
)

logger = logging.getLogger(__name__)


def function_arn(account: AccountInfo, region: str, physical_name: str) -> str:
    return (
        f"arn:{account.partition}:lambda:{region}:{account.account_id}"
        f":function:{physical_name}"
    )


class _DescribeCache:
    """Per-run memo of describe_subscription_filters keyed by log group."""

    def __init__(
        self, describe: Callable[[str], Awaitable[list[SubscriptionFilter]]]
    ) -> None:
        self._describe = describe
        self._pending: dict[str, asyncio.Future] = {}

    async def get(self, log_group_name: str) -> list[SubscriptionFilter]:
        future = self._pending.get(log_group_name)
        if future is None:
            future = asyncio.ensure_future(self._describe(log_group_name))
            self._pending[log_group_name] = future
        # shield: one cancelled waiter must not cancel the shared lookup
        return await asyncio.shield(future)


class SubscriptionFilterReconciler:
    def __init__(
        self,
        log_subscriptions: LogSubscriptionPort,
        account: AccountPort,
        naming: NamingPort,
    ):
        self._logs = log_subscriptions
        self._account = account
        self._naming = naming

    def decide(
        self,
        existing: Optional[SubscriptionFilter],
        expected_arn: str,
        expected_logical_id: str,
    ) -> ReconciliationAction:
        if existing is None:
            return NoOp("log group has no subscription filter")

        if (
            existing.destination_arn == expected_arn
            and existing.logical_id == expected_logical_id
        ):
            return NoOp("subscription filter already up to date")

        return DeleteFilter(
            log_group_name=existing.log_group_name,
            filter_name=existing.filter_name,
        )

    async def _reconcile_one(
        self,
        cache: _DescribeCache,
        account: AccountInfo,
        region: str,
        function_name: str,
        function: FunctionDefinition,
        subscription: LogSubscription,
    ) -> ReconciliationOutcome:
        log_group_name = subscription.log_group_name

        def outcome(action: ReconciliationAction) -> ReconciliationOutcome:
            return ReconciliationOutcome(
                function_name=function_name,
                log_group_name=log_group_name,
                serial=subscription.serial,
                action=action,
            )

        try:
            filters = await cache.get(log_group_name)
        except SubscriptionProbeFailed as e:
            # Log group added to the service but not created yet
            logger.debug("Skipping %s: %s", log_group_name, e)
            return outcome(NoOp("subscription filters could not be described"))

        action = self.decide(
            filters[0] if filters else None,
            expected_arn=function_arn(account, region, function.physical_name),
            expected_logical_id=self._naming.cloudwatch_log_logical_id(
                function_name, subscription.serial
            ),
        )

        if isinstance(action, DeleteFilter):
            logger.info(
                "Deleting subscription filter %s of log group %s (function %s)",
                action.filter_name,
                action.log_group_name,
                function_name,
            )
            try:
                await self._logs.delete_subscription_filter(
                    action.log_group_name, action.filter_name
                )
            except LogGroupNotFound:
                return outcome(NoOp("subscription filter already removed"))

        return outcome(action)

    async def reconcile(self, service: ServiceDefinition) -> list[ReconciliationOutcome]:
        """
        Delete every stale subscription filter that would collide with a
        filter this deployment creates.

        Deletion failures other than an already-missing log group propagate.
        """
        pairs = [
            (name, service.get_function(name), subscription)
            for name in service.get_all_functions()
            for subscription in service.get_function(name).log_subscriptions()
        ]
        if not pairs:
            return []

        region = self._account.get_region()
        account = await self._account.get_account_info()
        cache = _DescribeCache(self._logs.describe_subscription_filters)

        outcomes = await asyncio.gather(
            *[
                self._reconcile_one(cache, account, region, name, function, subscription)
                for name, function, subscription in pairs
            ]
        )
        return list(outcomes)
