"""
CloudWatch Logs Adapter

Architectural Intent:
- Infrastructure adapter implementing LogSubscriptionPort
- Any describe failure is reported as SubscriptionProbeFailed; the
  reconciler decides that this means "nothing to reconcile"
- Deleting from a log group or filter that no longer exists is reported as
  LogGroupNotFound so reruns stay idempotent
"""

import asyncio
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from stackgate.domain.errors import (
    LogGroupNotFound,
    SubscriptionDeleteFailed,
    SubscriptionProbeFailed,
)
from stackgate.domain.ports.log_subscription_port import LogSubscriptionPort
from stackgate.domain.value_objects.subscription_filter import SubscriptionFilter
from stackgate.infrastructure.adapters.errors import error_code, error_message

logger = logging.getLogger(__name__)


class CloudWatchLogsAdapter(LogSubscriptionPort):
    def __init__(self, client: Any):
        self._client = client

    async def describe_subscription_filters(
        self, log_group_name: str
    ) -> list[SubscriptionFilter]:
        def _describe():
            try:
                response = self._client.describe_subscription_filters(
                    logGroupName=log_group_name
                )
            except ClientError as e:
                raise SubscriptionProbeFailed(log_group_name, error_message(e)) from e
            except BotoCoreError as e:
                raise SubscriptionProbeFailed(log_group_name, str(e)) from e

            return [
                SubscriptionFilter(
                    log_group_name=log_group_name,
                    filter_name=item.get("filterName", ""),
                    destination_arn=item.get("destinationArn", ""),
                )
                for item in response.get("subscriptionFilters", [])
            ]

        logger.debug("Logs describe_subscription_filters (logGroupName=%s)", log_group_name)
        return await asyncio.get_event_loop().run_in_executor(None, _describe)

    async def delete_subscription_filter(
        self, log_group_name: str, filter_name: str
    ) -> None:
        def _delete():
            try:
                self._client.delete_subscription_filter(
                    logGroupName=log_group_name, filterName=filter_name
                )
            except ClientError as e:
                if error_code(e) == "ResourceNotFoundException":
                    raise LogGroupNotFound(log_group_name) from e
                raise SubscriptionDeleteFailed(
                    log_group_name, filter_name, error_message(e)
                ) from e
            except BotoCoreError as e:
                raise SubscriptionDeleteFailed(log_group_name, filter_name, str(e)) from e

        logger.debug(
            "Logs delete_subscription_filter (logGroupName=%s, filterName=%s)",
            log_group_name,
            filter_name,
        )
        await asyncio.get_event_loop().run_in_executor(None, _delete)
