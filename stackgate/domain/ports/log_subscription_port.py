"""
Log Subscription Port

Architectural Intent:
- Port interface for CloudWatch Logs subscription filters
- Implemented by CloudWatchLogsAdapter
"""

from abc import ABC, abstractmethod

from stackgate.domain.value_objects.subscription_filter import SubscriptionFilter


class LogSubscriptionPort(ABC):

    @abstractmethod
    async def describe_subscription_filters(
        self, log_group_name: str
    ) -> list[SubscriptionFilter]:
        """
        Lists the filters of a log group. Raises SubscriptionProbeFailed.
        """
        pass

    @abstractmethod
    async def delete_subscription_filter(
        self, log_group_name: str, filter_name: str
    ) -> None:
        """
        Deletes a filter. Raises LogGroupNotFound when the log group or filter
        is already gone, SubscriptionDeleteFailed otherwise.
        """
        pass
