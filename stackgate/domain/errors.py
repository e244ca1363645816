"""
Domain Errors

Architectural Intent:
- Single exception hierarchy for everything the deployment check can raise
- Adapters translate provider errors (botocore ClientError) into these types
  so the domain and application layers never inspect raw AWS error payloads
- Fatal vs. degradable is decided by the caller, not by the error type

Taxonomy:
- StoreNotFound: deployment bucket missing, needs operator intervention
- MetadataFetchFailed: remote object metadata unreadable, evaluation aborts
- FunctionAccessDenied / FunctionNotFound / FunctionLookupFailed: degrade to
  "modification unknown" during the function scan
- SubscriptionProbeFailed: treated as "no filters" by the reconciler
- LogGroupNotFound: deletion target vanished, treated as already reconciled
- SubscriptionDeleteFailed: propagates and blocks the deployment
"""

from typing import Any, Optional


class StackgateError(Exception):
    """Base class for all stackgate errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class StoreNotFound(StackgateError):
    """The deployment bucket does not exist."""

    def __init__(self, bucket: str, stack_name: Optional[str] = None) -> None:
        self.bucket = bucket
        self.stack_name = stack_name
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        message = f'The deployment bucket "{self.bucket}" does not exist.'
        if self.stack_name:
            message += (
                " Create it manually if you want to reuse the CloudFormation"
                f' stack "{self.stack_name}", or delete the stack if it is'
                " no longer required."
            )
        return message


class MetadataFetchFailed(StackgateError):
    def __init__(self, bucket: str, key: str, reason: str = "") -> None:
        self.bucket = bucket
        self.key = key
        self.reason = reason
        super().__init__(
            f"Could not read metadata of s3://{bucket}/{key}: {reason or 'unknown error'}"
        )


class FunctionLookupFailed(StackgateError):
    def __init__(self, function_name: str, reason: str = "") -> None:
        self.function_name = function_name
        self.reason = reason
        super().__init__(
            f"Could not read function {function_name}: {reason or 'unknown error'}"
        )


class FunctionAccessDenied(FunctionLookupFailed):
    """lambda:GetFunction was rejected with a 403."""


class FunctionNotFound(FunctionLookupFailed):
    """The function has never been deployed."""


class SubscriptionProbeFailed(StackgateError):
    def __init__(self, log_group_name: str, reason: str = "") -> None:
        self.log_group_name = log_group_name
        self.reason = reason
        super().__init__(
            f"Could not describe subscription filters of {log_group_name}: "
            f"{reason or 'unknown error'}"
        )


class LogGroupNotFound(StackgateError):
    def __init__(self, log_group_name: str) -> None:
        self.log_group_name = log_group_name
        super().__init__(f"Log group {log_group_name} does not exist")


class SubscriptionDeleteFailed(StackgateError):
    def __init__(self, log_group_name: str, filter_name: str, reason: str = "") -> None:
        self.log_group_name = log_group_name
        self.filter_name = filter_name
        self.reason = reason
        super().__init__(
            f"Could not delete subscription filter {filter_name} of "
            f"{log_group_name}: {reason or 'unknown error'}"
        )


class ServiceDefinitionError(StackgateError):
    """The service state file is missing or malformed."""
