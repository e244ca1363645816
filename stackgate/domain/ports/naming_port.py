"""
Naming Port

Architectural Intent:
- Pure naming conventions the check depends on (stack names, logical ids)
- Uses Protocol for structural typing (no inheritance needed)
- Implemented by ServerlessNaming
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class NamingPort(Protocol):

    def stack_name(self, service: str, stage: str) -> str:
        """CloudFormation stack name of a service stage."""
        ...

    def cloudwatch_log_logical_id(self, function_name: str, serial: int) -> str:
        """Logical id of the n-th cloudwatchLog subscription of a function."""
        ...
