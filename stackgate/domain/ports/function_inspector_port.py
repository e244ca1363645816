"""
Function Inspector Port

Architectural Intent:
- Port interface for reading the current state of deployed compute functions
- Implemented by LambdaAdapter
"""

from abc import ABC, abstractmethod
from datetime import datetime


class FunctionInspectorPort(ABC):

    @abstractmethod
    async def get_last_modified(self, physical_name: str) -> datetime:
        """
        Returns when the function was last modified.

        Raises FunctionAccessDenied, FunctionNotFound or FunctionLookupFailed.
        """
        pass
