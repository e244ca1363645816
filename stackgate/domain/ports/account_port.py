"""
Account Port

Architectural Intent:
- Port interface for the caller's account identity and target region
- Implemented by STSAccountAdapter
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AccountInfo:
    account_id: str
    partition: str = "aws"


class AccountPort(ABC):

    @abstractmethod
    async def get_account_info(self) -> AccountInfo:
        pass

    @abstractmethod
    def get_region(self) -> str:
        pass
