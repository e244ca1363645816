"""
STS Account Adapter

Architectural Intent:
- Infrastructure adapter implementing AccountPort
- Account id and partition come from GetCallerIdentity; the region is the
  one the service is deployed to, fixed at construction time
"""

import asyncio
import logging
from typing import Any

from stackgate.domain.ports.account_port import AccountInfo, AccountPort

logger = logging.getLogger(__name__)


def partition_from_arn(arn: str) -> str:
    # arn:<partition>:sts::<account>:...
    parts = arn.split(":")
    return parts[1] if len(parts) > 1 and parts[1] else "aws"


class STSAccountAdapter(AccountPort):
    def __init__(self, client: Any, region: str):
        self._client = client
        self._region = region

    def get_region(self) -> str:
        return self._region

    async def get_account_info(self) -> AccountInfo:
        logger.debug("STS get_caller_identity")
        identity = await asyncio.get_event_loop().run_in_executor(
            None, self._client.get_caller_identity
        )
        return AccountInfo(
            account_id=identity["Account"],
            partition=partition_from_arn(identity.get("Arn", "")),
        )
