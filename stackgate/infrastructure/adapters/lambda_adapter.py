"""
Lambda Adapter

Architectural Intent:
- Infrastructure adapter implementing FunctionInspectorPort on AWS Lambda
- Translates GetFunction failures into the domain's function errors
"""

import asyncio
import logging
from datetime import datetime
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from stackgate.domain.errors import (
    FunctionAccessDenied,
    FunctionLookupFailed,
    FunctionNotFound,
)
from stackgate.domain.ports.function_inspector_port import FunctionInspectorPort
from stackgate.infrastructure.adapters.errors import (
    error_code,
    error_message,
    status_code,
)

logger = logging.getLogger(__name__)

# Configuration.LastModified, e.g. 2024-05-01T09:30:12.345+0000
LAST_MODIFIED_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"


def parse_last_modified(value: str) -> datetime:
    try:
        return datetime.strptime(value, LAST_MODIFIED_FORMAT)
    except ValueError:
        return datetime.fromisoformat(value)


class LambdaAdapter(FunctionInspectorPort):
    def __init__(self, client: Any):
        self._client = client

    async def get_last_modified(self, physical_name: str) -> datetime:
        def _get():
            try:
                response = self._client.get_function(FunctionName=physical_name)
            except ClientError as e:
                if status_code(e) == 403 or error_code(e) == "AccessDeniedException":
                    raise FunctionAccessDenied(physical_name, error_message(e)) from e
                if error_code(e) == "ResourceNotFoundException":
                    raise FunctionNotFound(physical_name, error_message(e)) from e
                raise FunctionLookupFailed(physical_name, error_message(e)) from e
            except BotoCoreError as e:
                raise FunctionLookupFailed(physical_name, str(e)) from e
            return parse_last_modified(response["Configuration"]["LastModified"])

        logger.debug("Lambda get_function (name=%s)", physical_name)
        return await asyncio.get_event_loop().run_in_executor(None, _get)
