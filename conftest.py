"""Global test configuration.

Shared fixtures for building services and faking AWS credentials so boto3
clients created under moto never reach a real account.
"""

import logging
from datetime import datetime, timezone

import pytest

from stackgate.domain.entities.service_definition import (
    FunctionDefinition,
    ServiceDefinition,
)


def ts(minute: int, hour: int = 12) -> datetime:
    """Timezone-aware timestamp on a fixed day, for readable test data."""
    return datetime(2024, 5, 1, hour, minute, tzinfo=timezone.utc)


def make_service(functions=None, **kwargs) -> ServiceDefinition:
    """Return a ServiceDefinition named my-service/dev with the given functions.

    functions maps function name -> list of events.
    """
    functions = functions if functions is not None else {"hello": []}
    defaults = dict(
        service="my-service",
        stage="dev",
        region="us-east-1",
        deployment_bucket="deploy-bucket",
        functions={
            name: FunctionDefinition(
                name=name,
                physical_name=f"my-service-dev-{name}",
                events=tuple(events),
            )
            for name, events in functions.items()
        },
        template={"Resources": {}},
    )
    defaults.update(kwargs)
    return ServiceDefinition(**defaults)


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture(autouse=True)
def reset_stackgate_logger():
    """configure_logging mutates the package logger; restore it after each test."""
    logger = logging.getLogger("stackgate")
    level, handlers = logger.level, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers
