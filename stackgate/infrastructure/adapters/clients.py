"""
AWS SDK client initialization.

Design Decision:
    Clients are created from one boto3.Session and returned as a dictionary
    rather than module-level variables. Adapters receive the client they
    need, so tests can hand them moto-backed or MagicMock clients.

Usage:
    clients = create_aws_clients(region="eu-central-1", profile="deploy")
    # clients["s3"], clients["lambda"], clients["logs"], clients["sts"]
"""

from typing import Any, Dict, Optional

import boto3
import botocore.config


def retry_config(max_attempts: int = 5) -> botocore.config.Config:
    """Shared retry policy; retrying is the SDK's job, not the adapters'."""
    return botocore.config.Config(
        retries={"max_attempts": max_attempts, "mode": "adaptive"}
    )


def create_aws_clients(
    region: str,
    profile: Optional[str] = None,
    max_attempts: int = 5,
) -> Dict[str, Any]:
    """
    Create the boto3 clients needed by the deployment check.

    Args:
        region: AWS region of the service (e.g. "us-east-1")
        profile: Named credentials profile, or None for the default chain
        max_attempts: Retry budget per request

    Returns:
        Dictionary mapping short service names to boto3 clients.
    """
    session = boto3.Session(profile_name=profile, region_name=region)
    config = retry_config(max_attempts)

    return {
        "s3": session.client("s3", config=config),
        "lambda": session.client("lambda", config=config),
        "logs": session.client("logs", config=config),
        "sts": session.client("sts", config=config),
    }
