"""
AWS SDK client initialization.

Centralizes boto3 client creation so that every client the resolver uses
shares the same timeout and retry configuration, and so that tests can swap
in mocked clients in one place.

Usage:
    from env_resolver.providers.aws.clients import create_aws_client

    ssm = create_aws_client("ssm", region="eu-central-1", credentials=bundle)
"""

from typing import Any, Optional

import boto3
from botocore.config import Config

from env_resolver.config import settings
from env_resolver.core.models import CredentialBundle


def build_client_config() -> Config:
    """Return the botocore Config shared by all resolver clients."""
    return Config(
        connect_timeout=settings.AWS_CONNECT_TIMEOUT_SECONDS,
        read_timeout=settings.AWS_READ_TIMEOUT_SECONDS,
        retries={"max_attempts": settings.AWS_MAX_ATTEMPTS, "mode": "standard"},
    )


def create_aws_client(
    service: str,
    region: str,
    credentials: Optional[CredentialBundle] = None
) -> Any:
    """
    Create a boto3 client for one service.

    Args:
        service: boto3 service name (e.g. "sts", "ssm")
        region: AWS region (e.g. "us-east-1")
        credentials: Provider-scoped credentials. When omitted the default
            boto3 credential chain is used (environment, profile, instance role).

    Returns:
        A configured boto3 client.
    """
    return _create_session(region, credentials).client(service, config=build_client_config())


def _create_session(region: str, credentials: Optional[CredentialBundle] = None) -> boto3.Session:
    """
    Create a boto3 session for one client.

    Each client gets its own session. boto3 sessions are not thread-safe
    and request handlers run in a threadpool.
    """
    session_kwargs = {"region_name": region}

    if credentials is not None:
        session_kwargs["aws_access_key_id"] = credentials.access_key_id
        session_kwargs["aws_secret_access_key"] = credentials.secret_access_key
        session_kwargs["aws_session_token"] = credentials.session_token

    return boto3.Session(**session_kwargs)
