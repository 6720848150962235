"""
STS-backed credential broker.

Assumes the provider's operations role in the target account on behalf of
the calling user. The role name comes from a template so that different
platform conventions can be configured without code changes:

    ROLE_NAME_TEMPLATE = "{prefix}-{provider_name}-operations-role"
    -> arn:aws:iam::111111111111:role/opa-dev-ecs-operations-role

The caller's identity is recorded in the role session name and as a session
tag, so CloudTrail attributes every action taken with these credentials to
the user who requested them.
"""

import re
from typing import Callable, Optional

from env_resolver.config import settings
from env_resolver.core.models import CredentialBundle
from env_resolver.logger import logger

from .clients import create_aws_client

# STS RoleSessionName: 2-64 chars of [\w+=,.@-]
_SESSION_NAME_MAX = 64
_SESSION_NAME_INVALID = re.compile(r"[^a-zA-Z0-9+=,.@_-]")
# Session tag values: letters, digits, spaces and _.:/=+-@, at most 256 chars
_TAG_VALUE_MAX = 256
_TAG_VALUE_INVALID = re.compile(r"[^a-zA-Z0-9 _.:/=+@-]")


def build_session_name(identity: str) -> str:
    """
    Derive an STS role session name from a user entity reference.

    Example:
        >>> build_session_name("user:default/jane.doe")
        'opa-jane.doe'
    """
    name = identity.rsplit("/", 1)[-1] if identity else ""
    sanitized = _SESSION_NAME_INVALID.sub("", f"opa-{name}")
    return sanitized[:_SESSION_NAME_MAX] or "opa-session"


def build_role_arn(account_id: str, role_name: str) -> str:
    return f"arn:aws:iam::{account_id}:role/{role_name}"


class StsCredentialBroker:
    """
    CredentialBroker implementation using sts:AssumeRole.

    Attributes:
        role_name_template: Format string for the role to assume
        duration_seconds: Lifetime of the issued credentials
    """

    def __init__(
        self,
        role_name_template: Optional[str] = None,
        duration_seconds: Optional[int] = None,
        client_factory: Callable[..., object] = create_aws_client,
    ):
        self.role_name_template = role_name_template or settings.ROLE_NAME_TEMPLATE
        self.duration_seconds = duration_seconds or settings.SESSION_DURATION_SECONDS
        self._client_factory = client_factory

    def role_name_for(self, account_id: str, region: str, prefix: str, provider_name: str) -> str:
        role_name = self.role_name_template.format(
            prefix=prefix,
            provider_name=provider_name,
            account_id=account_id,
            region=region,
        )
        # An empty prefix would otherwise leave a leading separator
        return role_name.strip("-")

    def get_credentials(
        self,
        account_id: str,
        region: str,
        prefix: str,
        provider_name: str,
        identity: str,
    ) -> CredentialBundle:
        """
        Assume the provider's operations role for the calling identity.

        Returns:
            CredentialBundle with the temporary credentials.

        Raises:
            botocore.exceptions.ClientError: If STS denies the request
            botocore.exceptions.BotoCoreError: On transport failures
        """
        role_arn = build_role_arn(
            account_id, self.role_name_for(account_id, region, prefix, provider_name)
        )
        session_name = build_session_name(identity)
        logger.debug(f"Assuming role {role_arn} as session {session_name}")

        sts = self._client_factory("sts", region)
        response = sts.assume_role(
            RoleArn=role_arn,
            RoleSessionName=session_name,
            DurationSeconds=self.duration_seconds,
            Tags=[
                {
                    "Key": "requester",
                    "Value": _TAG_VALUE_INVALID.sub("", identity)[:_TAG_VALUE_MAX] or "unknown",
                },
            ],
        )

        creds = response["Credentials"]
        return CredentialBundle(
            access_key_id=creds["AccessKeyId"],
            secret_access_key=creds["SecretAccessKey"],
            session_token=creds["SessionToken"],
            expiration=creds.get("Expiration"),
        )
