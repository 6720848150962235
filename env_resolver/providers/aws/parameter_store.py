"""
SSM Parameter Store resolver.

Looks up provider configuration values (VPC id, subnet lists, cluster ARN,
provisioning role ARN) with the provider-scoped credentials issued by the
credential broker. A fresh client is built per lookup because every
provider comes with its own credentials and region.
"""

from typing import Callable

from env_resolver.core.models import CredentialBundle
from env_resolver.logger import logger

from .clients import create_aws_client


class SsmParameterStore:
    """ParameterStore implementation backed by AWS Systems Manager."""

    def __init__(self, client_factory: Callable[..., object] = create_aws_client):
        self._client_factory = client_factory

    def get_parameter_value(
        self, region: str, credentials: CredentialBundle, path: str
    ) -> str:
        """
        Return the value of an SSM parameter.

        SecureString parameters are decrypted; StringList parameters are
        returned as their raw comma-separated value.

        Raises:
            botocore.exceptions.ClientError: e.g. ParameterNotFound, AccessDenied
            botocore.exceptions.BotoCoreError: On transport failures
        """
        logger.debug(f"Getting SSM parameter {path} in {region}")
        ssm = self._client_factory("ssm", region, credentials)
        response = ssm.get_parameter(Name=path, WithDecryption=True)
        return response["Parameter"]["Value"]
