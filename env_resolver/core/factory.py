"""
Resolver Factory - Wires the resolver to its concrete collaborators.

Serves as the entry point for both CLI and API to obtain a resolver. A new
resolver is created per request so that resolution state never leaks between
invocations.
"""

from typing import Optional

from env_resolver.catalog.client import BackstageCatalogClient
from env_resolver.config import Settings, settings as default_settings
from env_resolver.providers.aws.credentials import StsCredentialBroker
from env_resolver.providers.aws.parameter_store import SsmParameterStore
from env_resolver.resolver import EnvironmentResolver


def create_resolver(settings: Optional[Settings] = None) -> EnvironmentResolver:
    """
    Create an EnvironmentResolver backed by Backstage, STS and SSM.

    Args:
        settings: Optional settings override (defaults to environment-loaded settings)

    Returns:
        EnvironmentResolver ready to resolve one environment
    """
    settings = settings or default_settings

    catalog = BackstageCatalogClient(
        base_url=settings.CATALOG_BASE_URL,
        timeout=settings.CATALOG_TIMEOUT_SECONDS,
    )
    broker = StsCredentialBroker(
        role_name_template=settings.ROLE_NAME_TEMPLATE,
        duration_seconds=settings.SESSION_DURATION_SECONDS,
    )

    return EnvironmentResolver(catalog, broker, SsmParameterStore())
