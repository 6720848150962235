"""
Core abstractions for the environment provider resolver.

Modules:
    protocols: Collaborator interfaces (EntityCatalog, CredentialBroker, ParameterStore)
    context: ResolutionContext carrying the caller's input and authorization
    models: Entities, provider metadata, descriptors and resolution state
    exceptions: Custom exception types for resolution failures
    factory: Builds a resolver wired to Backstage, STS and SSM

Usage:
    from env_resolver.core import ResolutionContext
    from env_resolver.core.factory import create_resolver

    resolver = create_resolver()
    result = resolver.resolve(ResolutionContext("awsenvironment:dev", identity, token))
"""

from .protocols import CredentialBroker, EntityCatalog, ParameterStore
from .context import ResolutionContext
from .models import (
    CredentialBundle,
    Entity,
    EntityRelation,
    ProviderDescriptor,
    ProviderMetadata,
    ResolutionState,
    ResolvedEnvironment,
)
from .exceptions import (
    CatalogError,
    CredentialFailureError,
    EnvironmentNotFoundError,
    InvalidInputError,
    MissingConfigurationError,
    ParameterResolutionError,
    ResolutionError,
)

__all__ = [
    # Protocols
    "CredentialBroker",
    "EntityCatalog",
    "ParameterStore",
    # Context
    "ResolutionContext",
    # Models
    "CredentialBundle",
    "Entity",
    "EntityRelation",
    "ProviderDescriptor",
    "ProviderMetadata",
    "ResolutionState",
    "ResolvedEnvironment",
    # Exceptions
    "CatalogError",
    "CredentialFailureError",
    "EnvironmentNotFoundError",
    "InvalidInputError",
    "MissingConfigurationError",
    "ParameterResolutionError",
    "ResolutionError",
]
