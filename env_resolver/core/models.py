"""
Data model for environment provider resolution.

All structures here are invocation-scoped: they are created during one
resolution call and discarded once the response is returned or the call
fails. Nothing is written to durable storage.

Catalog side:
    Entity / EntityRelation - raw records as returned by the entity catalog

Resolution side:
    ProviderMetadata - typed deployment parameters extracted from a provider entity
    CredentialBundle - ephemeral credentials scoped to one provider
    ProviderDescriptor - fully hydrated provider emitted to the caller
    ResolvedEnvironment - environment facts plus the ordered descriptor list
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from env_resolver.constants import DEFAULT_NAMESPACE


@dataclass(frozen=True)
class EntityRelation:
    """A directed edge from one catalog entity to another."""

    type: str
    target_ref: str


@dataclass
class Entity:
    """
    A catalog entity as returned by the entity catalog.

    Attributes:
        kind: Entity kind (e.g. "AWSEnvironment")
        namespace: Catalog namespace, "default" unless stated otherwise
        name: Entity name (also present in metadata["name"])
        metadata: Arbitrary string-keyed metadata declared on the entity
        relations: Outgoing relations in catalog order
    """

    kind: str
    namespace: str
    name: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    relations: List[EntityRelation] = field(default_factory=list)

    @property
    def ref(self) -> str:
        """Return the entity reference in "kind:namespace/name" form."""
        return f"{self.kind.lower()}:{self.namespace}/{self.name}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entity":
        """
        Build an Entity from the catalog's JSON representation.

        Example:
            >>> Entity.from_dict({
            ...     "kind": "AWSEnvironment",
            ...     "metadata": {"name": "dev", "namespace": "default"},
            ...     "relations": [{"type": "dependsOn", "targetRef": "awsenvironmentprovider:default/p1"}],
            ... })
        """
        metadata = dict(data.get("metadata") or {})
        relations = [
            EntityRelation(type=rel.get("type", ""), target_ref=rel.get("targetRef", ""))
            for rel in data.get("relations") or []
        ]
        return cls(
            kind=data.get("kind", ""),
            namespace=metadata.get("namespace") or DEFAULT_NAMESPACE,
            name=metadata.get("name", ""),
            metadata=metadata,
            relations=relations,
        )


@dataclass(frozen=True)
class ProviderMetadata:
    """
    Deployment parameters for one environment provider.

    Built once per provider from catalog metadata and never mutated. Paths are
    parameter store paths, not values; values are resolved later with
    provider-scoped credentials.
    """

    env_name: str
    env_ref: str
    provider_name: str
    provider_type: str
    prefix: str
    account_id: str
    region: str
    role_path: str
    vpc_path: str
    public_subnets_path: str
    private_subnets_path: str
    cluster_path: str


@dataclass(frozen=True)
class Extracted:
    """Extraction succeeded with typed provider metadata."""

    metadata: ProviderMetadata


@dataclass(frozen=True)
class MissingField:
    """Extraction failed because a baseline catalog field is absent."""

    entity_ref: str
    field_name: str


ExtractionResult = Union[Extracted, MissingField]


@dataclass(frozen=True)
class CredentialBundle:
    """
    Temporary AWS credentials for a single provider.

    Requested fresh per provider and never cached or persisted.
    """

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: Optional[datetime] = None

    def __repr__(self) -> str:
        # Secrets must never end up in logs
        return f"CredentialBundle(access_key_id={self.access_key_id!r}, expiration={self.expiration!r})"


@dataclass
class ProviderDescriptor:
    """A fully hydrated provider, merging catalog metadata with resolved values."""

    provider_name: str
    provider_type: str
    prefix: str
    account_id: str
    region: str
    vpc_id: str
    public_subnets: List[str]
    private_subnets: List[str]
    assumed_role_arn: str
    cluster_arn: str = ""

    def to_output(self) -> Dict[str, Any]:
        """Return the descriptor in the action's output format."""
        return {
            "envProviderName": self.provider_name,
            "envProviderType": self.provider_type,
            "envProviderPrefix": self.prefix,
            "accountId": self.account_id,
            "region": self.region,
            "vpcId": self.vpc_id,
            "publicSubnets": list(self.public_subnets),
            "privateSubnets": list(self.private_subnets),
            "clusterArn": self.cluster_arn,
            "assumedRoleArn": self.assumed_role_arn,
        }


@dataclass
class ResolvedEnvironment:
    """Environment facts plus the ordered list of resolved providers."""

    env_name: str
    env_short_name: str
    env_ref: str
    env_deploy_manual_approval: bool
    env_providers: List[ProviderDescriptor] = field(default_factory=list)

    def to_output(self) -> Dict[str, Any]:
        """Return the resolution result in the action's output format."""
        return {
            "envName": self.env_name,
            "envShortName": self.env_short_name,
            "envRef": self.env_ref,
            "envDeployManualApproval": self.env_deploy_manual_approval,
            "envProviders": [provider.to_output() for provider in self.env_providers],
        }


class ResolutionState(str, Enum):
    """Lifecycle of a single resolution invocation."""

    INIT = "INIT"
    ENTITY_FETCHED = "ENTITY_FETCHED"
    RELATIONS_FILTERED = "RELATIONS_FILTERED"
    VALIDATED = "VALIDATED"
    CREDENTIALED = "CREDENTIALED"
    PARAMETERIZED = "PARAMETERIZED"
    EMITTED = "EMITTED"
    DONE = "DONE"
    FAILED = "FAILED"
