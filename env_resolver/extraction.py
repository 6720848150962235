"""
Provider metadata extraction.

Turns raw catalog entities into typed ProviderMetadata records:

    environment entity --relations--> provider refs
    provider entities  --extract-->   Extracted(metadata) | MissingField(ref, field)
                       --filter-->    [ProviderMetadata, ...]

Entities missing a baseline field are dropped without raising. They never
reach the credential broker.
"""

from typing import Any, Dict, List, Optional

import env_resolver.constants as CONSTANTS
from env_resolver.catalog.refs import is_provider_ref
from env_resolver.core.models import (
    Entity,
    Extracted,
    ExtractionResult,
    MissingField,
    ProviderMetadata,
)
from env_resolver.logger import logger


def metadata_str(metadata: Dict[str, Any], key: str) -> str:
    """Return a metadata value as a string, or "" if it is absent or null."""
    value = metadata.get(key)
    if value is None:
        return ""
    return str(value)


def parse_approval_flag(value: Any) -> bool:
    """
    Parse the environment's manual-approval flag.

    Only the exact string "true" (or boolean True) enables approval; absent
    values and anything else default to False.

    Example:
        >>> parse_approval_flag("true")
        True
        >>> parse_approval_flag("TRUE")
        False
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return str(value) == "true"


def get_provider_refs(environment: Entity) -> List[str]:
    """
    Return the refs of the providers an environment depends on, in relation order.
    """
    return [
        relation.target_ref
        for relation in environment.relations
        if relation.type == CONSTANTS.RELATION_DEPENDS_ON and is_provider_ref(relation.target_ref)
    ]


def extract_provider_metadata(
    entity: Optional[Entity],
    env_name: str,
    env_ref: str,
    entity_ref: str = "",
) -> ExtractionResult:
    """
    Build ProviderMetadata for one provider entity.

    Args:
        entity: Provider entity, or None if the catalog did not return it
        env_name: Name of the owning environment
        env_ref: Reference of the owning environment
        entity_ref: Reference the entity was requested by, used in MissingField

    Returns:
        Extracted with the metadata, or MissingField naming the first absent
        baseline key.
    """
    if entity is None:
        return MissingField(entity_ref=entity_ref, field_name="entity")

    metadata = entity.metadata
    for key in CONSTANTS.PROVIDER_BASELINE_KEYS:
        if key not in metadata:
            return MissingField(entity_ref=entity_ref or entity.ref, field_name=key)

    vpc_path = metadata_str(metadata, CONSTANTS.PROVIDER_VPC_KEY)

    return Extracted(ProviderMetadata(
        env_name=env_name,
        env_ref=env_ref,
        provider_name=metadata_str(metadata, CONSTANTS.PROVIDER_NAME_KEY),
        provider_type=metadata_str(metadata, CONSTANTS.PROVIDER_TYPE_KEY).lower(),
        prefix=metadata_str(metadata, CONSTANTS.PROVIDER_PREFIX_KEY),
        account_id=metadata_str(metadata, CONSTANTS.PROVIDER_ACCOUNT_KEY),
        region=metadata_str(metadata, CONSTANTS.PROVIDER_REGION_KEY),
        role_path=metadata_str(metadata, CONSTANTS.PROVIDER_ROLE_KEY),
        vpc_path=vpc_path,
        public_subnets_path=f"{vpc_path}{CONSTANTS.PUBLIC_SUBNETS_SUFFIX}",
        private_subnets_path=f"{vpc_path}{CONSTANTS.PRIVATE_SUBNETS_SUFFIX}",
        cluster_path=metadata_str(metadata, CONSTANTS.PROVIDER_CLUSTER_KEY),
    ))


def extract_all(
    entities: List[Optional[Entity]],
    refs: List[str],
    env_name: str,
    env_ref: str,
) -> List[ProviderMetadata]:
    """
    Extract metadata for every usable provider entity, preserving order.

    Args:
        entities: Catalog response, one slot per ref (None for unknown refs)
        refs: The refs the entities were requested by
        env_name: Name of the owning environment
        env_ref: Reference of the owning environment

    Returns:
        ProviderMetadata for each entity carrying all baseline fields.
    """
    results = []
    for index, entity in enumerate(entities):
        entity_ref = refs[index] if index < len(refs) else ""
        result = extract_provider_metadata(entity, env_name, env_ref, entity_ref)
        if isinstance(result, MissingField):
            logger.debug(f"Skipping provider entity '{result.entity_ref}': missing '{result.field_name}'")
            continue
        results.append(result.metadata)
    return results
