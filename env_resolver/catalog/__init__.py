"""
Entity catalog access.

Modules:
    client: BackstageCatalogClient (EntityCatalog over the Backstage REST API)
    refs: Entity reference parsing helpers
"""

from .client import BackstageCatalogClient
from .refs import CompoundEntityRef, is_provider_ref, parse_entity_ref, stringify_entity_ref

__all__ = [
    "BackstageCatalogClient",
    "CompoundEntityRef",
    "is_provider_ref",
    "parse_entity_ref",
    "stringify_entity_ref",
]
