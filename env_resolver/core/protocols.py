"""
Protocol definitions for the resolver's external collaborators.

The resolution engine never talks to the catalog, the credential broker or the
parameter store directly. It receives objects implementing these Protocols,
which keeps the core free of SDK details and lets tests substitute fakes.

Why Protocols instead of ABC?
    - No explicit inheritance required (duck typing)
    - Test doubles (MagicMock, small fake classes) satisfy them as-is
    - Runtime checking with @runtime_checkable decorator
"""

from typing import List, Optional, Protocol, runtime_checkable

from .models import CredentialBundle, Entity


@runtime_checkable
class EntityCatalog(Protocol):
    """
    Read access to the entity catalog.

    Example Implementation:
        class BackstageCatalogClient:
            def get_entity_by_ref(self, ref, token):
                response = requests.get(f"{base}/entities/by-name/...")
                ...
    """

    def get_entity_by_ref(self, ref: str, token: Optional[str]) -> Optional[Entity]:
        """
        Fetch a single entity.

        Args:
            ref: Entity reference (e.g. "awsenvironment:default/dev")
            token: Caller's catalog token, passed through unchanged

        Returns:
            The entity, or None if the catalog does not know it.
        """
        ...

    def get_entities_by_refs(
        self, refs: List[str], token: Optional[str]
    ) -> List[Optional[Entity]]:
        """
        Fetch several entities in one call.

        Args:
            refs: Entity references
            token: Caller's catalog token, passed through unchanged

        Returns:
            One slot per requested ref, in request order. Unknown refs yield None.
        """
        ...


@runtime_checkable
class CredentialBroker(Protocol):
    """Issues temporary credentials scoped to one provider account and region."""

    def get_credentials(
        self,
        account_id: str,
        region: str,
        prefix: str,
        provider_name: str,
        identity: str,
    ) -> CredentialBundle:
        """
        Obtain credentials for deploying to a provider on behalf of a caller.

        Args:
            account_id: Target AWS account
            region: Target AWS region
            prefix: Provider resource prefix
            provider_name: Provider name from the catalog
            identity: Calling user's entity reference

        Raises:
            Any exception on network or authorization failure.
        """
        ...


@runtime_checkable
class ParameterStore(Protocol):
    """Resolves configuration values addressed by hierarchical path."""

    def get_parameter_value(
        self, region: str, credentials: CredentialBundle, path: str
    ) -> str:
        """
        Look up the value stored at a path.

        Args:
            region: Region of the parameter store
            credentials: Provider-scoped credentials
            path: Parameter path (e.g. "/opa/dev/vpc")

        Raises:
            Any exception when the lookup fails.
        """
        ...
