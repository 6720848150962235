"""
Backstage catalog REST client.

Implements the EntityCatalog protocol against the Backstage catalog backend:

    GET  {base}/api/catalog/entities/by-name/{kind}/{namespace}/{name}
    POST {base}/api/catalog/entities/by-refs   {"entityRefs": [...]}

The caller's token is forwarded as a bearer token on every request. A 404 on
the single-entity lookup means "absent" and yields None; any other failure is
raised as CatalogError.
"""

from typing import List, Optional
from urllib.parse import quote

import requests

from env_resolver.core.exceptions import CatalogError
from env_resolver.core.models import Entity
from env_resolver.logger import logger

from .refs import parse_entity_ref, stringify_entity_ref


class BackstageCatalogClient:
    """
    EntityCatalog implementation backed by the Backstage catalog API.

    Attributes:
        base_url: Backstage backend URL (e.g. "http://localhost:7007")
        timeout: Request timeout in seconds
    """

    def __init__(self, base_url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        """Release the pooled connections of the underlying HTTP session."""
        self._session.close()

    @property
    def _entities_url(self) -> str:
        return f"{self.base_url}/api/catalog/entities"

    def _headers(self, token: Optional[str]) -> dict:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def get_entity_by_ref(self, ref: str, token: Optional[str]) -> Optional[Entity]:
        compound = parse_entity_ref(ref)
        url = (
            f"{self._entities_url}/by-name/"
            f"{quote(compound.kind, safe='')}/{quote(compound.namespace, safe='')}/{quote(compound.name, safe='')}"
        )
        logger.debug(f"Fetching catalog entity {stringify_entity_ref(compound)}")

        try:
            response = self._session.get(url, headers=self._headers(token), timeout=self.timeout)
        except requests.RequestException as e:
            raise CatalogError(f"Catalog request for '{ref}' failed", original_error=e)

        if response.status_code == 404:
            return None
        if not response.ok:
            raise CatalogError(
                f"Catalog returned HTTP {response.status_code} for '{ref}'",
                status_code=response.status_code,
            )

        return Entity.from_dict(response.json())

    def get_entities_by_refs(
        self, refs: List[str], token: Optional[str]
    ) -> List[Optional[Entity]]:
        """
        Fetch entities by reference in one request.

        The catalog answers with one item per requested ref, in request order,
        using null for refs it does not know.
        """
        logger.debug(f"Fetching {len(refs)} catalog entities by ref")

        try:
            response = self._session.post(
                f"{self._entities_url}/by-refs",
                json={"entityRefs": refs},
                headers=self._headers(token),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise CatalogError("Catalog batch request failed", original_error=e)

        if not response.ok:
            raise CatalogError(
                f"Catalog returned HTTP {response.status_code} for batch request",
                status_code=response.status_code,
            )

        items = response.json().get("items", [])
        return [Entity.from_dict(item) if item else None for item in items]
