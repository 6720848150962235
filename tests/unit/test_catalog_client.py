"""
Tests for the Backstage catalog client and entity reference helpers.

HTTP calls are mocked at the requests.Session level.
"""

import pytest
import requests
from unittest.mock import MagicMock

from env_resolver.catalog.client import BackstageCatalogClient
from env_resolver.catalog.refs import is_provider_ref, parse_entity_ref, stringify_entity_ref
from env_resolver.core.exceptions import CatalogError, InvalidInputError


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.json.return_value = payload
    return response


ENV_JSON = {
    "kind": "AWSEnvironment",
    "metadata": {"name": "Test-Environment", "namespace": "default"},
    "relations": [{"type": "dependsOn", "targetRef": "awsenvironmentprovider:default/p1"}],
}


class TestParseEntityRef:

    def test_defaults_namespace(self):
        ref = parse_entity_ref("awsenvironment:Test-Environment")

        assert (ref.kind, ref.namespace, ref.name) == ("awsenvironment", "default", "Test-Environment")

    def test_explicit_namespace_and_kind_case(self):
        ref = parse_entity_ref("AWSEnvironmentProvider:platform/dev-ecs")

        assert stringify_entity_ref(ref) == "awsenvironmentprovider:platform/dev-ecs"

    @pytest.mark.parametrize("ref", ["Test-Environment", ":name", "awsenvironment:", ""])
    def test_malformed_refs_raise(self, ref):
        with pytest.raises(InvalidInputError):
            parse_entity_ref(ref)

    def test_is_provider_ref_matches_lower_case_kind(self):
        assert is_provider_ref("awsenvironmentprovider:default/p1")
        assert not is_provider_ref("AWSEnvironmentProvider:default/p1")
        assert not is_provider_ref("awsenvironment:default/dev")


class TestGetEntityByRef:

    def test_fetches_by_name_with_bearer_token(self):
        session = MagicMock()
        session.get.return_value = _response(200, ENV_JSON)
        client = BackstageCatalogClient("http://backstage:7007/", timeout=3, session=session)

        entity = client.get_entity_by_ref("awsenvironment:Test-Environment", "tok")

        assert entity.name == "Test-Environment"
        args, kwargs = session.get.call_args
        assert args[0] == "http://backstage:7007/api/catalog/entities/by-name/awsenvironment/default/Test-Environment"
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert kwargs["timeout"] == 3

    def test_no_token_sends_no_authorization(self):
        session = MagicMock()
        session.get.return_value = _response(200, ENV_JSON)
        client = BackstageCatalogClient("http://backstage:7007", session=session)

        client.get_entity_by_ref("awsenvironment:Test-Environment", None)

        assert "Authorization" not in session.get.call_args.kwargs["headers"]

    def test_404_returns_none(self):
        session = MagicMock()
        session.get.return_value = _response(404)
        client = BackstageCatalogClient("http://backstage:7007", session=session)

        assert client.get_entity_by_ref("awsenvironment:missing", "tok") is None

    def test_server_error_raises_catalog_error(self):
        session = MagicMock()
        session.get.return_value = _response(500)
        client = BackstageCatalogClient("http://backstage:7007", session=session)

        with pytest.raises(CatalogError) as exc_info:
            client.get_entity_by_ref("awsenvironment:dev", "tok")
        assert exc_info.value.status_code == 500

    def test_transport_error_raises_catalog_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("connection refused")
        client = BackstageCatalogClient("http://backstage:7007", session=session)

        with pytest.raises(CatalogError) as exc_info:
            client.get_entity_by_ref("awsenvironment:dev", "tok")
        assert "connection refused" in str(exc_info.value)


class TestGetEntitiesByRefs:

    def test_posts_refs_and_keeps_null_slots(self):
        session = MagicMock()
        provider = {"kind": "AWSEnvironmentProvider", "metadata": {"name": "p1"}}
        session.post.return_value = _response(200, {"items": [provider, None]})
        client = BackstageCatalogClient("http://backstage:7007", session=session)

        entities = client.get_entities_by_refs(
            ["awsenvironmentprovider:default/p1", "awsenvironmentprovider:default/ghost"], "tok"
        )

        assert entities[0].name == "p1"
        assert entities[1] is None
        args, kwargs = session.post.call_args
        assert args[0] == "http://backstage:7007/api/catalog/entities/by-refs"
        assert kwargs["json"] == {
            "entityRefs": ["awsenvironmentprovider:default/p1", "awsenvironmentprovider:default/ghost"]
        }

    def test_error_status_raises(self):
        session = MagicMock()
        session.post.return_value = _response(403)
        client = BackstageCatalogClient("http://backstage:7007", session=session)

        with pytest.raises(CatalogError):
            client.get_entities_by_refs(["awsenvironmentprovider:default/p1"], "tok")


class TestClose:

    def test_close_releases_session(self):
        session = MagicMock()
        client = BackstageCatalogClient("http://backstage:7007", session=session)

        client.close()

        session.close.assert_called_once()
