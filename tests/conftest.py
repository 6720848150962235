import os
import pytest

from env_resolver.core.context import ResolutionContext
from env_resolver.core.models import CredentialBundle, Entity, EntityRelation
from env_resolver.resolver import EnvironmentResolver


ACCOUNT_ID = "111111111111"
REGION = "us-east-1"
IDENTITY = "user:default/jane.doe"
TOKEN = "catalog-token"


@pytest.fixture(scope="function", autouse=True)
def mock_env_vars():
    """Set mock environment variables to prevent accidental cloud calls."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = REGION


class FakeCatalog:
    """In-memory EntityCatalog that records every call."""

    def __init__(self):
        self.entities = {}
        self.calls = []

    def get_entity_by_ref(self, ref, token):
        self.calls.append(("get_entity_by_ref", ref, token))
        return self.entities.get(ref)

    def get_entities_by_refs(self, refs, token):
        self.calls.append(("get_entities_by_refs", list(refs), token))
        return [self.entities.get(ref) for ref in refs]


class FakeBroker:
    """CredentialBroker that issues dummy credentials, failing for chosen providers."""

    def __init__(self):
        self.calls = []
        self.fail_for = set()

    def get_credentials(self, account_id, region, prefix, provider_name, identity):
        self.calls.append({
            "account_id": account_id,
            "region": region,
            "prefix": prefix,
            "provider_name": provider_name,
            "identity": identity,
        })
        if provider_name in self.fail_for:
            raise RuntimeError(f"AccessDenied for {provider_name}")
        return CredentialBundle(
            access_key_id=f"AKIA-{provider_name}",
            secret_access_key="secret",
            session_token="session",
        )

    def providers_called(self):
        return [call["provider_name"] for call in self.calls]


class FakeParameterStore:
    """ParameterStore backed by a dict; unknown paths raise like ParameterNotFound."""

    def __init__(self):
        self.values = {}
        self.lookups = []

    def get_parameter_value(self, region, credentials, path):
        self.lookups.append((region, credentials.access_key_id, path))
        if path not in self.values:
            raise KeyError(f"ParameterNotFound: {path}")
        return self.values[path]

    def paths_looked_up(self):
        return [path for _, _, path in self.lookups]


class ResolverHarness:
    """
    Builds catalog entities and parameter values for resolver tests.

    Providers get a complete set of metadata and parameter values unless a
    test overrides them.
    """

    def __init__(self):
        self.catalog = FakeCatalog()
        self.broker = FakeBroker()
        self.store = FakeParameterStore()
        self.resolver = EnvironmentResolver(self.catalog, self.broker, self.store)

    @staticmethod
    def provider_ref(name):
        return f"awsenvironmentprovider:default/{name}"

    def add_provider(self, name, metadata=None, with_parameters=True):
        """
        Register a provider entity. Metadata overrides set to None remove the key.
        """
        base = {
            "name": name,
            "env-type": "ECS",
            "aws-account": ACCOUNT_ID,
            "aws-region": REGION,
            "vpc": f"/opa/{name}/vpc",
            "prefix": "opa",
            "provisioning-role": f"/opa/{name}/provisioning-role-arn",
            "cluster-name": f"/opa/{name}/cluster-arn",
        }
        for key, value in (metadata or {}).items():
            if value is None:
                base.pop(key, None)
            else:
                base[key] = value

        ref = self.provider_ref(name)
        self.catalog.entities[ref] = Entity(
            kind="AWSEnvironmentProvider",
            namespace="default",
            name=name,
            metadata=base,
        )

        if with_parameters:
            vpc = base.get("vpc", "")
            self.store.values.update({
                vpc: f"vpc-{name}",
                f"{vpc}/public-subnets": f"subnet-{name}-pub1,subnet-{name}-pub2",
                f"{vpc}/private-subnets": f"subnet-{name}-priv1,subnet-{name}-priv2",
                base.get("cluster-name", ""): f"arn:aws:ecs:{REGION}:{ACCOUNT_ID}:cluster/{name}",
                base.get("provisioning-role", ""): f"arn:aws:iam::{ACCOUNT_ID}:role/{name}-provisioning",
            })
        return ref

    def add_environment(self, ref, name, provider_refs=(), metadata=None, extra_relations=()):
        relations = [EntityRelation(type="dependsOn", target_ref=r) for r in provider_refs]
        relations.extend(extra_relations)
        env_metadata = {"name": name, "short-name": "dev"}
        env_metadata.update(metadata or {})
        self.catalog.entities[ref] = Entity(
            kind="AWSEnvironment",
            namespace="default",
            name=name,
            metadata=env_metadata,
            relations=relations,
        )
        return ref

    def context(self, environment_ref, identity=IDENTITY, token=TOKEN):
        return ResolutionContext(environment_ref, identity=identity, token=token)


@pytest.fixture
def harness():
    """Fresh resolver wired to in-memory collaborators."""
    return ResolverHarness()
