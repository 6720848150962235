"""
Environment provider resolution engine.

Resolves an environment entity into the fully hydrated list of providers that
deployment automation targets:

    environment ref
      -> environment entity            (catalog)
      -> depends-on provider refs      (relations filtered by kind)
      -> provider entities             (catalog, one batch call)
      -> [ProviderMetadata]            (extraction, malformed entities dropped)
      -> for each provider, in order:
           validate -> credentials -> parameters -> descriptor
      -> ResolvedEnvironment

Failure Semantics:
    Providers are processed sequentially and the first failure aborts the
    whole resolution. Descriptors already built for earlier providers are
    discarded, so the caller receives either the complete result or a single
    error naming exactly one environment or provider.

State Machine:
    INIT -> ENTITY_FETCHED -> RELATIONS_FILTERED
         -> {VALIDATED -> CREDENTIALED -> PARAMETERIZED -> EMITTED}*
         -> DONE
    Any error moves the resolver to the terminal FAILED state.

Usage:
    resolver = EnvironmentResolver(catalog, broker, parameter_store)
    result = resolver.resolve(ResolutionContext(
        environment_ref="awsenvironment:Test-Environment",
        identity="user:default/jane",
        token="...",
    ))
    result.to_output()
"""

import json
from dataclasses import asdict
from typing import List, Optional

import env_resolver.constants as CONSTANTS
from env_resolver.core.context import ResolutionContext
from env_resolver.core.exceptions import (
    CredentialFailureError,
    EnvironmentNotFoundError,
    MissingConfigurationError,
    ParameterResolutionError,
)
from env_resolver.core.models import (
    CredentialBundle,
    Entity,
    ProviderDescriptor,
    ProviderMetadata,
    ResolutionState,
    ResolvedEnvironment,
)
from env_resolver.core.protocols import CredentialBroker, EntityCatalog, ParameterStore
from env_resolver.extraction import (
    extract_all,
    get_provider_refs,
    metadata_str,
    parse_approval_flag,
)
from env_resolver.logger import logger


def parse_string_list(value: str) -> List[str]:
    """
    Split an SSM StringList value into its items.

    Example:
        >>> parse_string_list("subnet-a, subnet-b,")
        ['subnet-a', 'subnet-b']
    """
    return [item.strip() for item in value.split(",") if item.strip()]


def validate_provider(params: ProviderMetadata) -> None:
    """
    Check the fields needed before any network call is made for a provider.

    Raises:
        MissingConfigurationError: Naming the first empty field
    """
    required = [
        ("accountId", params.account_id),
        ("region", params.region),
        ("ssmAssumeRoleArn", params.role_path),
        ("ssmPathVpc", params.vpc_path),
    ]
    for field_name, value in required:
        if not value:
            raise MissingConfigurationError(params.provider_name, field_name)


class EnvironmentResolver:
    """
    Resolves environments into provider descriptors.

    One instance handles one resolution at a time; `state` reflects the
    progress of the most recent call.

    Attributes:
        catalog: EntityCatalog used to fetch environment and provider entities
        credential_broker: CredentialBroker issuing per-provider credentials
        parameter_store: ParameterStore resolving per-provider values
        state: Current ResolutionState
    """

    def __init__(
        self,
        catalog: EntityCatalog,
        credential_broker: CredentialBroker,
        parameter_store: ParameterStore,
    ):
        self.catalog = catalog
        self.credential_broker = credential_broker
        self.parameter_store = parameter_store
        self.state = ResolutionState.INIT

    def _transition(self, state: ResolutionState, provider_name: Optional[str] = None) -> None:
        self.state = state
        if provider_name:
            logger.debug(f"Resolution state: {state.value} ({provider_name})")
        else:
            logger.debug(f"Resolution state: {state.value}")

    # ==========================================
    # Entry point
    # ==========================================

    def resolve(self, context: ResolutionContext) -> Optional[ResolvedEnvironment]:
        """
        Resolve the environment named by the context.

        Args:
            context: Environment ref plus the caller's identity and token

        Returns:
            The resolved environment, or None when the caller has no identity
            (no collaborator is contacted in that case).

        Raises:
            EnvironmentNotFoundError: Environment entity not in the catalog
            MissingConfigurationError: Provider lacks a required field
            CredentialFailureError: Credentials could not be obtained
            ParameterResolutionError: A parameter lookup failed
            CatalogError: The catalog request itself failed
        """
        self.state = ResolutionState.INIT
        logger.info(f"environmentRef: {context.environment_ref}")

        if not context.has_identity:
            logger.info(f"No user context provided for {CONSTANTS.ACTION_ID} action")
            return None

        try:
            return self._resolve(context)
        except Exception:
            self._transition(ResolutionState.FAILED)
            raise

    def _resolve(self, context: ResolutionContext) -> ResolvedEnvironment:
        environment = self.fetch_environment(context)
        deployment_params = self.get_deployment_parameters(environment, context)

        logger.debug(
            "envProviders info: "
            f"{json.dumps([asdict(p) for p in deployment_params], indent=2)}"
        )

        providers: List[ProviderDescriptor] = []
        for params in deployment_params:
            providers.append(self.resolve_provider(params, context))
            self._transition(ResolutionState.EMITTED, params.provider_name)

        resolved = ResolvedEnvironment(
            env_name=environment.name,
            env_short_name=metadata_str(environment.metadata, CONSTANTS.ENV_SHORT_NAME_KEY),
            env_ref=context.environment_ref,
            env_deploy_manual_approval=parse_approval_flag(
                environment.metadata.get(CONSTANTS.ENV_APPROVAL_KEY)
            ),
            env_providers=providers,
        )

        self._transition(ResolutionState.DONE)
        logger.info(
            "Resolved environment providers: "
            f"{json.dumps(resolved.to_output()['envProviders'], indent=2)}"
        )
        return resolved

    # ==========================================
    # Entity Reference Resolver
    # ==========================================

    def fetch_environment(self, context: ResolutionContext) -> Entity:
        """
        Fetch the environment entity.

        Raises:
            EnvironmentNotFoundError: If the catalog does not know the ref
        """
        environment = self.catalog.get_entity_by_ref(context.environment_ref, context.token)
        if environment is None:
            raise EnvironmentNotFoundError(context.environment_ref)

        self._transition(ResolutionState.ENTITY_FETCHED)
        return environment

    def get_deployment_parameters(
        self, environment: Entity, context: ResolutionContext
    ) -> List[ProviderMetadata]:
        """
        For a given environment entity, get the attributes required to deploy
        to each of its providers.
        """
        refs = get_provider_refs(environment)
        self._transition(ResolutionState.RELATIONS_FILTERED)

        if not refs:
            return []

        entities = self.catalog.get_entities_by_refs(refs, context.token)
        return extract_all(entities, refs, environment.name, context.environment_ref)

    # ==========================================
    # Per-provider pipeline
    # ==========================================

    def resolve_provider(
        self, params: ProviderMetadata, context: ResolutionContext
    ) -> ProviderDescriptor:
        """
        Validate, credential and hydrate a single provider.

        Raises:
            MissingConfigurationError: Before any network call
            CredentialFailureError: If the broker fails
            ParameterResolutionError: If any lookup fails
        """
        validate_provider(params)
        self._transition(ResolutionState.VALIDATED, params.provider_name)

        credentials = self._get_credentials(params, context)
        self._transition(ResolutionState.CREDENTIALED, params.provider_name)

        vpc_id = self._get_parameter(params, credentials, params.vpc_path)
        public_subnets = self._get_list_parameter(params, credentials, params.public_subnets_path)
        private_subnets = self._get_list_parameter(params, credentials, params.private_subnets_path)

        cluster_arn = ""
        if params.provider_type in CONSTANTS.CLUSTER_PROVIDER_TYPES:
            cluster_arn = self._get_parameter(params, credentials, params.cluster_path, required=False)

        assumed_role_arn = self._get_parameter(params, credentials, params.role_path)
        self._transition(ResolutionState.PARAMETERIZED, params.provider_name)

        return ProviderDescriptor(
            provider_name=params.provider_name,
            provider_type=params.provider_type,
            prefix=params.prefix,
            account_id=params.account_id,
            region=params.region,
            vpc_id=vpc_id,
            public_subnets=public_subnets,
            private_subnets=private_subnets,
            cluster_arn=cluster_arn,
            assumed_role_arn=assumed_role_arn,
        )

    def _get_credentials(
        self, params: ProviderMetadata, context: ResolutionContext
    ) -> CredentialBundle:
        logger.info(
            f"Getting credentials for AWS deployment to account {params.account_id} in {params.region}"
        )
        try:
            return self.credential_broker.get_credentials(
                params.account_id,
                params.region,
                params.prefix,
                params.provider_name,
                context.identity,
            )
        except Exception as e:
            raise CredentialFailureError(params.provider_name, e) from e

    def _get_parameter(
        self,
        params: ProviderMetadata,
        credentials: CredentialBundle,
        path: str,
        required: bool = True,
    ) -> str:
        try:
            value = self.parameter_store.get_parameter_value(params.region, credentials, path)
        except Exception as e:
            raise ParameterResolutionError(params.provider_name, path, e) from e

        if required and not value:
            raise ParameterResolutionError(
                params.provider_name, path, ValueError(f"Parameter {path} has an empty value")
            )
        return value

    def _get_list_parameter(
        self, params: ProviderMetadata, credentials: CredentialBundle, path: str
    ) -> List[str]:
        items = parse_string_list(self._get_parameter(params, credentials, path))
        if not items:
            raise ParameterResolutionError(
                params.provider_name, path, ValueError(f"Parameter {path} lists no subnets")
            )
        return items
