"""
Application promotion parameters.

Downstream promotion pipelines deploy an application to every provider of an
environment. This module converts a ResolvedEnvironment into the parameter
set those pipelines consume: one AWSProviderParams per resolved provider,
carrying the environment's approval requirement and the per-app parameters.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from env_resolver.core.models import ProviderDescriptor, ResolvedEnvironment


@dataclass
class GitRepoParams:
    git_host: str
    git_project_group: str
    git_repo_name: str


@dataclass
class AWSProviderParams:
    """Deployment target of a promotion, derived from one provider descriptor."""

    aws_account: str
    aws_region: str
    assumed_role_arn: str
    environment_name: str
    env_requires_manual_approval: bool
    prefix: str
    provider_name: str
    # Key/value parameters used to provision the app on this provider
    parameters: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "awsAccount": self.aws_account,
            "awsRegion": self.aws_region,
            "assumedRoleArn": self.assumed_role_arn,
            "environmentName": self.environment_name,
            "envRequiresManualApproval": self.env_requires_manual_approval,
            "prefix": self.prefix,
            "providerName": self.provider_name,
            "parameters": dict(self.parameters),
        }


@dataclass
class AppPromoParams:
    git_repo: GitRepoParams
    git_job_id: str
    env_name: str
    env_requires_manual_approval: bool
    app_name: str
    providers: List[AWSProviderParams] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gitHost": self.git_repo.git_host,
            "gitProjectGroup": self.git_repo.git_project_group,
            "gitRepoName": self.git_repo.git_repo_name,
            "gitJobID": self.git_job_id,
            "envName": self.env_name,
            "envRequiresManualApproval": self.env_requires_manual_approval,
            "appName": self.app_name,
            "providers": [provider.to_dict() for provider in self.providers],
        }


def _provider_parameters(descriptor: ProviderDescriptor) -> Dict[str, str]:
    parameters = {
        "VPC_ID": descriptor.vpc_id,
        "PUBLIC_SUBNETS": ",".join(descriptor.public_subnets),
        "PRIVATE_SUBNETS": ",".join(descriptor.private_subnets),
    }
    if descriptor.cluster_arn:
        parameters["CLUSTER_ARN"] = descriptor.cluster_arn
    return parameters


def build_promotion_params(
    resolved: ResolvedEnvironment,
    git_repo: GitRepoParams,
    app_name: str,
    git_job_id: str,
    parameters: Optional[Dict[str, Dict[str, str]]] = None,
) -> AppPromoParams:
    """
    Build promotion parameters for deploying an app to a resolved environment.

    Args:
        resolved: Result of EnvironmentResolver.resolve()
        git_repo: Repository holding the application
        app_name: Application being promoted
        git_job_id: Pipeline job that triggered the promotion
        parameters: Optional per-provider overrides keyed by provider name;
            they are merged over the network parameters derived from the
            descriptor

    Returns:
        AppPromoParams with one AWSProviderParams per provider, in provider order.
    """
    parameters = parameters or {}
    providers = []
    for descriptor in resolved.env_providers:
        provider_parameters = _provider_parameters(descriptor)
        provider_parameters.update(parameters.get(descriptor.provider_name, {}))

        providers.append(AWSProviderParams(
            aws_account=descriptor.account_id,
            aws_region=descriptor.region,
            assumed_role_arn=descriptor.assumed_role_arn,
            environment_name=resolved.env_name,
            env_requires_manual_approval=resolved.env_deploy_manual_approval,
            prefix=descriptor.prefix,
            provider_name=descriptor.provider_name,
            parameters=provider_parameters,
        ))

    return AppPromoParams(
        git_repo=git_repo,
        git_job_id=git_job_id,
        env_name=resolved.env_name,
        env_requires_manual_approval=resolved.env_deploy_manual_approval,
        app_name=app_name,
        providers=providers,
    )
