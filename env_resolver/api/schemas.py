"""
Request and response schemas for the action API.

Field names follow the action's wire format (camelCase) so that the JSON
schemas published by GET /actions/{id} match what callers send and receive.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class GetEnvProvidersInput(BaseModel):
    """Input of the get-env-providers action."""
    environmentRef: str = Field(
        ...,
        min_length=1,
        title="Entity reference",
        description="The entity reference identifier for an AWS Environment",
        examples=["awsenvironment:Test-Environment"],
    )


class EnvProviderOutput(BaseModel):
    """One resolved AWS environment provider."""
    envProviderName: str = Field(..., title="The AWS environment provider name")
    envProviderType: str = Field(..., title="The AWS environment provider type")
    envProviderPrefix: str = Field(..., title="The AWS environment provider resource prefix")
    accountId: str = Field(..., title="The AWS account where infrastructure will be deployed")
    region: str = Field(..., title="The AWS region where infrastructure will be deployed")
    vpcId: str = Field(..., title="The VPC identifier where infrastructure will be deployed")
    publicSubnets: List[str] = Field(..., title="The VPC public subnet ids")
    privateSubnets: List[str] = Field(..., title="The VPC private subnet ids")
    clusterArn: Optional[str] = Field(
        "",
        title="The Arn of the cluster where the service and task are deployed, if needed. "
              "A cluster could be ECS or EKS",
    )
    assumedRoleArn: str = Field(
        ...,
        title="The Arn of AWS IAM role that can be assumed to deploy resources to the environment provider",
    )


class GetEnvProvidersOutput(BaseModel):
    """Output of the get-env-providers action."""
    envName: str = Field(..., title="The AWS environment name")
    envShortName: str = Field(..., title="The short AWS environment name e.g. dev, qa, prod")
    envRef: str = Field(..., title="The entity reference ID of the environment")
    envDeployManualApproval: bool = Field(
        ..., title="Whether manual approval is required for deploying to the environment"
    )
    envProviders: List[EnvProviderOutput] = Field(..., title="The AWS environment providers")


class ActionDescription(BaseModel):
    """Self-description of a registered action."""
    id: str
    description: str
    examples: List[dict]
    schema_: dict = Field(..., alias="schema")

    model_config = {"populate_by_name": True}


class PromotionParamsRequest(BaseModel):
    """Request body for building app promotion parameters."""
    environmentRef: str = Field(..., min_length=1, description="The AWS environment to promote to")
    appName: str = Field(..., min_length=1, description="Application being promoted")
    gitHost: str = Field(..., description="Git host of the application repository")
    gitProjectGroup: str = Field(..., description="Project group/namespace of the repository")
    gitRepoName: str = Field(..., description="Repository name")
    gitJobID: str = Field(..., description="Pipeline job that triggered the promotion")
    parameters: Dict[str, Dict[str, str]] = Field(
        default_factory=dict,
        description="Per-provider parameter overrides keyed by provider name",
    )
