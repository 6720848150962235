"""
Action API endpoints.

Exposes the get-env-providers action to the hosting orchestrator:

    GET  /actions/opa:get-env-providers          - action id, description, schema, example
    POST /actions/opa:get-env-providers          - resolve an environment's providers
    POST /actions/opa:get-env-providers/promotion - resolve and build promotion parameters

The caller's identity travels in the X-Backstage-User header and the catalog
token in the Authorization header. Without an identity the action produces
no output (204) and contacts no collaborator.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response

import env_resolver.constants as CONSTANTS
from env_resolver.api.dependencies import (
    build_context,
    get_identity,
    get_resolver,
    get_token,
    raise_http_error,
)
from env_resolver.api.schemas import (
    ActionDescription,
    GetEnvProvidersInput,
    GetEnvProvidersOutput,
    PromotionParamsRequest,
)
from env_resolver.promotion import GitRepoParams, build_promotion_params
from env_resolver.resolver import EnvironmentResolver


router = APIRouter(prefix="/actions", tags=["Actions"])

EXAMPLES = [
    {
        "description": "Retrieve AWS environment providers so that their configurations "
                       "can be used by other template actions",
        "example": {
            "steps": [
                {
                    "action": CONSTANTS.ACTION_ID,
                    "id": "opaGetAwsEnvProviders",
                    "name": "Get AWS Environment Providers",
                    "input": {
                        "environmentRef": "awsenvironment:Test-Environment",
                    },
                },
            ],
        },
    },
]


@router.get(
    f"/{CONSTANTS.ACTION_ID}",
    response_model=ActionDescription,
    response_model_by_alias=True,
    summary="Describe the get-env-providers action",
)
def describe_action():
    """
    Return the action's id, description, examples and input/output JSON schemas.
    """
    return ActionDescription(
        id=CONSTANTS.ACTION_ID,
        description=CONSTANTS.ACTION_DESCRIPTION,
        examples=EXAMPLES,
        schema_={
            "input": GetEnvProvidersInput.model_json_schema(),
            "output": GetEnvProvidersOutput.model_json_schema(),
        },
    )


@router.post(
    f"/{CONSTANTS.ACTION_ID}",
    response_model=GetEnvProvidersOutput,
    summary="Resolve the providers of an AWS environment",
    responses={
        200: {"description": "Environment and providers resolved"},
        204: {"description": "No user identity supplied; nothing resolved"},
        404: {"description": "Environment not found in the catalog"},
        422: {"description": "Invalid input"},
        500: {"description": "Provider resolution failed"},
    },
)
def get_env_providers(
    request: GetEnvProvidersInput,
    identity: Optional[str] = Depends(get_identity),
    token: Optional[str] = Depends(get_token),
    resolver: EnvironmentResolver = Depends(get_resolver),
):
    """
    Resolve an AWS environment into its fully hydrated providers.

    **Resolution process:**
    1. Fetches the environment entity and its depends-on providers from the catalog
    2. For each provider, in order: validates its configuration, assumes its
       operations role and reads VPC, subnet, cluster and role values from SSM
    3. Returns the environment facts and the provider list

    Any failing provider fails the whole request; no partial result is returned.
    """
    context = build_context(request.environmentRef, identity, token)
    try:
        resolved = resolver.resolve(context)
    except Exception as e:
        raise_http_error(e)

    if resolved is None:
        return Response(status_code=204)
    return resolved.to_output()


@router.post(
    f"/{CONSTANTS.ACTION_ID}/promotion",
    summary="Build app promotion parameters for an AWS environment",
    responses={
        200: {"description": "Promotion parameters built"},
        204: {"description": "No user identity supplied; nothing resolved"},
        404: {"description": "Environment not found in the catalog"},
        500: {"description": "Provider resolution failed"},
    },
)
def get_promotion_params(
    request: PromotionParamsRequest,
    identity: Optional[str] = Depends(get_identity),
    token: Optional[str] = Depends(get_token),
    resolver: EnvironmentResolver = Depends(get_resolver),
):
    """
    Resolve the environment, then build the parameters used to promote an
    application to each of its providers.
    """
    context = build_context(request.environmentRef, identity, token)
    try:
        resolved = resolver.resolve(context)
    except Exception as e:
        raise_http_error(e)

    if resolved is None:
        return Response(status_code=204)

    promo = build_promotion_params(
        resolved,
        GitRepoParams(
            git_host=request.gitHost,
            git_project_group=request.gitProjectGroup,
            git_repo_name=request.gitRepoName,
        ),
        app_name=request.appName,
        git_job_id=request.gitJobID,
        parameters=request.parameters,
    )
    return promo.to_dict()
