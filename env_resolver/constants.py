# ==========================================
# 1. Action Identity
# ==========================================
ACTION_ID = "opa:get-env-providers"
ACTION_DESCRIPTION = "Retrieves AWS Environment Provider data"

# ==========================================
# 2. Catalog Relations & Kinds
# ==========================================
RELATION_DEPENDS_ON = "dependsOn"
ENVIRONMENT_PROVIDER_KIND_PREFIX = "awsenvironmentprovider"
DEFAULT_NAMESPACE = "default"

# ==========================================
# 3. Environment Metadata Keys
# ==========================================
ENV_SHORT_NAME_KEY = "short-name"
ENV_APPROVAL_KEY = "deployment_requires_approval"

# ==========================================
# 4. Provider Metadata Keys
# ==========================================
PROVIDER_NAME_KEY = "name"
PROVIDER_TYPE_KEY = "env-type"
PROVIDER_ACCOUNT_KEY = "aws-account"
PROVIDER_REGION_KEY = "aws-region"
PROVIDER_VPC_KEY = "vpc"
PROVIDER_PREFIX_KEY = "prefix"
PROVIDER_ROLE_KEY = "provisioning-role"
PROVIDER_CLUSTER_KEY = "cluster-name"

# Entities missing any of these keys are excluded from resolution
PROVIDER_BASELINE_KEYS = [
    PROVIDER_NAME_KEY,
    PROVIDER_TYPE_KEY,
    PROVIDER_ACCOUNT_KEY,
    PROVIDER_REGION_KEY,
    PROVIDER_VPC_KEY,
]

# ==========================================
# 5. Parameter Store Paths
# ==========================================
PRIVATE_SUBNETS_SUFFIX = "/private-subnets"
PUBLIC_SUBNETS_SUFFIX = "/public-subnets"

# Provider types that deploy onto a cluster and need its ARN resolved
CLUSTER_PROVIDER_TYPES = {"ecs", "eks"}

# ==========================================
# 6. HTTP Headers
# ==========================================
IDENTITY_HEADER = "X-Backstage-User"
