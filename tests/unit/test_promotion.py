"""
Unit tests for app promotion parameters.
"""

from env_resolver.core.models import ProviderDescriptor, ResolvedEnvironment
from env_resolver.promotion import GitRepoParams, build_promotion_params


def _descriptor(name, cluster_arn=""):
    return ProviderDescriptor(
        provider_name=name,
        provider_type="ecs" if cluster_arn else "serverless",
        prefix="opa",
        account_id="111111111111",
        region="us-east-1",
        vpc_id=f"vpc-{name}",
        public_subnets=["subnet-a", "subnet-b"],
        private_subnets=["subnet-c"],
        assumed_role_arn=f"arn:aws:iam::111111111111:role/{name}",
        cluster_arn=cluster_arn,
    )


def _resolved(*descriptors, approval=True):
    return ResolvedEnvironment(
        env_name="Test-Environment",
        env_short_name="dev",
        env_ref="awsenvironment:Test-Environment",
        env_deploy_manual_approval=approval,
        env_providers=list(descriptors),
    )


GIT_REPO = GitRepoParams(git_host="git.example.com", git_project_group="apps", git_repo_name="orders")


class TestBuildPromotionParams:

    def test_one_entry_per_provider_in_order(self):
        promo = build_promotion_params(
            _resolved(_descriptor("p1"), _descriptor("p2")), GIT_REPO, "orders", "job-42"
        )

        assert [p.provider_name for p in promo.providers] == ["p1", "p2"]
        assert all(p.env_requires_manual_approval for p in promo.providers)
        assert promo.providers[0].assumed_role_arn == "arn:aws:iam::111111111111:role/p1"

    def test_network_parameters_and_optional_cluster(self):
        promo = build_promotion_params(
            _resolved(_descriptor("p1", cluster_arn="arn:aws:ecs:us-east-1:111111111111:cluster/p1"),
                      _descriptor("p2")),
            GIT_REPO, "orders", "job-42",
        )

        assert promo.providers[0].parameters == {
            "VPC_ID": "vpc-p1",
            "PUBLIC_SUBNETS": "subnet-a,subnet-b",
            "PRIVATE_SUBNETS": "subnet-c",
            "CLUSTER_ARN": "arn:aws:ecs:us-east-1:111111111111:cluster/p1",
        }
        assert "CLUSTER_ARN" not in promo.providers[1].parameters

    def test_overrides_merge_per_provider(self):
        promo = build_promotion_params(
            _resolved(_descriptor("p1"), _descriptor("p2")),
            GIT_REPO, "orders", "job-42",
            parameters={"p2": {"DESIRED_COUNT": "3", "VPC_ID": "vpc-override"}},
        )

        assert "DESIRED_COUNT" not in promo.providers[0].parameters
        assert promo.providers[1].parameters["DESIRED_COUNT"] == "3"
        assert promo.providers[1].parameters["VPC_ID"] == "vpc-override"

    def test_to_dict_wire_format(self):
        promo = build_promotion_params(
            _resolved(_descriptor("p1"), approval=False), GIT_REPO, "orders", "job-42"
        )

        data = promo.to_dict()

        assert data["gitHost"] == "git.example.com"
        assert data["gitProjectGroup"] == "apps"
        assert data["gitRepoName"] == "orders"
        assert data["gitJobID"] == "job-42"
        assert data["envName"] == "Test-Environment"
        assert data["envRequiresManualApproval"] is False
        assert data["appName"] == "orders"
        assert data["providers"][0]["awsAccount"] == "111111111111"
        assert data["providers"][0]["environmentName"] == "Test-Environment"

    def test_environment_without_providers(self):
        promo = build_promotion_params(_resolved(), GIT_REPO, "orders", "job-42")

        assert promo.providers == []
