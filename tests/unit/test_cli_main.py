"""
Tests for the env-resolver command line interface.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from env_resolver import main as cli
from env_resolver.core.exceptions import EnvironmentNotFoundError
from env_resolver.core.models import ResolvedEnvironment


def _resolved():
    return ResolvedEnvironment(
        env_name="Test-Environment",
        env_short_name="dev",
        env_ref="awsenvironment:Test-Environment",
        env_deploy_manual_approval=False,
    )


class TestResolveCommand:

    def test_prints_output_as_json(self, capsys):
        resolver = MagicMock()
        resolver.resolve.return_value = _resolved()

        with patch("env_resolver.main.create_resolver", return_value=resolver):
            exit_code = cli.main([
                "resolve", "awsenvironment:Test-Environment",
                "--identity", "user:default/jane", "--token", "tok",
            ])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["envName"] == "Test-Environment"
        context = resolver.resolve.call_args.args[0]
        assert context.environment_ref == "awsenvironment:Test-Environment"
        assert context.identity == "user:default/jane"
        assert context.token == "tok"
        resolver.catalog.close.assert_called_once()

    def test_no_identity_prints_nothing(self, capsys):
        resolver = MagicMock()
        resolver.resolve.return_value = None

        with patch("env_resolver.main.create_resolver", return_value=resolver):
            exit_code = cli.main(["resolve", "awsenvironment:dev", "--identity", ""])

        assert exit_code == 0
        assert capsys.readouterr().out == ""

    def test_resolution_error_exits_nonzero(self, capsys):
        resolver = MagicMock()
        resolver.resolve.side_effect = EnvironmentNotFoundError("awsenvironment:missing")

        with patch("env_resolver.main.create_resolver", return_value=resolver):
            exit_code = cli.main(["resolve", "awsenvironment:missing", "--identity", "user:default/jane"])

        assert exit_code == 1
        assert capsys.readouterr().out == ""
        resolver.catalog.close.assert_called_once()

    def test_empty_ref_exits_nonzero(self):
        with patch("env_resolver.main.create_resolver") as factory:
            exit_code = cli.main(["resolve", " ", "--identity", "user:default/jane"])

        assert exit_code == 1
        factory.assert_not_called()

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            cli.main([])
