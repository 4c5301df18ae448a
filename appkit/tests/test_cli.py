"""
Tests for appkit CLI commands.

This module tests the check and tools commands against the bundled example
apps and against throwaway app directories.
"""

import json

import pytest
from click.testing import CliRunner

from appkit import __version__
from appkit.cli.main import cli

from conftest import BASIC_APP_DIR, MCP_APP_DIR

INVALID_APP = '''
from appkit.models.descriptor import BASE_APP, extend

app = extend(
    BASE_APP,
    name="Invalid App",
    categories=["crm"],
    config_schema={"type": "object", "properties": {}, "required": ["url"]},
    get_client=lambda config: None,
)
'''

CHANNEL_APP = '''
from appkit.models.descriptor import BASE_APP, extend

app = extend(BASE_APP, name="Channel App", features=["channel"], get_client=lambda config: None)
'''


@pytest.fixture
def runner():
    return CliRunner()


class TestCli:
    """Tests for the command group."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "check" in result.output
        assert "tools" in result.output


class TestCheckCommand:
    """Test the check command."""

    @pytest.mark.parametrize("app_dir", [BASIC_APP_DIR, MCP_APP_DIR])
    def test_examples_conform(self, runner, app_dir):
        result = runner.invoke(cli, ["check", "--dir", str(app_dir)])

        assert result.exit_code == 0
        assert "Integration App Conformance Results" in result.output
        assert "✓ App conforms to the contract!" in result.output

    def test_violations_exit_one(self, runner, make_app_dir):
        result = runner.invoke(cli, ["check", "--dir", str(make_app_dir(INVALID_APP))])

        assert result.exit_code == 1
        assert "Violations (2):" in result.output
        assert "[categories] (categories.0)" in result.output
        assert "config_schema requires 'url'" in result.output
        assert "✗ App has contract violations." in result.output

    def test_verbose_lists_each_check(self, runner, make_app_dir):
        result = runner.invoke(cli, ["-v", "check", "--dir", str(make_app_dir(INVALID_APP))])

        assert result.exit_code == 1
        assert "✗ categories" in result.output
        assert "✓ name" in result.output

    def test_json_output(self, runner, make_app_dir):
        result = runner.invoke(cli, ["check", "--dir", str(make_app_dir(INVALID_APP)), "--format", "json"])

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["valid"] is False
        assert data["app_id"] == "invalid-app"
        assert [v["check"] for v in data["violations"]] == ["categories", "config_schema"]

    def test_json_output_for_valid_app(self, runner):
        result = runner.invoke(cli, ["check", "-d", str(BASIC_APP_DIR), "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["violations"] == []

    def test_missing_directory_exits_two(self, runner, tmp_path):
        result = runner.invoke(cli, ["check", "--dir", str(tmp_path / "missing")])

        assert result.exit_code == 2
        assert "Directory not found" in result.output

    def test_missing_directory_json(self, runner, tmp_path):
        result = runner.invoke(cli, ["check", "--dir", str(tmp_path / "missing"), "--format", "json"])

        assert result.exit_code == 2
        data = json.loads(result.output)
        assert data["valid"] is False
        assert data["error"].startswith("Directory not found")

    def test_unreadable_metadata_exits_two(self, runner, make_app_dir):
        app_dir = make_app_dir(CHANNEL_APP)
        (app_dir / "metadata.json").write_bytes(b'{"content": "\xff\xfe"}')

        result = runner.invoke(cli, ["check", "--dir", str(app_dir)])

        assert result.exit_code == 2
        assert "Invalid JSON" in result.output

    def test_dir_is_required(self, runner):
        result = runner.invoke(cli, ["check"])

        assert result.exit_code == 2
        assert "--dir" in result.output


class TestToolsCommand:
    """Test the tools command."""

    def test_lists_static_tools(self, runner):
        result = runner.invoke(cli, ["tools", "--dir", str(BASIC_APP_DIR)])

        assert result.exit_code == 0
        assert "Tools (1):" in result.output
        assert "ping" in result.output
        assert "Ping Service" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["tools", "--dir", str(BASIC_APP_DIR), "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert list(data) == ["ping"]
        assert data["ping"]["inputSchema"]["type"] == "object"

    def test_remote_tools_need_a_client(self, runner):
        result = runner.invoke(cli, ["tools", "--dir", str(MCP_APP_DIR)])

        assert result.exit_code == 0
        assert "No tools can be listed without a client." in result.output

    def test_app_without_toolkit(self, runner, make_app_dir):
        result = runner.invoke(cli, ["tools", "--dir", str(make_app_dir(CHANNEL_APP))])

        assert result.exit_code == 1
        assert "does not provide the 'toolkit' feature" in result.output

    def test_missing_directory_exits_two(self, runner, tmp_path):
        result = runner.invoke(cli, ["tools", "--dir", str(tmp_path / "missing")])

        assert result.exit_code == 2
