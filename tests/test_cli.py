"""Tests for the sandbox-fs CLI."""

import json
import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from sandbox_fs import __version__
from sandbox_fs.cli import cli


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def runner():
    """Create a click test runner."""
    return CliRunner()


class TestCli:
    """Tests for CLI commands."""

    def test_version(self, runner):
        """Test the version option."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_tools(self, runner):
        """Test printing tool definitions."""
        result = runner.invoke(cli, ["tools"])

        assert result.exit_code == 0
        assert '"create_directory"' in result.output
        assert '"find_files"' in result.output

    def test_tools_openai(self, runner):
        """Test printing OpenAI schemas."""
        result = runner.invoke(cli, ["tools", "--openai"])

        assert result.exit_code == 0
        assert '"function"' in result.output

    def test_info(self, runner, temp_dir):
        """Test showing the sandbox summary."""
        result = runner.invoke(cli, ["info", "--root", str(temp_dir)])

        assert result.exit_code == 0
        assert "root_dir" in result.output

    def test_run_write_file(self, runner, temp_dir):
        """Test running a write."""
        args = json.dumps({"path": "a.txt", "content": "hi"})
        result = runner.invoke(cli, ["run", "write_file", "--root", str(temp_dir), "--args", args])

        assert result.exit_code == 0
        assert '"success": true' in result.output
        assert (temp_dir / "a.txt").read_text() == "hi"

    def test_run_allow_overwrite_flag(self, runner, temp_dir):
        """Test overriding the overwrite policy from the command line."""
        (temp_dir / "a.txt").write_text("old")
        args = json.dumps({"path": "a.txt", "content": "new"})

        protected = runner.invoke(cli, ["run", "write_file", "-r", str(temp_dir), "-a", args])
        allowed = runner.invoke(
            cli, ["run", "write_file", "-r", str(temp_dir), "-a", args, "--allow-overwrite"]
        )

        assert protected.exit_code == 0
        assert '"fileExists": true' in protected.output
        assert allowed.exit_code == 0
        assert (temp_dir / "a.txt").read_text() == "new"

    def test_run_config_file(self, runner, temp_dir):
        """Test loading the sandbox root from a settings file."""
        (temp_dir / "b.txt").write_text("beta")
        config_file = temp_dir / "settings.json"
        config_file.write_text(json.dumps({"root_dir": str(temp_dir)}))

        result = runner.invoke(
            cli,
            ["run", "read_file", "--config", str(config_file), "-a", '{"path": "b.txt"}'],
        )

        assert result.exit_code == 0
        assert "beta" in result.output

    def test_run_error_exit_code(self, runner, temp_dir):
        """Test that errors exit with status 1."""
        result = runner.invoke(
            cli, ["run", "read_file", "-r", str(temp_dir), "-a", '{"path": "../x"}']
        )

        assert result.exit_code == 1
        assert "FileAccessDeniedError" in result.output

    def test_run_invalid_json(self, runner, temp_dir):
        """Test that malformed arguments are a usage error."""
        result = runner.invoke(cli, ["run", "read_file", "-r", str(temp_dir), "-a", "{nope"])
        assert result.exit_code == 2

    def test_run_non_object_arguments(self, runner, temp_dir):
        """Test that arguments must be a JSON object."""
        result = runner.invoke(cli, ["run", "read_file", "-r", str(temp_dir), "-a", "[1]"])
        assert result.exit_code == 2

    def test_run_unknown_operation(self, runner, temp_dir):
        """Test that unknown operations are rejected."""
        result = runner.invoke(cli, ["run", "format_disk", "-r", str(temp_dir)])
        assert result.exit_code == 2
