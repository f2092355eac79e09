"""Tests for sandbox settings."""

import json
import tempfile
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from sandbox_fs.settings import SandboxSettings


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove sandbox variables from the environment."""
    for name in (
        "SANDBOX_FS_ROOT_DIR",
        "SANDBOX_FS_ALLOW_OVERWRITE",
        "SANDBOX_FS_MAX_FILE_SIZE_BYTES",
        "SANDBOX_FS_MAX_SEARCH_RESULTS",
        "SANDBOX_FS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestSandboxSettings:
    """Tests for SandboxSettings."""

    def test_defaults(self):
        """Test default settings."""
        settings = SandboxSettings()
        assert settings.root_dir == Path.cwd()
        assert settings.allow_overwrite is False
        assert settings.max_search_results == 50
        assert settings.log_level == "INFO"

    def test_from_env(self, monkeypatch, temp_dir):
        """Test loading from environment variables."""
        monkeypatch.setenv("SANDBOX_FS_ROOT_DIR", str(temp_dir))
        monkeypatch.setenv("SANDBOX_FS_ALLOW_OVERWRITE", "true")
        monkeypatch.setenv("SANDBOX_FS_MAX_SEARCH_RESULTS", "7")

        settings = SandboxSettings()

        assert settings.root_dir == temp_dir
        assert settings.allow_overwrite is True
        assert settings.max_search_results == 7

    def test_log_level_normalized(self):
        """Test that log levels are upper-cased and checked."""
        assert SandboxSettings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            SandboxSettings(log_level="chatty")

    def test_search_limit_bounds(self):
        """Test that the search limit is validated."""
        with pytest.raises(ValidationError):
            SandboxSettings(max_search_results=0)

    def test_from_yaml_file(self, temp_dir):
        """Test loading from a YAML file."""
        path = temp_dir / "config.yaml"
        path.write_text(
            yaml.dump({"root_dir": str(temp_dir), "allow_overwrite": True, "log_level": "warning"})
        )

        settings = SandboxSettings.from_file(path)

        assert settings.root_dir == temp_dir
        assert settings.allow_overwrite is True
        assert settings.log_level == "WARNING"

    def test_from_json_file(self, temp_dir):
        """Test loading from a JSON file."""
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"root_dir": str(temp_dir), "max_search_results": 3}))

        settings = SandboxSettings.from_file(path)
        assert settings.max_search_results == 3

    def test_from_file_unknown_suffix(self, temp_dir):
        """Test that files without a known suffix are parsed as YAML."""
        path = temp_dir / "sandboxrc"
        path.write_text(f"root_dir: {temp_dir}\nmax_file_size_bytes: 100\n")

        settings = SandboxSettings.from_file(path)
        assert settings.max_file_size_bytes == 100

    def test_from_file_missing(self, temp_dir):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            SandboxSettings.from_file(temp_dir / "missing.yaml")

    def test_from_file_unknown_key(self, temp_dir):
        """Test that unknown keys are rejected."""
        path = temp_dir / "config.yaml"
        path.write_text("bogus: 1\n")

        with pytest.raises(ValidationError):
            SandboxSettings.from_file(path)

    @pytest.mark.parametrize("fmt,suffix", [("yaml", ".yaml"), ("json", ".json")])
    def test_save_and_reload(self, temp_dir, fmt, suffix):
        """Test saving settings and loading them back."""
        settings = SandboxSettings(root_dir=temp_dir, allow_overwrite=True, max_search_results=5)
        path = temp_dir / "out" / f"settings{suffix}"

        settings.save(path, format=fmt)
        loaded = SandboxSettings.from_file(path)

        assert loaded == settings

    def test_to_dict(self, temp_dir):
        """Test exporting to a dictionary."""
        data = SandboxSettings(root_dir=temp_dir).to_dict()

        assert data["root_dir"] == str(temp_dir)
        assert data["allow_overwrite"] is False

    def test_to_sandbox_config(self, temp_dir):
        """Test building the sandbox configuration."""
        settings = SandboxSettings(
            root_dir=temp_dir, allow_overwrite=True, max_file_size_bytes=42
        )

        config = settings.to_sandbox_config()

        assert config.root_dir == temp_dir
        assert config.allow_overwrite_by_default is True
        assert config.max_file_size_bytes == 42
