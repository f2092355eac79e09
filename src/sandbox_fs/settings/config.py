"""
Sandbox FS settings.

This module provides settings management for the sandbox: root directory,
overwrite policy, limits and log level, read from environment variables
or a YAML/JSON file.
"""

import json
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sandbox_fs.filesystem.config import SandboxConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SandboxSettings(BaseSettings):
    """
    Sandbox settings.

    Environment variables:
        SANDBOX_FS_ROOT_DIR - Sandbox root directory
        SANDBOX_FS_ALLOW_OVERWRITE - Overwrite existing files by default
        SANDBOX_FS_MAX_FILE_SIZE_BYTES - Maximum readable/editable file size
        SANDBOX_FS_MAX_SEARCH_RESULTS - Maximum search matches
        SANDBOX_FS_LOG_LEVEL - Logging level

    Example:
        ```python
        settings = SandboxSettings(root_dir="/tmp/workspace")
        tool = SandboxedFileTool(settings.to_sandbox_config())
        ```
    """

    model_config = SettingsConfigDict(env_prefix="SANDBOX_FS_", extra="forbid")

    root_dir: Path = Field(
        default_factory=Path.cwd,
        description="Sandbox root directory (defaults to the current directory)",
    )
    allow_overwrite: bool = Field(
        default=False,
        description="Overwrite existing files without explicit consent",
    )
    max_file_size_bytes: int = Field(
        default=10_000_000,
        ge=0,
        description="Maximum file size that can be read or edited (bytes)",
    )
    max_search_results: int = Field(
        default=50,
        ge=1,
        le=10000,
        description="Maximum number of search matches to return",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case and check the log level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SandboxSettings":
        """
        Load settings from a YAML or JSON file.

        File format (YAML):
            ```yaml
            root_dir: /srv/workspace
            allow_overwrite: false
            max_search_results: 100
            log_level: DEBUG
            ```

        Args:
            path: Path to settings file

        Returns:
            Loaded SandboxSettings instance

        Raises:
            FileNotFoundError: If the settings file doesn't exist
        """
        path = Path(path).expanduser().resolve()

        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        content = path.read_text()

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        elif path.suffix == ".json":
            data = json.loads(content)
        else:
            # Try YAML first, then JSON
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError:
                data = json.loads(content)

        return cls(**(data or {}))

    def to_dict(self) -> dict[str, Any]:
        """
        Export settings to a dictionary.

        Returns:
            Dictionary representation (paths as strings)
        """
        return self.model_dump(mode="json")

    def save(self, path: Union[str, Path], format: str = "yaml") -> None:
        """
        Save settings to a file.

        Args:
            path: Output file path
            format: Output format ('yaml' or 'json')
        """
        path = Path(path).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.to_dict()

        if format == "yaml":
            content = yaml.dump(data, default_flow_style=False, sort_keys=False)
        else:
            content = json.dumps(data, indent=2)

        path.write_text(content)

    def to_sandbox_config(self) -> SandboxConfig:
        """Build the frozen :class:`SandboxConfig` for the tool."""
        return SandboxConfig(
            root_dir=self.root_dir.expanduser().resolve(),
            allow_overwrite_by_default=self.allow_overwrite,
            max_file_size_bytes=self.max_file_size_bytes,
            max_search_results=self.max_search_results,
        )
