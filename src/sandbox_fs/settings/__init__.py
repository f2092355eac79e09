"""
Settings for Sandbox FS.

Settings are read from ``SANDBOX_FS_*`` environment variables and can be
loaded from or saved to YAML/JSON files.

Example:
    ```python
    from sandbox_fs.settings import SandboxSettings
    from sandbox_fs import SandboxedFileTool

    # Load settings from file
    settings = SandboxSettings.from_file("~/.sandbox-fs/config.yaml")

    # Build the tool
    tool = SandboxedFileTool(settings.to_sandbox_config())
    ```
"""

from sandbox_fs.settings.config import SandboxSettings

__all__ = ["SandboxSettings"]
