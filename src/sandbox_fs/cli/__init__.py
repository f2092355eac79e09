"""
CLI module for sandbox-fs.

Provides a command-line interface for listing and running sandboxed
file operations.
"""

from sandbox_fs.cli.main import cli

__all__ = ["cli"]
