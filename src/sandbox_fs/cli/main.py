"""
CLI for sandbox-fs.

Runs single sandboxed file operations from the shell and prints the tool
definitions handed to LLMs.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from sandbox_fs import __version__
from sandbox_fs.filesystem.models import OPERATION_NAMES
from sandbox_fs.filesystem.tools import SandboxedFileTool
from sandbox_fs.settings.config import SandboxSettings

# Load environment variables
load_dotenv()

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False, level: str = "INFO") -> None:
    """Setup rich logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


def load_settings(
    config_file: Optional[str],
    root: Optional[str] = None,
    allow_overwrite: Optional[bool] = None,
) -> SandboxSettings:
    """Build settings from file (or environment), then apply command-line overrides."""
    try:
        settings = SandboxSettings.from_file(config_file) if config_file else SandboxSettings()
    except (ValueError, OSError) as e:
        err_console.print(f"[bold red]Invalid settings:[/bold red] {e}")
        sys.exit(1)

    updates = {}
    if root is not None:
        updates["root_dir"] = Path(root)
    if allow_overwrite is not None:
        updates["allow_overwrite"] = allow_overwrite
    return settings.model_copy(update=updates)


@click.group()
@click.version_option(version=__version__)
def cli():
    """Sandbox FS CLI - sandboxed file operations for LLM agents."""
    pass


@cli.command()
@click.option(
    "--openai",
    is_flag=True,
    default=False,
    help="Wrap definitions in OpenAI function calling format",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Settings file (YAML or JSON)",
)
def tools(openai: bool, config_file: Optional[str]):
    """
    Print the tool definitions as JSON.

    Examples:

        # Provider-neutral definitions
        sandbox-fs tools

        # OpenAI function calling schemas
        sandbox-fs tools --openai
    """
    settings = load_settings(config_file)
    tool = SandboxedFileTool(settings.to_sandbox_config())
    definitions = tool.get_tool_definitions() if openai else tool.get_tools()
    console.print_json(data=definitions)


@cli.command()
@click.option(
    "--root",
    "-r",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Sandbox root directory",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Settings file (YAML or JSON)",
)
def info(root: Optional[str], config_file: Optional[str]):
    """Show the effective sandbox configuration."""
    settings = load_settings(config_file, root=root)
    tool = SandboxedFileTool(settings.to_sandbox_config())
    summary = tool.get_summary()

    table = Table(title="Sandbox")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in summary.items():
        if isinstance(value, list):
            value = ", ".join(value)
        table.add_row(key, str(value))
    console.print(table)


@cli.command()
@click.argument("operation", type=click.Choice(OPERATION_NAMES))
@click.option(
    "--args",
    "-a",
    "arguments",
    default="{}",
    help="Operation arguments as a JSON object",
)
@click.option(
    "--root",
    "-r",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Sandbox root directory (defaults to the current directory)",
)
@click.option(
    "--allow-overwrite/--no-allow-overwrite",
    default=None,
    help="Override the default overwrite policy",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Settings file (YAML or JSON)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def run(
    operation: str,
    arguments: str,
    root: Optional[str],
    allow_overwrite: Optional[bool],
    config_file: Optional[str],
    verbose: bool,
):
    """
    Run a single file operation inside the sandbox.

    Prints the result as JSON; exits with status 1 if the result carries
    an error.

    Examples:

        # Read a file
        sandbox-fs run read_file -a '{"path": "README.md"}'

        # Write into another root
        sandbox-fs run write_file -r /tmp/ws -a '{"path": "a.txt", "content": "hi"}'

        # Preview an edit
        sandbox-fs run edit_file -a '{"path": "a.txt", "dryRun": true,
            "edits": [{"oldText": "hi", "newText": "hello"}]}'
    """
    try:
        parsed = json.loads(arguments)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Not valid JSON: {e}", param_hint="--args")
    if not isinstance(parsed, dict):
        raise click.BadParameter("Must be a JSON object", param_hint="--args")

    settings = load_settings(config_file, root=root, allow_overwrite=allow_overwrite)
    setup_logging(verbose, settings.log_level)

    tool = SandboxedFileTool(settings.to_sandbox_config())
    result = asyncio.run(tool.execute(operation, parsed))

    console.print_json(data=result)
    if "error" in result:
        sys.exit(1)


if __name__ == "__main__":
    cli()
