"""
Configuration for the sandboxed filesystem tool.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SandboxConfig(BaseModel):
    """
    Sandbox configuration for LLM filesystem access.

    Every operation is confined to ``root_dir``. The instance is frozen;
    reconfiguring the tool builds a new config rather than mutating this one.

    Usage:
        config = SandboxConfig(root_dir=Path("/tmp/workspace"))
        config = config.replace(allow_overwrite_by_default=True)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    root_dir: Path = Field(
        description="Absolute sandbox root (resolved, symlinks followed)",
    )

    allow_overwrite_by_default: bool = Field(
        default=False,
        description="Overwrite existing files without explicit consent",
    )

    max_file_size_bytes: int = Field(
        default=10_000_000,  # 10 MB
        ge=0,
        description="Maximum file size that can be read or edited (bytes)",
    )

    max_search_results: int = Field(
        default=50,
        ge=1,
        le=10000,
        description="Maximum number of search matches to return",
    )

    max_line_length: int = Field(
        default=200,
        ge=4,
        description="Search result lines longer than this are truncated",
    )

    diff_context_lines: int = Field(
        default=3,
        ge=0,
        le=20,
        description="Unchanged lines shown around each diff hunk",
    )

    encoding: str = Field(
        default="utf-8",
        description="Text encoding used for reads and writes",
    )

    @field_validator("root_dir", mode="before")
    @classmethod
    def resolve_root(cls, v):
        """Expand ``~`` and require an absolute root."""
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"root_dir must be an absolute path: {v}")
        return path.resolve()

    def replace(self, **changes) -> "SandboxConfig":
        """Return a new validated config with ``changes`` applied."""
        data = self.model_dump()
        data.update(changes)
        return SandboxConfig(**data)

    def __repr__(self) -> str:
        return (
            f"SandboxConfig("
            f"root_dir={str(self.root_dir)!r}, "
            f"allow_overwrite={self.allow_overwrite_by_default})"
        )
