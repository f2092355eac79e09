"""
Request and result models for the sandboxed filesystem operations.

Requests form a closed discriminated union (``FileSystemRequest``) keyed on
``operation``. Results serialize with the wire names LLM tool callers expect
(``fileExists``, ``isDirectory``, ...) and drop unset optional fields.
"""

from typing import Annotated, Any, Literal, Optional, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

EntryType = Literal["file", "directory"]


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


class EditOperation(BaseModel):
    """A single text replacement applied by ``edit_file``."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    old_text: str = Field(alias="oldText", description="Text to search for")
    new_text: str = Field(alias="newText", description="Text to replace with")


class DirectoryEntry(BaseModel):
    """Entry of a directory listing; ``name`` is relative to the sandbox root."""

    name: str
    type: EntryType


class DirectoryTreeEntry(BaseModel):
    """Recursive tree node; directories always carry ``children``."""

    name: str
    type: EntryType
    children: Optional[list["DirectoryTreeEntry"]] = None


class FileSearchResult(BaseModel):
    """One matching line from ``search_codebase``."""

    file: str
    line_number: int
    line_content: str


class SkippedEntry(BaseModel):
    """An entry a best-effort walk could not inspect, and why."""

    path: str
    reason: str


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class OperationRequest(BaseModel):
    """Base for all operation requests."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class CreateDirectoryRequest(OperationRequest):
    operation: Literal["create_directory"] = "create_directory"
    path: str


class WriteFileRequest(OperationRequest):
    operation: Literal["write_file"] = "write_file"
    path: str
    content: str
    allow_overwrite: Optional[bool] = Field(default=None, alias="allowOverwrite")


class EditFileRequest(OperationRequest):
    operation: Literal["edit_file"] = "edit_file"
    path: str
    edits: list[EditOperation]
    dry_run: bool = Field(default=False, alias="dryRun")
    allow_overwrite: Optional[bool] = Field(default=None, alias="allowOverwrite")


class MoveFileRequest(OperationRequest):
    operation: Literal["move_file"] = "move_file"
    source: str
    destination: str


class ReadFileRequest(OperationRequest):
    operation: Literal["read_file"] = "read_file"
    path: str


class ReadMultipleFilesRequest(OperationRequest):
    operation: Literal["read_multiple_files"] = "read_multiple_files"
    paths: list[str]


class DeleteFileRequest(OperationRequest):
    operation: Literal["delete_file"] = "delete_file"
    path: str


class DeleteDirectoryRequest(OperationRequest):
    operation: Literal["delete_directory"] = "delete_directory"
    path: str


class ListDirectoryRequest(OperationRequest):
    operation: Literal["list_directory"] = "list_directory"
    path: str = "."


class DirectoryTreeRequest(OperationRequest):
    operation: Literal["get_directory_tree"] = "get_directory_tree"
    path: str = "."


class GetFileInfoRequest(OperationRequest):
    operation: Literal["get_file_info"] = "get_file_info"
    path: str


class SearchCodebaseRequest(OperationRequest):
    operation: Literal["search_codebase"] = "search_codebase"
    query: str
    recursive: bool = False


class FindFilesRequest(OperationRequest):
    operation: Literal["find_files"] = "find_files"
    pattern: str
    recursive: bool = True
    exclude: list[str] = Field(default_factory=list)


FileSystemRequest = Annotated[
    Union[
        CreateDirectoryRequest,
        WriteFileRequest,
        EditFileRequest,
        MoveFileRequest,
        ReadFileRequest,
        ReadMultipleFilesRequest,
        DeleteFileRequest,
        DeleteDirectoryRequest,
        ListDirectoryRequest,
        DirectoryTreeRequest,
        GetFileInfoRequest,
        SearchCodebaseRequest,
        FindFilesRequest,
    ],
    Field(discriminator="operation"),
]

_request_adapter: TypeAdapter = TypeAdapter(FileSystemRequest)

REQUEST_TYPES: dict[str, type[OperationRequest]] = {
    model.model_fields["operation"].default: model
    for model in get_args(get_args(FileSystemRequest)[0])
}

OPERATION_NAMES: tuple[str, ...] = tuple(REQUEST_TYPES)


def parse_request(operation: str, arguments: Optional[dict[str, Any]] = None):
    """
    Build a typed request from an operation name and flat arguments.

    Raises:
        pydantic.ValidationError: If the arguments don't fit the operation
    """
    data = dict(arguments or {})
    data["operation"] = operation
    return _request_adapter.validate_python(data)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class OperationResult(BaseModel):
    """
    Base for all operation results.

    ``error``/``error_type`` are only set when the façade converted an
    exception into a result.
    """

    model_config = ConfigDict(populate_by_name=True)

    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def from_exception(cls, exc: BaseException, unexpected: bool = False) -> "OperationResult":
        if unexpected:
            data: dict[str, Any] = {
                "error": f"Unexpected error: {exc}",
                "error_type": "UnexpectedError",
            }
        else:
            data = {"error": str(exc), "error_type": type(exc).__name__}
        if "success" in cls.model_fields:
            data["success"] = False
        if "message" in cls.model_fields:
            data["message"] = data["error"]
        return cls(**data)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CreateDirectoryResult(OperationResult):
    success: bool = False


class WriteFileResult(OperationResult):
    success: bool = False
    content: str = ""
    message: str = ""
    file_exists: Optional[bool] = Field(default=None, alias="fileExists")
    existing_content: Optional[str] = Field(default=None, alias="existingContent")
    diff: Optional[str] = None


class EditFileResult(OperationResult):
    success: bool = False
    diff: Optional[str] = None
    file_exists: Optional[bool] = Field(default=None, alias="fileExists")
    existing_content: Optional[str] = Field(default=None, alias="existingContent")
    message: str = ""


class MoveFileResult(OperationResult):
    success: bool = False
    message: str = ""


class ReadFileResult(OperationResult):
    content: str = ""


class ReadMultipleFilesResult(OperationResult):
    content: str = ""


class DeleteFileResult(OperationResult):
    success: bool = False


class DeleteDirectoryResult(OperationResult):
    success: bool = False


class ListDirectoryResult(OperationResult):
    entries: list[DirectoryEntry] = Field(default_factory=list)


class DirectoryTreeResult(OperationResult):
    tree: str = ""
    skipped: list[SkippedEntry] = Field(default_factory=list)


class GetFileInfoResult(OperationResult):
    size: Optional[int] = None
    created: Optional[str] = None
    modified: Optional[str] = None
    accessed: Optional[str] = None
    is_directory: Optional[bool] = Field(default=None, alias="isDirectory")
    is_file: Optional[bool] = Field(default=None, alias="isFile")
    permissions: Optional[str] = None
    path: Optional[str] = None


class SearchCodebaseResult(OperationResult):
    results: list[FileSearchResult] = Field(default_factory=list)
    skipped: list[SkippedEntry] = Field(default_factory=list)


class FindFilesResult(OperationResult):
    files: list[str] = Field(default_factory=list)
    skipped: list[SkippedEntry] = Field(default_factory=list)


RESULT_TYPES: dict[str, type[OperationResult]] = {
    "create_directory": CreateDirectoryResult,
    "write_file": WriteFileResult,
    "edit_file": EditFileResult,
    "move_file": MoveFileResult,
    "read_file": ReadFileResult,
    "read_multiple_files": ReadMultipleFilesResult,
    "delete_file": DeleteFileResult,
    "delete_directory": DeleteDirectoryResult,
    "list_directory": ListDirectoryResult,
    "get_directory_tree": DirectoryTreeResult,
    "get_file_info": GetFileInfoResult,
    "search_codebase": SearchCodebaseResult,
    "find_files": FindFilesResult,
}
