"""
JSON-schema tool descriptions for LLM function calling.

These are metadata only; behaviour lives in the handlers.
"""

from typing import Any


def _path_param(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def get_file_system_tools(max_search_results: int = 50) -> list[dict[str, Any]]:
    """
    Get provider-neutral tool descriptions (``name``, ``description``, ``parameters``).

    Args:
        max_search_results: Match cap advertised for search_codebase

    Returns:
        One entry per operation, in a stable order
    """
    return [
        {
            "name": "create_directory",
            "description": "Create a new directory or ensure a directory exists. "
            "Can create multiple nested directories in one operation. If the directory "
            "already exists, this operation will succeed silently. Only works within "
            "the sandbox directory.",
            "parameters": {
                "type": "object",
                "properties": {
                    "path": _path_param("Relative path where the directory should be created"),
                },
                "required": ["path"],
            },
        },
        {
            "name": "get_directory_tree",
            "description": "Get a recursive tree view of files and directories as a JSON "
            "structure. Each entry includes 'name', 'type' (file/directory), and 'children' "
            "for directories. Files have no children array, while directories always have "
            "a children array (which may be empty). Hidden entries are skipped.",
            "parameters": {
                "type": "object",
                "properties": {
                    "path": _path_param("Relative path of the directory to get the tree for"),
                },
                "required": ["path"],
            },
        },
        {
            "name": "write_file",
            "description": "Create a new file or overwrite an existing file with new content. "
            "If the file exists and allowOverwrite is not set, the current content is "
            "returned instead and nothing is written. The parent directory must exist.",
            "parameters": {
                "type": "object",
                "properties": {
                    "path": _path_param("Relative path where the file should be written"),
                    "content": {
                        "type": "string",
                        "description": "Content to write to the file",
                    },
                    "allowOverwrite": {
                        "type": "boolean",
                        "description": "Whether to overwrite the file if it already exists "
                        "(default: false)",
                    },
                },
                "required": ["path", "content"],
            },
        },
        {
            "name": "get_file_info",
            "description": "Retrieve metadata about a file or directory: size, creation "
            "time, last modified time, last access time, permissions and type, without "
            "reading its content.",
            "parameters": {
                "type": "object",
                "properties": {
                    "path": _path_param(
                        "Relative path of the file or directory to get information about"
                    ),
                },
                "required": ["path"],
            },
        },
        {
            "name": "edit_file",
            "description": "Make line-based edits to a text file. Each edit replaces the "
            "first occurrence of oldText with newText; if no exact match exists, lines are "
            "matched ignoring surrounding whitespace. Returns a git-style diff showing the "
            "changes made.",
            "parameters": {
                "type": "object",
                "properties": {
                    "path": _path_param("Relative path of the file to edit"),
                    "edits": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "oldText": {
                                    "type": "string",
                                    "description": "Text to search for - should match exactly",
                                },
                                "newText": {
                                    "type": "string",
                                    "description": "Text to replace with",
                                },
                            },
                            "required": ["oldText", "newText"],
                        },
                        "description": "List of text replacements to make, applied in order",
                    },
                    "dryRun": {
                        "type": "boolean",
                        "description": "Preview changes as a diff without writing "
                        "(default: false)",
                    },
                    "allowOverwrite": {
                        "type": "boolean",
                        "description": "Whether to allow modifying the existing file "
                        "(default: false)",
                    },
                },
                "required": ["path", "edits"],
            },
        },
        {
            "name": "move_file",
            "description": "Move or rename files and directories. If the destination "
            "exists, the operation will fail. Both source and destination must be within "
            "the sandbox directory.",
            "parameters": {
                "type": "object",
                "properties": {
                    "source": _path_param("Relative path of the file or directory to move"),
                    "destination": _path_param(
                        "Relative path where the file or directory should be moved to"
                    ),
                },
                "required": ["source", "destination"],
            },
        },
        {
            "name": "read_file",
            "description": "Read the complete contents of a text file. Use this tool when "
            "you need to examine the contents of a single file.",
            "parameters": {
                "type": "object",
                "properties": {
                    "path": _path_param("Relative path of the file to read"),
                },
                "required": ["path"],
            },
        },
        {
            "name": "read_multiple_files",
            "description": "Read the contents of multiple files at once. Each file's content "
            "is returned with its path as a reference. Failed reads for individual files "
            "won't stop the entire operation.",
            "parameters": {
                "type": "object",
                "properties": {
                    "paths": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Array of relative paths of the files to read",
                    },
                },
                "required": ["paths"],
            },
        },
        {
            "name": "delete_file",
            "description": "Delete a file at the specified path. Will fail if the path "
            "doesn't exist or points to a directory.",
            "parameters": {
                "type": "object",
                "properties": {
                    "path": _path_param("Relative path of the file to delete"),
                },
                "required": ["path"],
            },
        },
        {
            "name": "delete_directory",
            "description": "Delete a directory and all of its contents. Will fail if the "
            "path doesn't exist or points to a file.",
            "parameters": {
                "type": "object",
                "properties": {
                    "path": _path_param("Relative path of the directory to delete"),
                },
                "required": ["path"],
            },
        },
        {
            "name": "list_directory",
            "description": "List the files and directories in a path. Each entry has a "
            "root-relative 'name' and a 'type' of file or directory. Hidden entries are "
            "skipped.",
            "parameters": {
                "type": "object",
                "properties": {
                    "path": _path_param("Relative path of the directory to list"),
                },
                "required": ["path"],
            },
        },
        {
            "name": "search_codebase",
            "description": "Search file contents for a case-insensitive regular expression. "
            "Returns matches with file paths, line numbers, and matching line content "
            f"(at most {max_search_results} matches).",
            "parameters": {
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Regular expression to search for",
                    },
                    "recursive": {
                        "type": "boolean",
                        "description": "Whether to search recursively in subdirectories "
                        "(default: false)",
                    },
                },
                "required": ["query"],
            },
        },
        {
            "name": "find_files",
            "description": "Find files whose name matches a glob pattern. Returns paths "
            "relative to the sandbox root. Exclude patterns are matched against the "
            "relative path.",
            "parameters": {
                "type": "object",
                "properties": {
                    "pattern": {
                        "type": "string",
                        "description": "Glob pattern to match file names against",
                    },
                    "recursive": {
                        "type": "boolean",
                        "description": "Whether to search recursively in subdirectories "
                        "(default: true)",
                    },
                    "exclude": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Glob patterns to exclude from the search",
                    },
                },
                "required": ["pattern"],
            },
        },
    ]
