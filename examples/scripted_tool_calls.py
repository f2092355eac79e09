"""
Example: Driving SandboxedFileTool with LLM-style tool calls

This example replays a fixed sequence of tool calls, shaped like the ones an
LLM emits through function calling, against a throwaway sandbox directory.
Swap the scripted list for your model's tool calls to wire it into an agent
loop.
"""

import asyncio
import json
import tempfile
from pathlib import Path

from sandbox_fs import SandboxConfig, SandboxedFileTool

SCRIPTED_CALLS = [
    ("create_directory", {"path": "src/app"}),
    ("write_file", {"path": "src/app/main.py", "content": "def main():\n    print('hi')\n"}),
    ("get_directory_tree", {"path": "."}),
    # Refused: the file exists and allowOverwrite is false
    ("write_file", {"path": "src/app/main.py", "content": "pass\n"}),
    (
        "edit_file",
        {
            "path": "src/app/main.py",
            "edits": [{"oldText": "print('hi')", "newText": "print('hello')"}],
            "dryRun": True,
        },
    ),
    (
        "edit_file",
        {
            "path": "src/app/main.py",
            "edits": [{"oldText": "print('hi')", "newText": "print('hello')"}],
            "allowOverwrite": True,
        },
    ),
    ("search_codebase", {"query": "hello", "recursive": True}),
    # Denied: outside the sandbox
    ("read_file", {"path": "../../etc/passwd"}),
]


async def main():
    with tempfile.TemporaryDirectory() as tmpdir:
        tool = SandboxedFileTool(SandboxConfig(root_dir=Path(tmpdir)))

        print("Available tools:")
        for definition in tool.get_tool_definitions():
            print(f"  - {definition['function']['name']}")

        for name, arguments in SCRIPTED_CALLS:
            print(f"\n>>> {name}({json.dumps(arguments)})")
            result = await tool.execute(name, arguments)
            print(json.dumps(result, indent=2))


if __name__ == "__main__":
    asyncio.run(main())
