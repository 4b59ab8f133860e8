"""Compiled-in default application profiles.

The table below uses exactly the external data-file encoding, so the
built-in registry is loaded through the same ``ApplicationProfile.from_dict``
path as an ``applications.json`` file. Entries cover the MCP hosts known as
of this release; a user registry file replaces the whole table.

Platform Notes:
    Primary config paths are the macOS locations. Linux ``~/.config``
    locations are listed as alternates.
"""

from __future__ import annotations

from typing import Any

DEFAULT_REGISTRY_VERSION: str = "1.0.0"

_BUNDLE_FIRST: dict[str, Any] = {
    "use_bundle_lookup": True,
    "use_executable_check": True,
    "use_config_check": True,
    "use_spotlight": True,
    "priority_order": ["BundleLookup", "ExecutableCheck", "ConfigCheck"],
}


def _jetbrains(
    app_id: str,
    name: str,
    bundle_id: str,
    config_dir: str,
    extra_config_dirs: list[str],
    executables: list[str],
    language: str,
) -> dict[str, Any]:
    """Build a JetBrains IDE profile; they differ only in names and paths."""
    return {
        "id": app_id,
        "name": name,
        "bundle_id": bundle_id,
        "config_path": f"~/Library/Application Support/JetBrains/{config_dir}/mcp_settings.json",
        "alt_config_paths": [
            f"~/.config/JetBrains/{config_dir}/mcp_settings.json",
            *(
                f"~/Library/Application Support/JetBrains/{d}/mcp_settings.json"
                for d in extra_config_dirs
            ),
        ],
        "config_format": "Json",
        "config_structure": "NestedMcpServers",
        "executable_paths": [executables[0]],
        "alt_executable_paths": executables[1:],
        "detection_strategy": _BUNDLE_FIRST,
        "metadata": {
            "developer": "JetBrains",
            "category": "IDE",
            "notes": f"{language} IDE with MCP plugin support",
        },
    }


DEFAULT_PROFILES: list[dict[str, Any]] = [
    # -- Chat clients and CLIs --
    {
        "id": "claude-desktop",
        "name": "Claude Desktop",
        "bundle_id": "com.anthropic.claude",
        "config_path": "~/Library/Application Support/Claude/claude_desktop_config.json",
        "alt_config_paths": ["~/.config/claude/claude_desktop_config.json"],
        "config_format": "Json",
        "config_structure": "DirectMcpServers",
        "executable_paths": ["/Applications/Claude.app"],
        "alt_executable_paths": ["~/Applications/Claude.app"],
        "detection_strategy": _BUNDLE_FIRST,
        "metadata": {
            "developer": "Anthropic",
            "category": "ChatClient",
            "notes": "Primary MCP client from Anthropic",
        },
    },
    {
        "id": "claude-code",
        "name": "Claude Code",
        "bundle_id": "com.anthropic.claude-code",
        "config_path": "~/.claude/config.json",
        "alt_config_paths": [
            "~/.config/claude-code/config.json",
            "~/Library/Application Support/Claude Code/config.json",
        ],
        "config_format": "Json",
        "config_structure": "DirectMcpServers",
        "executable_paths": ["/usr/local/bin/claude", "/opt/homebrew/bin/claude"],
        "alt_executable_paths": ["~/.local/bin/claude", "/usr/bin/claude"],
        "detection_strategy": {
            "use_bundle_lookup": False,
            "use_executable_check": True,
            "use_config_check": True,
            "use_spotlight": False,
            "priority_order": ["ConfigCheck", "ExecutableCheck"],
        },
        "metadata": {
            "developer": "Anthropic",
            "category": "CodeEditor",
            "notes": "Claude's official CLI tool with MCP support",
        },
    },
    # -- Editors --
    {
        "id": "cursor",
        "name": "Cursor",
        "bundle_id": "com.cursor.Cursor",
        "config_path": "~/Library/Application Support/Cursor/User/settings.json",
        "alt_config_paths": [
            "~/.config/cursor/settings.json",
            "~/Library/Application Support/Cursor/User/globalStorage/settings.json",
        ],
        "config_format": "Json",
        "config_structure": "NestedMcpServers",
        "executable_paths": ["/Applications/Cursor.app"],
        "alt_executable_paths": ["~/Applications/Cursor.app", "/usr/local/bin/cursor"],
        "detection_strategy": _BUNDLE_FIRST,
        "metadata": {
            "developer": "Cursor Team",
            "category": "CodeEditor",
            "notes": "AI-powered code editor with MCP support",
        },
    },
    {
        "id": "zed",
        "name": "Zed",
        "bundle_id": "dev.zed.Zed",
        "config_path": "~/Library/Application Support/Zed/settings.json",
        "alt_config_paths": ["~/.config/zed/settings.json"],
        "config_format": "Json",
        "config_structure": "DirectMcpServers",
        "executable_paths": ["/Applications/Zed.app"],
        "alt_executable_paths": ["~/Applications/Zed.app", "/usr/local/bin/zed"],
        "detection_strategy": _BUNDLE_FIRST,
        "metadata": {
            "developer": "Zed Industries",
            "category": "CodeEditor",
            "notes": "High-performance collaborative code editor",
        },
    },
    {
        "id": "vscode",
        "name": "Visual Studio Code",
        "bundle_id": "com.microsoft.VSCode",
        "config_path": "~/Library/Application Support/Code/User/settings.json",
        "alt_config_paths": [
            "~/.config/Code/User/settings.json",
            "~/Library/Application Support/Code - Insiders/User/settings.json",
        ],
        "config_format": "Json",
        "config_structure": "DirectMcpServers",
        "executable_paths": ["/Applications/Visual Studio Code.app"],
        "alt_executable_paths": [
            "~/Applications/Visual Studio Code.app",
            "/usr/local/bin/code",
            "/Applications/Visual Studio Code - Insiders.app",
        ],
        "detection_strategy": _BUNDLE_FIRST,
        "metadata": {
            "developer": "Microsoft",
            "category": "CodeEditor",
            "notes": "Popular code editor with MCP extension support",
        },
    },
    # -- Assistants and IDE plugins --
    {
        "id": "continue-dev",
        "name": "Continue.dev",
        "bundle_id": "dev.continue.continue",
        "config_path": "~/.continue/config.json",
        "alt_config_paths": ["~/Library/Application Support/continue/config.json"],
        "config_format": "Json",
        "config_structure": "DirectMcpServers",
        "executable_paths": ["/Applications/Continue.app"],
        "alt_executable_paths": ["~/Applications/Continue.app"],
        "detection_strategy": {
            "use_bundle_lookup": True,
            "use_executable_check": True,
            "use_config_check": True,
            "use_spotlight": False,
            "priority_order": ["ConfigCheck", "ExecutableCheck", "BundleLookup"],
        },
        "metadata": {
            "developer": "Continue.dev",
            "category": "IDE",
            "notes": "AI coding assistant with MCP integration",
        },
    },
    {
        "id": "amazon-q",
        "name": "Amazon Q Developer",
        "bundle_id": "com.amazon.q.developer",
        "config_path": "~/.aws/amazonq/mcp.json",
        "alt_config_paths": [
            "~/.aws/q/config.json",
            "~/Library/Application Support/Amazon Q/config.json",
        ],
        "config_format": "Json",
        "config_structure": "DirectMcpServers",
        "executable_paths": ["/Applications/Amazon Q.app"],
        "alt_executable_paths": ["~/Applications/Amazon Q.app", "/usr/local/bin/q"],
        "detection_strategy": _BUNDLE_FIRST,
        "metadata": {
            "developer": "Amazon Web Services",
            "category": "IDE",
            "notes": "AWS AI coding assistant with MCP support (global settings only)",
        },
    },
    # -- Terminals --
    {
        "id": "warp",
        "name": "Warp",
        "bundle_id": "dev.warp.Warp-Stable",
        "config_path": "~/.warp/mcp_config.json",
        "alt_config_paths": [
            "~/Library/Application Support/warp/mcp_config.json",
            "~/.config/warp/mcp_config.json",
        ],
        "config_format": "Json",
        "config_structure": "NestedMcpServers",
        "executable_paths": ["/Applications/Warp.app"],
        "alt_executable_paths": ["~/Applications/Warp.app", "/usr/local/bin/warp"],
        "detection_strategy": _BUNDLE_FIRST,
        "metadata": {
            "developer": "Warp",
            "category": "ProductivityTool",
            "notes": "Modern terminal with AI integration and MCP support",
        },
    },
    # -- JetBrains --
    _jetbrains(
        "jetbrains-idea",
        "IntelliJ IDEA",
        "com.jetbrains.intellij",
        "IntelliJIdea",
        ["IdeaIC"],
        [
            "/Applications/IntelliJ IDEA.app",
            "~/Applications/IntelliJ IDEA.app",
            "/Applications/IntelliJ IDEA CE.app",
            "/usr/local/bin/idea",
        ],
        "Java",
    ),
    _jetbrains(
        "jetbrains-phpstorm",
        "PHPStorm",
        "com.jetbrains.phpstorm",
        "PhpStorm",
        [],
        [
            "/Applications/PhpStorm.app",
            "~/Applications/PhpStorm.app",
            "/usr/local/bin/phpstorm",
        ],
        "PHP",
    ),
    _jetbrains(
        "jetbrains-webstorm",
        "WebStorm",
        "com.jetbrains.webstorm",
        "WebStorm",
        [],
        [
            "/Applications/WebStorm.app",
            "~/Applications/WebStorm.app",
            "/usr/local/bin/webstorm",
        ],
        "JavaScript",
    ),
    _jetbrains(
        "jetbrains-pycharm",
        "PyCharm",
        "com.jetbrains.pycharm",
        "PyCharm",
        ["PyCharmCE"],
        [
            "/Applications/PyCharm.app",
            "~/Applications/PyCharm.app",
            "/Applications/PyCharm CE.app",
            "/usr/local/bin/pycharm",
        ],
        "Python",
    ),
]
