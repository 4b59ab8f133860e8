"""Shared test helpers for building application profile entries."""

from __future__ import annotations

from typing import Any


def profile_entry(app_id: str = "test-app", **overrides: Any) -> dict[str, Any]:
    """Build a minimal valid profile entry in the registry data-file format."""
    entry: dict[str, Any] = {
        "id": app_id,
        "name": "Test App",
        "bundle_id": "com.test.app",
        "config_path": "~/test/config.json",
        "config_format": "Json",
        "config_structure": "DirectMcpServers",
        "detection_strategy": {
            "use_bundle_lookup": True,
            "use_executable_check": True,
            "use_config_check": True,
            "use_spotlight": False,
            "priority_order": ["BundleLookup"],
        },
        "metadata": {"developer": "Test Developer", "category": {"Other": "Test"}},
    }
    entry.update(overrides)
    return entry
