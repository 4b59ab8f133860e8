"""Property-based tests for registry serialization.

Exporting a registry and loading the export must reproduce every profile.
"""
from __future__ import annotations

import json

from hypothesis import given
from hypothesis import strategies as st

from mcpsense.profiles import ApplicationProfile, ApplicationRegistry

ids = st.from_regex(r"[a-z][a-z0-9-]{1,15}", fullmatch=True)
paths = st.from_regex(r"~/[a-z]{1,8}/[a-z]{1,8}\.json", fullmatch=True)
structures = st.sampled_from(
    ["DirectMcpServers", "NestedMcpServers", {"Custom": "servers[]"}]
)
formats = st.sampled_from(["Json", "Yaml", "Toml", "Plist", {"Custom": "ini"}])
categories = st.sampled_from(
    ["IDE", "CodeEditor", "ChatClient", "Terminal", {"Other": "Browser"}]
)
methods = st.lists(
    st.sampled_from(["BundleLookup", "ExecutableCheck", "ConfigCheck", "SpotlightSearch"]),
    unique=True,
)


@st.composite
def profiles(draw: st.DrawFn, app_id: str) -> ApplicationProfile:
    return ApplicationProfile.from_dict(
        {
            "id": app_id,
            "name": draw(st.text(min_size=1, max_size=20)),
            "bundle_id": f"com.example.{app_id}",
            "config_path": draw(paths),
            "alt_config_paths": draw(st.lists(paths, max_size=3)),
            "config_format": draw(formats),
            "config_structure": draw(structures),
            "executable_paths": draw(st.lists(paths, max_size=2)),
            "detection_strategy": {
                "use_bundle_lookup": draw(st.booleans()),
                "use_executable_check": draw(st.booleans()),
                "use_config_check": draw(st.booleans()),
                "use_spotlight": draw(st.booleans()),
                "priority_order": draw(methods),
            },
            "metadata": {
                "developer": draw(st.text(min_size=1, max_size=20)),
                "category": draw(categories),
                "release_year": draw(st.none() | st.integers(1990, 2030)),
                "requires_permissions": draw(st.booleans()),
            },
        }
    )


@st.composite
def registries(draw: st.DrawFn) -> ApplicationRegistry:
    app_ids = draw(st.lists(ids, max_size=6, unique=True))
    return ApplicationRegistry([draw(profiles(app_id)) for app_id in app_ids])


class TestRegistryRoundTrip:
    @given(registry=registries())
    def test_export_then_load(self, registry: ApplicationRegistry) -> None:
        reloaded = ApplicationRegistry.from_dict(json.loads(registry.to_json()))
        assert reloaded.get_all_applications() == registry.get_all_applications()
        assert reloaded.metadata.version == registry.metadata.version
        assert reloaded.metadata.application_count == len(registry)

    @given(registry=registries())
    def test_count_matches_map(self, registry: ApplicationRegistry) -> None:
        assert registry.metadata.application_count == len(registry.application_ids())
