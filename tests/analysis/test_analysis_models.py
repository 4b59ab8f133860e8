"""Tests for the analysis data models."""

from __future__ import annotations

import json

from mcpsense.analysis.models import (
    AnalysisResult,
    DetectedConfig,
    EnvVarSpec,
    TransportType,
)


class TestTransportType:
    def test_parse_known(self) -> None:
        assert TransportType.parse(" SSE ") is TransportType.SSE

    def test_parse_unknown_falls_back(self) -> None:
        assert TransportType.parse("carrier-pigeon") is TransportType.STDIO
        assert TransportType.parse(None) is TransportType.STDIO


class TestDetectedConfig:
    def test_defaults(self) -> None:
        config = DetectedConfig()
        assert config.name == "unknown"
        assert config.command == ""
        assert config.transport is TransportType.STDIO

    def test_required_env_sorted(self) -> None:
        config = DetectedConfig(
            env={
                "B": EnvVarSpec(name="B", required=True),
                "A": EnvVarSpec(name="A", required=True),
                "C": EnvVarSpec(name="C"),
            }
        )
        assert config.required_env == ["A", "B"]

    def test_server_entry(self) -> None:
        config = DetectedConfig(
            command="npx",
            args=["-y", "foo"],
            env={
                "WITH_DEFAULT": EnvVarSpec(name="WITH_DEFAULT", default="d", example="e"),
                "WITH_EXAMPLE": EnvVarSpec(name="WITH_EXAMPLE", example="e"),
                "EMPTY": EnvVarSpec(name="EMPTY", required=True),
            },
        )
        assert config.to_server_entry() == {
            "command": "npx",
            "args": ["-y", "foo"],
            "env": {"EMPTY": "", "WITH_DEFAULT": "d", "WITH_EXAMPLE": "e"},
        }

    def test_server_entry_non_stdio_type(self) -> None:
        entry = DetectedConfig(command="node", transport=TransportType.SSE).to_server_entry()
        assert entry["type"] == "sse"
        assert "env" not in entry


class TestAnalysisResult:
    def test_to_dict_is_json_serializable(self) -> None:
        result = AnalysisResult(
            config=DetectedConfig(command="npx", env={"K": EnvVarSpec(name="K")}),
            confidence=0.5,
            messages=("Parsed package.json",),
        )
        data = json.loads(json.dumps(result.to_dict()))
        assert data["config"]["transport"] == "stdio"
        assert data["config"]["env"]["K"]["required"] is False
        assert data["messages"] == ["Parsed package.json"]
        assert data["success"] is True
