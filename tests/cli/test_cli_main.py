"""Tests for the top-level ``mcpsense`` command group."""

from __future__ import annotations

from click.testing import CliRunner

from mcpsense import __version__
from mcpsense.cli.main import cli


class TestCliGroup:
    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "analyze" in result.output
        assert "apps" in result.output

    def test_verbose_flag_accepted(self) -> None:
        result = CliRunner().invoke(cli, ["-v", "apps", "--help"])
        assert result.exit_code == 0
        assert "validate" in result.output
