"""``mcpsense analyze <source>``: infer a server configuration.

SOURCE is an npm package name (``foo``, ``@scope/foo``), a local package
directory, or a GitHub repository URL. ``--format entry`` prints a ready
to paste ``mcpServers`` block for a host config file.

Exit Codes:
    0 -- A configuration was inferred.
    1 -- The source could not be resolved or yielded no command.
"""

from __future__ import annotations

import asyncio
import json
import sys

import click

from mcpsense.analysis import ServerAnalyzer
from mcpsense.cli.output import print_analysis_result


@click.command("analyze")
@click.argument("source")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json", "entry"]),
    default="text",
    help="Output format: text, json, or a host config entry (default: text).",
)
def analyze_command(source: str, output_format: str) -> None:
    """Infer a runnable configuration for the MCP server at SOURCE.

    Examples:

        mcpsense analyze @modelcontextprotocol/server-filesystem

        mcpsense analyze ./servers/weather --format json

        mcpsense analyze weather-server --format entry
    """
    result = asyncio.run(ServerAnalyzer().analyze(source))

    if output_format == "entry":
        entry = {"mcpServers": {result.config.name: result.config.to_server_entry()}}
        click.echo(json.dumps(entry, indent=2))
    elif output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        print_analysis_result(result)

    sys.exit(0 if result.success else 1)
