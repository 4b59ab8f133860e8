"""mcpsense CLI: infer MCP server configurations and inspect host apps.

Entry point for the ``mcpsense`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    analyze    Infer a runnable configuration for an MCP server package.
    apps       List, show, validate against, and export host app profiles.

Usage::

    mcpsense analyze @modelcontextprotocol/server-github
    mcpsense analyze ./my-server --format json
    mcpsense analyze https://github.com/acme/tool
    mcpsense apps list --category CodeEditor
    mcpsense apps show cursor
    mcpsense apps validate cursor ~/.config/cursor/settings.json
    mcpsense apps export ./applications.json
"""

from __future__ import annotations

import logging

import click

from mcpsense import __version__
from mcpsense.cli.analyze_cmd import analyze_command
from mcpsense.cli.apps_cmd import apps_group

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """mcpsense: configuration inference for MCP servers.

    Work out how to launch an MCP server from its npm package, local
    checkout, or GitHub repository, and check host application config
    files against their known structure.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


cli.add_command(analyze_command)
cli.add_command(apps_group)
