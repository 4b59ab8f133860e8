"""``mcpsense apps``: inspect the MCP host application registry.

Subcommands:
    list       Table of known applications, optionally by category.
    show       One application's profile.
    validate   Check a host config file against the app's declared structure.
               Each server entry is also checked for a command or url.
    export     Write the registry in the external data-file format.

By default the registry is auto-loaded (``MCPSENSE_REGISTRY_FILE``, the
development paths, the user config dir, then built-in defaults).
``--registry PATH`` loads exactly that file instead.

Exit Codes:
    0 -- Success.
    1 -- Unknown application, unreadable file, structure mismatch or a
         server entry without a command or url.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import NoReturn

import click

from mcpsense.cli.output import (
    console,
    print_profile_detail,
    print_profiles,
    print_server_entries,
)
from mcpsense.exceptions import McpSenseError
from mcpsense.profiles import (
    ApplicationCategory,
    ApplicationProfile,
    ApplicationRegistry,
    get_mcp_servers_path,
    servers_in,
    validate_config_structure,
)
from mcpsense.profiles.documents import read_config_document


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {message}", highlight=False)
    sys.exit(1)


def _require_profile(registry: ApplicationRegistry, app_id: str) -> ApplicationProfile:
    profile = registry.get_application(app_id)
    if profile is None:
        _fail(f"Unknown application: {app_id}")
    return profile


@click.group("apps")
@click.option(
    "--registry", "registry_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Load this registry data file instead of auto-loading.",
)
@click.pass_context
def apps_group(ctx: click.Context, registry_path: Path | None) -> None:
    """Inspect MCP host application profiles."""
    if registry_path is not None:
        try:
            registry = ApplicationRegistry.from_json_file(registry_path)
        except McpSenseError as exc:
            _fail(str(exc))
    else:
        registry = ApplicationRegistry.with_auto_load()
    ctx.obj = registry


@apps_group.command("list")
@click.option("--category", default=None, help="Only show this category (e.g. CodeEditor).")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.pass_obj
def list_command(
    registry: ApplicationRegistry, category: str | None, output_format: str
) -> None:
    """List known MCP host applications."""
    if category is None:
        profiles = registry.get_all_applications()
    else:
        profiles = registry.get_applications_by_category(ApplicationCategory.parse(category))
    if output_format == "json":
        click.echo(json.dumps([p.to_dict() for p in profiles], indent=2))
    else:
        print_profiles(profiles)


@apps_group.command("show")
@click.argument("app_id")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.pass_obj
def show_command(registry: ApplicationRegistry, app_id: str, output_format: str) -> None:
    """Show the profile of APP_ID."""
    profile = _require_profile(registry, app_id)
    if output_format == "json":
        click.echo(json.dumps(profile.to_dict(), indent=2))
    else:
        print_profile_detail(profile)


@apps_group.command("validate")
@click.argument("app_id")
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def validate_command(registry: ApplicationRegistry, app_id: str, config_file: Path) -> None:
    """Check CONFIG_FILE against the structure APP_ID expects.

    Exit code 0 if the structure matches, 1 otherwise.
    """
    profile = _require_profile(registry, app_id)
    try:
        document = read_config_document(config_file, profile.config_format)
    except McpSenseError as exc:
        _fail(str(exc))

    servers_path = ".".join(get_mcp_servers_path(profile))
    console.print(f"Servers path: [bold]{servers_path}[/bold]", highlight=False)

    result = validate_config_structure(profile, document)
    if not result:
        console.print(f"[bold red]MISMATCH[/bold red] {result.reason}", highlight=False)
        sys.exit(1)

    servers = servers_in(document, profile)
    console.print(
        f"[bold green]OK[/bold green] {len(servers)} server(s) configured",
        highlight=False,
    )
    invalid = print_server_entries(servers)
    if invalid:
        _fail(f"{invalid} server entry(ies) need a command or url")


@apps_group.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def export_command(registry: ApplicationRegistry, path: Path) -> None:
    """Write the registry to PATH as an applications.json data file."""
    registry.write(path)
    console.print(f"Wrote {len(registry)} applications to {path}", highlight=False)
