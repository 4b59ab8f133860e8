"""Rich output formatting helpers for the mcpsense CLI.

Confidence Color Mapping:
    >= 0.7 green, >= 0.4 yellow, otherwise red.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mcpsense.analysis import AnalysisResult
from mcpsense.analysis.structure import (
    detect_transport,
    extract_capabilities,
    validate_server_entry,
)
from mcpsense.profiles import ApplicationProfile

_CONFIDENCE_STYLES: tuple[tuple[float, str], ...] = (
    (0.7, "bold green"),
    (0.4, "yellow"),
    (0.0, "red"),
)

console = Console()


def confidence_style(confidence: float) -> str:
    """Return the Rich style string for a confidence score."""
    for threshold, style in _CONFIDENCE_STYLES:
        if confidence >= threshold:
            return style
    return "red"


def print_analysis_result(result: AnalysisResult) -> None:
    """Print an inferred configuration with its confidence and messages.

    Args:
        result: The outcome of one ``ServerAnalyzer.analyze`` run.
    """
    config = result.config
    if result.success:
        verdict = Text("OK", style="bold green")
    else:
        verdict = Text("FAILED", style="bold red")
    header = Text.assemble(
        ("Server: ", "bold"), (config.name, ""),
        ("  Status: ", "bold"), verdict,
        ("  Confidence: ", "bold"),
        (f"{result.confidence:.2f}", confidence_style(result.confidence)),
    )
    console.print(Panel(header, title="Analysis Result"))

    if result.success:
        console.print(f"  Command:   [bold]{' '.join([config.command, *config.args])}[/bold]")
        console.print(f"  Transport: {config.transport.value}")
        if config.install_command:
            console.print(f"  Install:   {config.install_command}")
        if config.description:
            console.print(f"  About:     {config.description}")
        if config.docs_url:
            console.print(f"  Docs:      {config.docs_url}")

    if config.env:
        env_table = Table(title="Environment Variables", show_header=True)
        env_table.add_column("Name", style="bold")
        env_table.add_column("Required", justify="center")
        env_table.add_column("Default / Example", style="dim")
        env_table.add_column("Description")
        for name, spec in sorted(config.env.items()):
            required = Text("yes", style="bold red") if spec.required else Text("no", style="dim")
            env_table.add_row(
                name, required, spec.default or spec.example or "-", spec.description or ""
            )
        console.print(env_table)

    if result.messages:
        console.print("[bold]Messages:[/bold]")
        for message in result.messages:
            style = "red" if message.startswith("Error") else "dim"
            console.print(f"  - {message}", style=style, markup=False)


def print_profiles(profiles: list[ApplicationProfile]) -> None:
    """Print a summary table of application profiles."""
    if not profiles:
        console.print("[dim]No applications found.[/dim]")
        return

    table = Table(title="MCP Host Applications", show_header=True, header_style="bold")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Structure")
    table.add_column("Developer", style="dim")
    for profile in profiles:
        table.add_row(
            profile.id,
            profile.name,
            str(profile.metadata.category),
            str(profile.config_structure),
            profile.metadata.developer,
        )
    console.print(table)
    console.print(f"[bold]{len(profiles)}[/bold] applications")


def print_profile_detail(profile: ApplicationProfile) -> None:
    """Print every field of one application profile."""
    header = Text.assemble(
        ("Application: ", "bold"), (profile.name, ""),
        ("  ID: ", "bold"), (profile.id, "dim"),
    )
    console.print(Panel(header, title="Application Profile"))

    meta = profile.metadata
    rows: list[tuple[str, str]] = [
        ("Bundle ID", profile.bundle_id),
        ("Developer", meta.developer),
        ("Category", str(meta.category)),
        ("Config format", str(profile.config_format)),
        ("Config structure", str(profile.config_structure)),
        ("MCP version", meta.mcp_version),
        ("Detection order", ", ".join(
            m.value for m in profile.detection_strategy.enabled_methods()
        ) or "-"),
    ]
    if meta.notes:
        rows.append(("Notes", meta.notes))
    if meta.config_docs_url:
        rows.append(("Config docs", meta.config_docs_url))

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for label, value in rows:
        table.add_row(label, value)
    console.print(table)

    paths = Table(title="Config Paths", show_header=True)
    paths.add_column("Path")
    paths.add_column("Exists", justify="center")
    for path in profile.expanded_config_paths():
        exists = Text("yes", style="green") if path.exists() else Text("no", style="dim")
        paths.add_row(str(path), exists)
    console.print(paths)



def print_server_entries(servers: dict[str, Any]) -> int:
    """Print one line per configured server entry.

    Returns:
        The number of entries that fail ``validate_server_entry``.
    """
    invalid = 0
    for name, entry in sorted(servers.items()):
        if not validate_server_entry(entry):
            invalid += 1
            console.print(f"  - {escape(name)}: [red]invalid entry[/red]", highlight=False)
            continue
        line = f"  - {escape(name)} ({detect_transport(entry).value})"
        capabilities = extract_capabilities(entry)
        if capabilities:
            line += f" [dim]{', '.join(capabilities)}[/dim]"
        console.print(line, highlight=False)
    return invalid
