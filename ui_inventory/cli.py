"""CLI entry point for the UI inventory engine."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ui_inventory.aggregation.inventory import (
    captures_for_component,
    derive_component_captures,
    derive_component_inventory,
    derive_related_components_for_style,
    derive_style_locations,
    pick_representative_capture,
    unique_by_url,
)
from ui_inventory.catalog.styles import derive_style_inventory, find_style
from ui_inventory.essentials.evidence import derive_capture_visual_essentials
from ui_inventory.essentials.formatter import group_rows_by_section
from ui_inventory.essentials.token_trace import trace_hint
from ui_inventory.models.capture import CaptureRecord
from ui_inventory.models.config import InventoryConfig
from ui_inventory.models.viewer import ComponentOverride
from ui_inventory.store import load_captures, load_overrides
from ui_inventory.url_utils import hostname_label

console = Console()

DEFAULT_CONFIG = "inventory-config.json"


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_config(config: str) -> InventoryConfig:
    # A missing config file means defaults
    try:
        return InventoryConfig.load(config)
    except FileNotFoundError:
        return InventoryConfig()


def _load_inputs(
    config: str, captures_path: Optional[str]
) -> tuple[InventoryConfig, list[CaptureRecord], dict[str, ComponentOverride]]:
    cfg = _load_config(config)
    path = captures_path or cfg.captures_path
    try:
        captures, overrides = load_captures(path)
        if cfg.overrides_path:
            overrides = {**overrides, **load_overrides(cfg.overrides_path)}
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    return cfg, captures, overrides


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """UI Inventory: components and design-token styles from captured elements"""
    setup_logging(verbose)


@cli.command()
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
@click.option("--captures", "captures_path", default=None, help="Captures JSON file (overrides config)")
def components(config: str, captures_path: Optional[str]) -> None:
    """List components grouped by component key."""
    cfg, captures, overrides = _load_inputs(config, captures_path)
    inventory = derive_component_inventory(captures, overrides)
    if not inventory:
        console.print("[yellow]No components found[/yellow]")
        return

    table = Table(title=f"Components ({len(inventory)})")
    table.add_column("Key", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Category")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Source")
    table.add_column("Captures", justify="right")
    for component in inventory[: cfg.table_limit]:
        table.add_row(
            component.id,
            component.name,
            component.category,
            component.type,
            component.status,
            component.source,
            str(component.captures_count),
        )
    console.print(table)


@cli.command()
@click.option("--kind", "-k", default=None, help="Only show one kind (color, typography, spacing, border, shadow)")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
@click.option("--captures", "captures_path", default=None, help="Captures JSON file (overrides config)")
def styles(kind: Optional[str], config: str, captures_path: Optional[str]) -> None:
    """List deduplicated styles with usage counts."""
    cfg, captures, _ = _load_inputs(config, captures_path)
    inventory = derive_style_inventory(captures)
    if kind:
        inventory = [s for s in inventory if s.kind == kind]
    if not inventory:
        console.print("[yellow]No styles found[/yellow]")
        return

    table = Table(title=f"Styles ({len(inventory)})")
    table.add_column("Id", style="dim")
    table.add_column("Token")
    table.add_column("Value", style="bold")
    table.add_column("Kind")
    table.add_column("Uses", justify="right")
    table.add_column("Source")
    for style in inventory[: cfg.table_limit]:
        table.add_row(style.id, style.token, style.value, style.kind, str(style.usage_count), style.source)
    console.print(table)


@cli.command()
@click.argument("component_key")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
@click.option("--captures", "captures_path", default=None, help="Captures JSON file (overrides config)")
def show(component_key: str, config: str, captures_path: Optional[str]) -> None:
    """Show the visual essentials and sources of one component."""
    cfg, captures, _ = _load_inputs(config, captures_path)
    representative = pick_representative_capture(captures_for_component(component_key, captures))
    if representative is None:
        console.print(f"[yellow]No captures found for {component_key}[/yellow]")
        return

    essentials = derive_capture_visual_essentials(representative, cfg.token_trace_max_depth)
    console.print(f"[bold]{component_key}[/bold] (representative capture {representative.id})")
    if not essentials.rows:
        console.print("[yellow]No visual essentials[/yellow]")
    for section, rows in group_rows_by_section(essentials.rows):
        table = Table(title=section, show_header=False)
        table.add_column("Property", style="bold")
        table.add_column("Value")
        table.add_column("Evidence", style="dim")
        for row in rows:
            table.add_row(row.label, row.value, trace_hint(row.trace, row.authored_value) or "")
        console.print(table)

    if essentials.evidence is not None and essentials.evidence.note:
        console.print(f"[yellow]{essentials.evidence.note}[/yellow]")

    sources = unique_by_url(derive_component_captures(component_key, captures))
    console.print(f"\n[bold]Source ({len(sources)})[/bold]")
    for capture in sources:
        console.print(f"  {hostname_label(capture.url)}  [blue]{capture.url}[/blue]")


@cli.command()
@click.argument("style_id")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
@click.option("--captures", "captures_path", default=None, help="Captures JSON file (overrides config)")
def style(style_id: str, config: str, captures_path: Optional[str]) -> None:
    """Show where a style is used and by which components."""
    _, captures, overrides = _load_inputs(config, captures_path)
    all_styles = derive_style_inventory(captures)
    selected = find_style(style_id, all_styles)
    if selected is None:
        console.print(f"[yellow]Unknown style: {style_id}[/yellow]")
        return

    console.print(f"[bold]{selected.token}[/bold] {selected.value} ({selected.kind}, {selected.usage_count} uses)")

    locations = derive_style_locations(style_id, captures, all_styles)
    console.print(f"\n[bold]Locations ({len(locations)})[/bold]")
    if not locations:
        console.print("  No locations found")
    for location in locations:
        console.print(f"  {location.source_label}  {location.uses} uses  [blue]{location.url}[/blue]")

    all_components = derive_component_inventory(captures, overrides)
    related = derive_related_components_for_style(style_id, captures, all_components, all_styles)
    console.print(f"\n[bold]Related components ({len(related)})[/bold]")
    if not related:
        console.print("  No related components")
    for component in related:
        console.print(f"  {component.name}  [dim]{component.category} • {component.type}[/dim]")


@cli.command()
@click.option("--captures", "captures_path", prompt="Captures JSON file", help="Captures export to read")
def init(captures_path: str) -> None:
    """Create a default configuration file."""
    config_path = Path(DEFAULT_CONFIG)
    if config_path.exists():
        if not click.confirm(f"{DEFAULT_CONFIG} already exists. Overwrite?"):
            return

    cfg = InventoryConfig(captures_path=captures_path)
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nYou can now run:")
    console.print("  [blue]ui-inventory components[/blue]")


if __name__ == "__main__":
    cli()
