"""Registry management commands."""

import click
from rich.console import Console
from rich.table import Table

from plugin_index.cli.error_boundary import cli_error_boundary
from plugin_index.cli.output import user_output
from plugin_index.core.context import PluginIndexContext
from plugin_index.core.location import Location
from plugin_index.core.response import ResponseCode
from plugin_index.core.types import RegistryState

_STATE_STYLES = {
    RegistryState.FETCHED: "[green]fetched[/green]",
    RegistryState.FETCH_FAILED: "[red]fetch failed[/red]",
    RegistryState.REGISTERED: "[yellow]registered[/yellow]",
}


def _report_fetch_state(ctx: PluginIndexContext, location: Location) -> None:
    wrapper = ctx.catalogue.get_registry(location)
    if wrapper is None:
        user_output(
            click.style("⚠ ", fg="yellow")
            + f"Could not fetch {location}. It stays configured and will be retried."
        )
        return
    count = len(wrapper.registry.modules)
    user_output(click.style("✓ ", fg="green") + f"{wrapper.name}: {count} module(s)")


@click.group("registry")
def registry_group() -> None:
    """Manage the registries plugins are discovered from."""


@registry_group.command("list")
@click.pass_obj
def list_cmd(ctx: PluginIndexContext) -> None:
    """List configured registries and whether they could be fetched."""
    locations = ctx.catalogue.locations()
    if not locations:
        user_output("No registries configured.")
        user_output("Run 'plugin-index registry add LOCATION' to add one.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("name", style="cyan", no_wrap=True)
    table.add_column("state", no_wrap=True)
    table.add_column("modules", justify="right", no_wrap=True)
    table.add_column("location", no_wrap=True)

    for location in locations:
        wrapper = ctx.catalogue.get_registry(location)
        state_cell = _STATE_STYLES.get(ctx.catalogue.state_of(location), "-")
        if wrapper is None:
            table.add_row("[dim]-[/dim]", state_cell, "[dim]-[/dim]", location.uri)
        else:
            module_count = str(len(wrapper.registry.modules))
            table.add_row(wrapper.name, state_cell, module_count, location.uri)

    # Output table to stderr (consistent with user_output convention)
    console = Console(stderr=True, width=200, force_terminal=True)
    console.print(table)


@registry_group.command("add")
@click.argument("location")
@click.pass_obj
@cli_error_boundary
def add_cmd(ctx: PluginIndexContext, location: str) -> None:
    """Add a registry by URL or path to its registry.xml."""
    loc = Location.parse(location)
    code = ctx.catalogue.add_registry(loc)
    if code == ResponseCode.REGISTRY_ALREADY_PRESENT:
        user_output(click.style("Error: ", fg="red") + f"Registry already present: {loc}")
        raise SystemExit(1)

    user_output(f"Added registry {loc}")
    _report_fetch_state(ctx, loc)


@registry_group.command("remove")
@click.argument("location")
@click.pass_obj
@cli_error_boundary
def remove_cmd(ctx: PluginIndexContext, location: str) -> None:
    """Remove a registry."""
    loc = Location.parse(location)
    code = ctx.catalogue.remove_registry(loc)
    if code == ResponseCode.REGISTRY_NOT_FOUND:
        user_output(click.style("Error: ", fg="red") + f"Registry not found: {loc}")
        raise SystemExit(1)

    user_output(click.style("✓ ", fg="green") + f"Removed registry {loc}")


@registry_group.command("refresh")
@click.argument("location", required=False)
@click.pass_obj
@cli_error_boundary
def refresh_cmd(ctx: PluginIndexContext, location: str | None) -> None:
    """Fetch registries again.

    With LOCATION, only that registry is fetched; otherwise all of them.
    """
    if location is None:
        ctx.catalogue.initialize()
        fetched = len(ctx.catalogue.list_registries())
        total = len(ctx.catalogue.locations())
        user_output(f"Fetched {fetched} of {total} registries")
        return

    loc = Location.parse(location)
    code = ctx.catalogue.fetch_registry(loc)
    if code == ResponseCode.REGISTRY_NOT_FOUND:
        user_output(click.style("Error: ", fg="red") + f"Registry not found: {loc}")
        raise SystemExit(1)
    _report_fetch_state(ctx, loc)
