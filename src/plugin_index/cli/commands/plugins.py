"""Plugin listing commands."""

import json

import click
from rich.console import Console
from rich.table import Table

from plugin_index.cli.error_boundary import cli_error_boundary
from plugin_index.cli.output import machine_output, user_output
from plugin_index.core.context import PluginIndexContext
from plugin_index.core.location import Location
from plugin_index.core.types import PackagedPlugin, RegistryWrapper


def _plugin_to_dict(plugin: PackagedPlugin) -> dict[str, object]:
    text = plugin.description.for_language()
    return {
        "artifact_id": plugin.artifact_id,
        "group_id": plugin.metadata.group_id,
        "release": plugin.release,
        "versions": list(plugin.metadata.versioning.versions),
        "name": text.name,
        "short_description": text.short_description,
        "registry": plugin.parent_registry.uri,
        "description_location": plugin.description_location.uri,
    }


@click.group("plugins")
def plugins_group() -> None:
    """Browse plugins offered by configured registries."""


@plugins_group.command("list")
@click.option("--registry", "registry_location", help="Only list plugins from this registry.")
@click.option("--refresh", is_flag=True, help="Resolve again instead of using cached results.")
@click.option("--json", "as_json", is_flag=True, help="Print plugins as JSON to stdout.")
@click.pass_obj
@cli_error_boundary
def list_cmd(
    ctx: PluginIndexContext, registry_location: str | None, refresh: bool, as_json: bool
) -> None:
    """List plugins available in the configured registries."""
    registries: list[RegistryWrapper]
    if registry_location is not None:
        loc = Location.parse(registry_location)
        wrapper = ctx.catalogue.get_registry(loc)
        if wrapper is None:
            user_output(click.style("Error: ", fg="red") + f"Registry not available: {loc}")
            raise SystemExit(1)
        registries = [wrapper]
    else:
        registries = ctx.catalogue.list_registries()

    plugins: list[PackagedPlugin] = []
    for wrapper in registries:
        resolved = ctx.resolver.refresh(wrapper) if refresh else ctx.resolver.modules_of(wrapper)
        plugins.extend(resolved or [])

    if as_json:
        machine_output(json.dumps([_plugin_to_dict(p) for p in plugins], indent=2))
        return

    if not plugins:
        user_output("No plugins found.")
        return

    show_files = ctx.settings.show_install_files

    table = Table(show_header=True, header_style="bold")
    table.add_column("artifact", style="cyan", no_wrap=True)
    table.add_column("release", no_wrap=True)
    table.add_column("name", no_wrap=True)
    table.add_column("versions", no_wrap=True)
    if show_files:
        table.add_column("description", no_wrap=True)

    for plugin in plugins:
        row = [
            plugin.artifact_id,
            plugin.release,
            plugin.description.for_language().name,
            ", ".join(plugin.metadata.versioning.versions),
        ]
        if show_files:
            row.append(plugin.description_location.uri)
        table.add_row(*row)

    console = Console(stderr=True, width=200, force_terminal=True)
    console.print(table)
