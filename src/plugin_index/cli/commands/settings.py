"""Settings commands."""

import click

from plugin_index.cli.error_boundary import cli_error_boundary
from plugin_index.cli.output import machine_output, user_output
from plugin_index.core.context import PluginIndexContext
from plugin_index.core.location import Location

BOOL_SETTINGS = ("verbose_logging", "show_install_files")
SETTING_NAMES = ("download_cache_path", "default_registry", *BOOL_SETTINGS)


@click.group("settings")
def settings_group() -> None:
    """Show or change plugin-index settings."""


@settings_group.command("show")
@click.pass_obj
def show_cmd(ctx: PluginIndexContext) -> None:
    """Print every setting as KEY = VALUE."""
    for key, value in ctx.settings.as_dict().items():
        if isinstance(value, bool):
            value = str(value).lower()
        machine_output(f"{key} = {value}")


@settings_group.command("set")
@click.argument("key", type=click.Choice(SETTING_NAMES))
@click.argument("value")
@click.pass_obj
@cli_error_boundary
def set_cmd(ctx: PluginIndexContext, key: str, value: str) -> None:
    """Change one setting."""
    settings = ctx.settings
    if key in BOOL_SETTINGS:
        try:
            flag = click.BOOL.convert(value, None, None)
        except click.BadParameter:
            raise ValueError(f"{key} expects true or false, got '{value}'") from None
        setattr(settings, key, flag)
    elif key == "default_registry":
        settings.default_registry = Location.parse(value).uri
    else:
        settings.download_cache_path = value

    shown = getattr(settings, key)
    if isinstance(shown, bool):
        shown = str(shown).lower()
    user_output(click.style("✓ ", fg="green") + f"{key} = {shown}")
