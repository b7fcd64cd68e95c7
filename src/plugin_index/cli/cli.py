import logging

import click

from plugin_index.cli.commands.plugins import plugins_group
from plugin_index.cli.commands.registry import registry_group
from plugin_index.cli.commands.settings import settings_group
from plugin_index.core.context import PluginIndexContext, create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(ctx: PluginIndexContext, *, debug: bool) -> None:
    """Configure root logging from the verbose_logging setting.

    No-op when the root logger already has handlers (e.g. under pytest).
    """
    if debug:
        level = logging.DEBUG
    elif ctx.settings.verbose_logging:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="plugin-index")
@click.option("--debug", is_flag=True, help="Log every fetch.")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Discover plugins published in plugin registries."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()
    configure_logging(ctx.obj, debug=debug)


cli.add_command(plugins_group)
cli.add_command(registry_group)
cli.add_command(settings_group)


def main() -> None:
    """CLI entry point used by the `plugin-index` console script."""
    cli()
