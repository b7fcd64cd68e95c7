"""Output helpers with clear intent.

user_output writes human-facing messages to stderr; machine_output writes
data meant for pipes and scripts to stdout.
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a user-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Write machine-readable output to stdout."""
    click.echo(message, nl=nl)
