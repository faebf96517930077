"""Subcommand modules for shiprate.

Provides register_commands() which uses deferred imports to keep
``shiprate --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from shiprate.commands.cache_key import cache_key
    from shiprate.commands.packages import packages
    from shiprate.commands.quote import quote
    from shiprate.commands.services import services

    cli.add_command(packages)
    cli.add_command(cache_key)
    cli.add_command(quote)
    cli.add_command(services)
