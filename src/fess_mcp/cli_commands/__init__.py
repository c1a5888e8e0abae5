"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from fess_mcp.cli_commands.call import call
    from fess_mcp.cli_commands.catalog import prompts, resources, tools
    from fess_mcp.cli_commands.serve import serve

    cli.add_command(serve)
    cli.add_command(call)
    cli.add_command(tools)
    cli.add_command(resources)
    cli.add_command(prompts)
