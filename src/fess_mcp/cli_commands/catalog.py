"""``fess-mcp tools|resources|prompts`` — show the static MCP catalogs."""

from __future__ import annotations

import json

import click

from fess_mcp.cli_commands._output import (
    console,
    print_prompts_table,
    print_resources_table,
    print_tools_table,
)
from fess_mcp.protocol import registry

_FORMAT_OPTION = click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)


@click.command()
@_FORMAT_OPTION
def tools(fmt: str) -> None:
    """List the tools exposed by ``tools/list``."""
    if fmt == "json":
        console.print_json(json.dumps(registry.list_tools()))
        return
    print_tools_table(registry.TOOLS)


@click.command()
@_FORMAT_OPTION
def resources(fmt: str) -> None:
    """List the resources exposed by ``resources/list``."""
    if fmt == "json":
        console.print_json(json.dumps(registry.list_resources()))
        return
    print_resources_table(registry.RESOURCES)


@click.command()
@_FORMAT_OPTION
def prompts(fmt: str) -> None:
    """List the prompts exposed by ``prompts/list``."""
    if fmt == "json":
        console.print_json(json.dumps(registry.list_prompts()))
        return
    print_prompts_table(registry.PROMPTS)
