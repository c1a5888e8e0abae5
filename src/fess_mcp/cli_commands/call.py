"""``fess-mcp call`` — send a single JSON-RPC request and print the response."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any

import click

from fess_mcp.cli_commands._output import console
from fess_mcp.cli_commands._settings import resolve_settings


@click.command()
@click.argument("method")
@click.option("--params", "-p", default="{}", help="JSON object of method params.")
@click.option("--id", "request_id", default="1", help="JSON-RPC request id.")
@click.option(
    "--config", "-c", default=None, envvar="FESS_MCP_CONFIG", type=click.Path(exists=True), help="Settings YAML file."
)
@click.option("--fess-url", default=None, help="Base URL of the Fess server.")
def call(method: str, params: str, request_id: str, config: str | None, fess_url: str | None) -> None:
    """Dispatch METHOD (e.g. tools/call) against the configured Fess server."""
    from fess_mcp.protocol.dispatcher import McpDispatcher
    from fess_mcp.search.fess_client import FessClient

    try:
        parsed_params: Any = json.loads(params)
    except ValueError as exc:
        console.print(f"[red]Invalid --params JSON:[/red] {exc}")
        sys.exit(1)

    try:
        settings = resolve_settings(config, fess_url)
    except Exception as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    body = json.dumps({"jsonrpc": "2.0", "id": request_id, "method": method, "params": parsed_params})

    async def _call() -> str:
        async with FessClient(settings) as backend:
            return await McpDispatcher(backend, settings).handle(body)

    response = asyncio.run(_call())
    console.print_json(response)
    if "error" in json.loads(response):
        sys.exit(1)
