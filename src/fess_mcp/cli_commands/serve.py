"""``fess-mcp serve`` — serve MCP over stdin/stdout."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from fess_mcp.cli_commands._output import err_console
from fess_mcp.cli_commands._settings import resolve_settings

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--config", "-c", default=None, envvar="FESS_MCP_CONFIG", type=click.Path(exists=True), help="Settings YAML file."
)
@click.option("--fess-url", default=None, help="Base URL of the Fess server.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging (stderr).")
@click.option("--telemetry", is_flag=True, help="Enable OpenTelemetry tracing.")
@click.option("--otlp-endpoint", default=None, help="OTLP/gRPC endpoint for exported spans.")
def serve(
    config: str | None,
    fess_url: str | None,
    verbose: bool,
    telemetry: bool,
    otlp_endpoint: str | None,
) -> None:
    """Serve newline-delimited JSON-RPC requests from stdin."""
    from fess_mcp.protocol.dispatcher import McpDispatcher
    from fess_mcp.search.fess_client import FessClient
    from fess_mcp.server import StdioServer

    # stdout carries the protocol; everything else goes to stderr.
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = resolve_settings(config, fess_url)
    except Exception as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    if telemetry:
        from fess_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                service_name=settings.server_name,
                service_version=settings.server_version,
                export_to_stderr=verbose,
                otlp_endpoint=otlp_endpoint,
            )
        except ImportError as exc:
            logger.warning("Telemetry disabled: %s", exc)

    async def _serve() -> int:
        async with FessClient(settings) as backend:
            dispatcher = McpDispatcher(backend, settings)
            return await StdioServer(dispatcher, sys.stdin, sys.stdout).serve()

    logger.info("Serving MCP over stdio (Fess: %s)", settings.fess_url)
    handled = asyncio.run(_serve())
    logger.info("stdin closed after %d request(s)", handled)
