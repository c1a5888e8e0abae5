"""Command-line entrypoint for the fess-mcp server."""

from __future__ import annotations

import click

from fess_mcp import __version__


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="fess-mcp")
def main() -> None:
    """Expose a Fess search server over the Model Context Protocol.

    Settings come from a YAML file (--config or FESS_MCP_CONFIG) or from
    FESS_MCP_* environment variables such as FESS_MCP_FESS_URL.
    """


from fess_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
