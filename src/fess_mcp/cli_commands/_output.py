"""Shared CLI output formatters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Iterable

    from fess_mcp.protocol.models import PromptDef, ResourceDef, ToolDef

console = Console()
err_console = Console(stderr=True)


def print_tools_table(tools: Iterable[ToolDef]) -> None:
    """Pretty-print tool definitions with their parameters."""
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Parameters")
    table.add_column("Description")

    for tool in tools:
        properties = tool.input_schema.get("properties", {})
        required = set(tool.input_schema.get("required", []))
        params = ", ".join(f"{p}*" if p in required else p for p in properties) or "-"
        table.add_row(tool.name, params, _truncate(tool.description))

    console.print(table)


def print_resources_table(resources: Iterable[ResourceDef]) -> None:
    """Pretty-print resource definitions."""
    table = Table(title="Resources")
    table.add_column("URI", style="cyan")
    table.add_column("Name")
    table.add_column("MIME Type")
    table.add_column("Description")

    for resource in resources:
        table.add_row(resource.uri, resource.name, resource.mime_type, _truncate(resource.description))

    console.print(table)


def print_prompts_table(prompts: Iterable[PromptDef]) -> None:
    """Pretty-print prompt templates with their arguments."""
    table = Table(title="Prompts")
    table.add_column("Name", style="cyan")
    table.add_column("Arguments")
    table.add_column("Description")

    for prompt in prompts:
        args = ", ".join(f"{a.name}*" if a.required else a.name for a in prompt.arguments) or "-"
        table.add_row(prompt.name, args, _truncate(prompt.description))

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
