"""
Rich terminal display utilities for CLI.

Provides formatted output using the Rich library for:
- Syntax-highlighted JSON
- Error messages with hints
- Resolved field tree
- Field type table
- Success/failure indicators
"""

import json
from typing import Any, Dict, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from form_guard.resolution.resolver import ResolvedField, to_jsonable
from form_guard.validation import EngineError, format_error_with_context


console = Console()


def print_header(title: str) -> None:
    """Print a formatted header."""
    console.print()
    console.print(f"[bold cyan]{title}[/bold cyan]")
    console.print("=" * len(title))
    console.print()


def print_success(message: str) -> None:
    """Print a success message with checkmark."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message with X mark."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def print_json(data: Any, title: Optional[str] = None) -> None:
    """
    Print JSON data with syntax highlighting.

    Args:
        data: JSON-serializable data or JSON string
        title: Optional title for the panel
    """
    if isinstance(data, str):
        json_str = data
    else:
        json_str = json.dumps(to_jsonable(data), indent=2, ensure_ascii=False)

    syntax = Syntax(json_str, "json", theme="monokai", line_numbers=False)

    if title:
        console.print(Panel(syntax, title=f"[bold]{title}[/bold]", border_style="cyan"))
    else:
        console.print(syntax)


def print_engine_error(error: EngineError) -> None:
    """Print a schema error with location and hint."""
    console.print()
    console.print(Panel(
        format_error_with_context(error),
        title="[bold red]Schema Rejected[/bold red]",
        border_style="red",
    ))
    console.print()


def _describe(resolved: ResolvedField) -> str:
    parts = [
        f"[cyan]{resolved.path}[/cyan]",
        f"[magenta]{resolved.type.value}[/magenta]",
        f"span {resolved.span}",
    ]
    if resolved.value_path != resolved.path:
        parts.append(f"[dim]binds {resolved.value_path}[/dim]")
    if resolved.rules:
        parts.append(f"[yellow]rules: {', '.join(rule.kind.value for rule in resolved.rules)}[/yellow]")
    if resolved.has_initial_value:
        parts.append(f"= {to_jsonable(resolved.initial_value)!r}")
    return "  ".join(parts)


def print_field_tree(fields: Sequence[ResolvedField], title: str = "Resolved Fields") -> None:
    """
    Print the resolved descriptor tree.

    Args:
        fields: Top-level resolved fields
        title: Root label of the tree
    """
    root = Tree(f"[bold cyan]{title}[/bold cyan]")

    def add(branch: Tree, resolved: ResolvedField) -> None:
        node = branch.add(_describe(resolved))
        for child in resolved.children:
            add(node, child)

    for resolved in fields:
        add(root, resolved)

    console.print()
    console.print(root)
    console.print()


def print_initial_values(values: Dict[str, Any]) -> None:
    """Print the flat initial-value mapping as a table."""
    table = Table(title="Initial Values", show_header=True, header_style="bold cyan")
    table.add_column("Binding", style="cyan", width=30)
    table.add_column("Value", style="white")

    for key, value in values.items():
        table.add_row(key, json.dumps(to_jsonable(value), ensure_ascii=False))

    console.print(table)
    console.print()


def print_field_types(rows: Sequence[Dict[str, str]]) -> None:
    """Print the field grammar as a table."""
    table = Table(title="Field Types", show_header=True, header_style="bold cyan")
    table.add_column("Type", style="cyan", width=10)
    table.add_column("Default Value", width=28)
    table.add_column("Attributes", style="dim")

    for row in rows:
        table.add_row(row["type"], row["default"], row["attributes"])

    console.print()
    console.print(table)
    console.print()


def print_separator() -> None:
    """Print a visual separator line."""
    console.print("[dim]" + "─" * 70 + "[/dim]")
