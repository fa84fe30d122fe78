# /jsxbuild/cli/ascii.py
# Banner and summary panels for the build CLI.

from rich.panel import Panel
from rich.table import Table

from jsxbuild.cli.controller import canvas


def show_banner():
    canvas.console.print(Panel(
        "[bold]JSX Pre-Compiler[/bold]\n"
        "Compiles the embedded text/babel block once, instead of on every page load.",
        title="[bright_blue]jsxbuild[/]",
        border_style="bright_blue",
    ))


def show_build_summary(result):
    table = Table(title="Build summary", show_header=False, box=None)
    table.add_column("Item", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")
    table.add_row("JSX payload", f"{result.payload_size:,} characters")
    table.add_row("Compiled JS", f"{result.compiled_size:,} characters")
    table.add_row("Original document", f"{result.original_size:,} characters")
    table.add_row("Compiled document", f"{result.output_size:,} characters")
    table.add_row("Backup", f"{result.backup_path} ({'created' if result.backup_created else 'reused'})")
    table.add_row("Patches", ", ".join(result.patches_applied) or "none")
    canvas.console.print(table)

    canvas.console.print(Panel(
        "[green]Build Complete! ✓[/green]\n\n"
        f"For development: [yellow]jsxbuild restore[/yellow]\n"
        f"After changes:   edit [yellow]{result.backup_path.name}[/yellow], then run [yellow]jsxbuild[/yellow]",
        border_style="green",
    ))
